"""Tests for memento.adapters.whisper_transcriber — OpenAI Whisper capture."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from memento.adapters.whisper_transcriber import WhisperTranscriber
from memento.config import settings


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "voice.ogg"
    path.write_bytes(b"OggS fake audio")
    return str(path)


def _make_client(text: str = "", error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    create = AsyncMock(return_value=SimpleNamespace(text=text), side_effect=error)
    client.audio.transcriptions.create = create
    return client


class TestTranscribe:
    @pytest.mark.asyncio
    async def test_returns_stripped_text(self, audio_file):
        client = _make_client("  Call mom tomorrow at 6pm \n")
        transcriber = WhisperTranscriber(client, language="en")

        text = await transcriber.transcribe(audio_file)

        assert text == "Call mom tomorrow at 6pm"
        kwargs = client.audio.transcriptions.create.await_args.kwargs
        assert kwargs["model"] == "whisper-1"
        assert kwargs["language"] == "en"

    @pytest.mark.asyncio
    async def test_api_error_propagates(self, audio_file):
        client = _make_client(error=RuntimeError("rate limited"))
        with pytest.raises(RuntimeError, match="rate limited"):
            await WhisperTranscriber(client).transcribe(audio_file)

    @pytest.mark.asyncio
    async def test_missing_file_propagates(self, tmp_path):
        client = _make_client("unused")
        with pytest.raises(FileNotFoundError):
            await WhisperTranscriber(client).transcribe(str(tmp_path / "nope.ogg"))
        client.audio.transcriptions.create.assert_not_awaited()


class TestFromSettings:
    def test_requires_api_key(self):
        with patch.object(settings, "OPENAI_API_KEY", ""):
            with pytest.raises(RuntimeError):
                WhisperTranscriber.from_settings()

    def test_builds_client(self):
        with patch.object(settings, "OPENAI_API_KEY", "sk-test"), \
             patch("memento.adapters.whisper_transcriber.AsyncOpenAI") as client_cls:
            transcriber = WhisperTranscriber.from_settings()

        client_cls.assert_called_once_with(api_key="sk-test")
        assert isinstance(transcriber, WhisperTranscriber)

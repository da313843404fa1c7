"""
Memento — Whisper Transcriber.

Implements SpeechCapturePort with OpenAI Whisper. Speaking a reminder
is the fastest capture method: the final transcript flows into the same
reminder service as typed text, through the voice parsing path.
"""

from __future__ import annotations

import logging
from pathlib import Path

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


class WhisperTranscriber:
    """OpenAI Whisper implementation of SpeechCapturePort."""

    def __init__(self, client: AsyncOpenAI, language: str = "en") -> None:
        self._client = client
        self._language = language

    @classmethod
    def from_settings(cls) -> WhisperTranscriber:
        from memento.config import settings

        if not settings.OPENAI_API_KEY:
            raise RuntimeError("OPENAI_API_KEY is not set; voice capture is unavailable")
        return cls(
            AsyncOpenAI(api_key=settings.OPENAI_API_KEY),
            language=settings.WHISPER_LANGUAGE,
        )

    async def transcribe(self, file_path: str) -> str:
        """Transcribe one finished recording.

        Args:
            file_path: Path to the audio file (OGG, MP3, M4A, etc.).

        Returns:
            Transcribed text string.

        Raises:
            Exception: If the Whisper API call fails.
        """
        try:
            with open(file_path, "rb") as audio_file:
                response = await self._client.audio.transcriptions.create(
                    model="whisper-1",
                    file=audio_file,
                    language=self._language,
                )
            text = response.text.strip()
            logger.info("Transcribed %d chars from %s", len(text), Path(file_path).name)
            return text
        except Exception as exc:
            logger.error("Whisper transcription failed for %s: %s", file_path, exc)
            raise

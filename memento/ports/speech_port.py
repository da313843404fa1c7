"""Speech ports — abstract interfaces for speech capture and synthesis."""

from __future__ import annotations

from typing import Protocol


class SpeechSynthesizerPort(Protocol):
    """Speaks a message. Fire-and-forget: no result is consumed."""

    async def speak(self, message: str, volume: float) -> None: ...

    async def stop(self) -> None: ...


class SpeechCapturePort(Protocol):
    """Turns one finished recording into its final transcript."""

    async def transcribe(self, file_path: str) -> str: ...

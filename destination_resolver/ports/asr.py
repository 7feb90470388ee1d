"""ASR port - Abstraction for speech-to-text services.

This protocol defines the contract for transcribers, allowing
different implementations (Whisper, etc.) to be used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import TranscriptionResult


class TranscriberPort(Protocol):
    """Port for transcribers.

    Implementation: adapters/asr/whisper_adapter.py
    """

    def transcribe(
        self, audio: bytes, mime_hint: Optional[str] = None
    ) -> TranscriptionResult:
        """Transcribe raw audio bytes to text.

        Args:
            audio: The encoded audio file content.
            mime_hint: MIME type announced by the client, if any.

        Returns:
            TranscriptionResult with the full text.

        Raises:
            ASRError: If transcription fails.
        """
        ...

    @property
    def model_id(self) -> str:
        """Return the model identifier."""
        ...

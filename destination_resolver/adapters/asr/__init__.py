"""ASR adapters - Implementations of TranscriberPort.

Available implementations:
- WhisperTranscriberAdapter: Faster-Whisper based transcription
"""

from .whisper_adapter import WhisperTranscriberAdapter

__all__ = ["WhisperTranscriberAdapter"]

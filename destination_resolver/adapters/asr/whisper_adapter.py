"""Faster-Whisper transcriber adapter.

Transcribes short Hassaniya destination requests from raw audio bytes.
Decoding is primed with the list of canonical destination names so the
model spells them the way the gazetteer does.

The loaded model is kept on the adapter and cached under the device it
actually loaded on, which may be the CPU fallback.
"""

from __future__ import annotations

import io
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from ...config import ASRConfig, get_config
from ...domain.errors import ASRError
from ...domain.models import TranscriptionResult
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache


def build_transcription_prompt(destinations: Sequence[str]) -> str:
    """Build the initial prompt listing the canonical destination names.

    Returns an empty string when there are no destinations.
    """
    if not destinations:
        return ""
    bullets = "\n".join(f"- {name}" for name in destinations)
    return "\n".join(
        [
            "تفريغ قصير باللهجة الحسانية يذكر اسم حي في نواكشوط.",
            "اكتب اسم الحي كما هو في هذه القائمة المعيارية:",
            bullets,
        ]
    )


@dataclass
class WhisperTranscriberAdapter:
    """Faster-Whisper transcriber.

    Implements TranscriberPort.

    Attributes:
        config: ASR configuration
        destinations: Canonical names used to prime decoding
        cache: Cache for model instances
    """

    config: ASRConfig = field(default_factory=lambda: get_config().asr)
    destinations: Sequence[str] = field(default_factory=tuple)
    cache: CachePort[Any] = field(default_factory=lambda: InMemoryCache(name="whisper"))

    _model: Optional[Any] = field(default=None, repr=False)
    _actual_device: str = field(default="", repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _detect_device(self) -> str:
        """Detect available device (cuda or cpu)."""
        try:
            import ctranslate2

            if ctranslate2.get_cuda_device_count() > 0:
                return "cuda"
        except Exception:
            pass
        return "cpu"

    def _load_model(self) -> Any:
        """Load or get the Whisper model.

        The loaded model is kept on the instance, so a CPU fallback is not
        preceded by another failed load on the requested device.
        """
        if self._model is not None:
            return self._model

        model_id = self.config.default_model
        device: str = self.config.device
        if device == "auto":
            device = self._detect_device()
        compute_type = self.config.compute_type if device == "cuda" else "int8"

        cache_key = f"{model_id}:{device}:{compute_type}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            self._model = cached
            self._actual_device = device
            return cached

        from faster_whisper import WhisperModel

        self._logger.info(
            "Loading Whisper model",
            extra={"model": model_id, "device": device, "compute_type": compute_type},
        )
        try:
            model = WhisperModel(model_id, device=device, compute_type=compute_type)
        except Exception as e:
            self._logger.warning(
                "Failed to load on requested device, falling back",
                extra={
                    "error": str(e),
                    "requested_device": device,
                    "fallback_device": self.config.fallback_device,
                },
            )
            device = self.config.fallback_device
            compute_type = self.config.fallback_compute_type
            model = WhisperModel(model_id, device=device, compute_type=compute_type)

        self.cache.set(f"{model_id}:{device}:{compute_type}", model)
        self._model = model
        self._actual_device = device
        return model

    @property
    def prompt(self) -> Optional[str]:
        if not self.config.prompt_with_destinations:
            return None
        return build_transcription_prompt(self.destinations) or None

    def transcribe(
        self, audio: bytes, mime_hint: Optional[str] = None
    ) -> TranscriptionResult:
        """Transcribe raw audio bytes.

        Args:
            audio: Encoded audio content (any container ffmpeg can decode).
            mime_hint: MIME type announced by the client, used for logs.

        Returns:
            TranscriptionResult with the stripped full text.

        Raises:
            ASRError: If the model cannot be loaded or decoding fails.
        """
        start_time = time.time()
        try:
            model = self._load_model()
            segments_iter, info = model.transcribe(
                io.BytesIO(audio),
                language=self.config.language,
                beam_size=self.config.beam_size,
                initial_prompt=self.prompt,
                temperature=0.0,
            )
            text = " ".join(segment.text.strip() for segment in segments_iter).strip()
        except Exception as e:
            self._logger.error(
                "Transcription failed",
                extra={"error": str(e), "mime_hint": mime_hint, "bytes": len(audio)},
            )
            raise ASRError(
                "Transcription failed",
                model_id=self.model_id,
                device=self._actual_device,
                mime_hint=mime_hint,
                cause=e,
            )

        self._logger.info(
            "Transcription complete",
            extra={
                "elapsed_seconds": round(time.time() - start_time, 2),
                "mime_hint": mime_hint,
                "language": info.language,
            },
        )
        return TranscriptionResult(
            text=text,
            language=info.language or "unknown",
            language_probability=info.language_probability or 0.0,
            duration_seconds=info.duration,
        )

    @property
    def model_id(self) -> str:
        return self.config.default_model

    @property
    def device(self) -> str:
        return self._actual_device or "unknown"

"""Destination request service.

Turns a typed transcript or an uploaded audio clip into the response
payload sent back to clients:

    {
        "transcript": "...",
        "normalizedTranscript": "...",
        "destination": null | {id, canonicalName, matchedVariant,
                               lat, lon, confidence, matchedBy},
        "error": null | "<user-facing message>"
    }
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Dict, Optional

from ..config import ASRConfig, get_config
from ..domain.errors import InvalidAudioError
from ..domain.models import DestinationMatch
from ..nlp.normalization import TextNormalizer
from ..ports.asr import TranscriberPort
from ..ports.gazetteer import GazetteerRepositoryPort
from .destination_resolver import DestinationResolverService

NO_MATCH_MESSAGE = "لم نتمكن من تحديد وجهة في نواكشوط. حاول مرة أخرى بالتوضيح."

AUDIO_EXTENSIONS = frozenset(
    {".mp3", ".m4a", ".wav", ".webm", ".ogg", ".flac", ".mp4", ".mpeg"}
)


def destination_payload(match: DestinationMatch) -> Dict[str, Any]:
    """Serialize a match; external places are reported without an id."""
    place = match.place
    return {
        "id": None if place.is_external else place.id,
        "canonicalName": place.canonical_name,
        "matchedVariant": match.matched_variant,
        "lat": place.lat,
        "lon": place.lon,
        "confidence": match.confidence,
        "matchedBy": match.method.value,
    }


def validate_audio(
    audio: Optional[bytes],
    mime_hint: Optional[str],
    filename: Optional[str],
    max_bytes: int,
) -> None:
    """Reject uploads that cannot be a short audio clip.

    Raises:
        InvalidAudioError: If the upload is empty, too large or not audio.
    """
    if not audio:
        raise InvalidAudioError(
            "Audio file is empty", filename=filename, mime_hint=mime_hint
        )
    if len(audio) > max_bytes:
        raise InvalidAudioError(
            f"Audio file is too large ({len(audio)} bytes, max {max_bytes})",
            filename=filename,
            mime_hint=mime_hint,
        )

    is_audio_mime = bool(mime_hint) and mime_hint.lower().startswith("audio/")
    extension = PurePath(filename).suffix.lower() if filename else ""
    if not is_audio_mime and extension not in AUDIO_EXTENSIONS:
        raise InvalidAudioError(
            "Unsupported audio format", filename=filename, mime_hint=mime_hint
        )


@dataclass
class DestinationService:
    """Request-handling layer in front of the resolver.

    Attributes:
        resolver: The destination resolver
        gazetteer_repository: Source of the known places
        transcriber: Optional speech-to-text collaborator
        normalizer: Produces the normalized transcript of the payload
        asr_config: Upload limits
    """

    resolver: DestinationResolverService
    gazetteer_repository: GazetteerRepositoryPort
    transcriber: Optional[TranscriberPort] = None
    normalizer: TextNormalizer = field(default_factory=TextNormalizer)
    asr_config: ASRConfig = field(default_factory=lambda: get_config().asr)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def handle_transcript(self, transcript: str) -> Dict[str, Any]:
        """Resolve a transcript and build the response payload.

        Raises:
            GazetteerError: If the gazetteer cannot be loaded.
        """
        transcript = transcript or ""
        gazetteer = self.gazetteer_repository.load()
        match = self.resolver.resolve(transcript, gazetteer)

        return {
            "transcript": transcript,
            "normalizedTranscript": self.normalizer.normalize(transcript),
            "destination": destination_payload(match) if match else None,
            "error": None if match else NO_MATCH_MESSAGE,
        }

    def handle_audio(
        self,
        audio: bytes,
        mime_hint: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Transcribe an uploaded clip, then resolve the transcript.

        Args:
            audio: Encoded audio content.
            mime_hint: MIME type announced by the client.
            filename: Original file name, used when the MIME type is missing.

        Raises:
            InvalidAudioError: If the upload is not acceptable audio.
            ASRError: If transcription fails.
        """
        validate_audio(audio, mime_hint, filename, self.asr_config.max_audio_bytes)
        if self.transcriber is None:
            raise InvalidAudioError(
                "Audio input is not available", filename=filename, mime_hint=mime_hint
            )

        self._logger.info(
            "Transcribing upload",
            extra={"bytes": len(audio), "mime_hint": mime_hint},
        )
        result = self.transcriber.transcribe(audio, mime_hint=mime_hint)
        return self.handle_transcript(result.text)

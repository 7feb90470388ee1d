"""Typed domain errors for the destination resolver.

All errors inherit from DestinationResolverError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class DestinationResolverError(Exception):
    """Base error for the destination resolver domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ASRError(DestinationResolverError):
    """ASR transcription failed.

    Attributes:
        model_id: The ASR model that failed
        device: The device the model was running on
        mime_hint: MIME type announced for the audio
    """

    model_id: str = ""
    device: str = ""
    mime_hint: Optional[str] = None


@dataclass
class InvalidAudioError(DestinationResolverError):
    """Uploaded audio was empty, too large or not audio at all."""

    filename: Optional[str] = None
    mime_hint: Optional[str] = None


@dataclass
class SemanticMatchError(DestinationResolverError):
    """The semantic matcher could not produce an answer.

    Attributes:
        model: The model that was queried
    """

    model: str = ""


@dataclass
class GeocodingError(DestinationResolverError):
    """Failed to query the external geocoder.

    Attributes:
        query: The query that failed
        is_rate_limited: Whether the failure was due to rate limiting
    """

    query: str = ""
    is_rate_limited: bool = False


@dataclass
class GazetteerError(DestinationResolverError):
    """Gazetteer loading or data integrity error.

    Attributes:
        file_path: Path to the gazetteer file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class ConfigurationError(DestinationResolverError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""

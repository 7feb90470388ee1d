"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ASRError,
    ConfigurationError,
    DestinationResolverError,
    GazetteerError,
    GeocodingError,
    InvalidAudioError,
    SemanticMatchError,
)
from .models import (
    EXTERNAL_PLACE_ID,
    AreaAnchor,
    DestinationMatch,
    Gazetteer,
    GeocodeHit,
    GeoLocation,
    MatchCandidate,
    MatchMethod,
    MatchOutcome,
    MatchStatus,
    Place,
    SemanticMatchResult,
    TranscriptionResult,
)

__all__ = [
    # Models
    "EXTERNAL_PLACE_ID",
    "GeoLocation",
    "Place",
    "Gazetteer",
    "MatchCandidate",
    "DestinationMatch",
    "MatchMethod",
    "MatchStatus",
    "MatchOutcome",
    "SemanticMatchResult",
    "AreaAnchor",
    "GeocodeHit",
    "TranscriptionResult",
    # Errors
    "DestinationResolverError",
    "ASRError",
    "InvalidAudioError",
    "SemanticMatchError",
    "GeocodingError",
    "GazetteerError",
    "ConfigurationError",
]

"""Immutable domain models for the destination resolver.

All models are frozen dataclasses with slots. They have no external
dependencies and represent the core concepts of the resolution
pipeline: places, the gazetteer, match candidates and results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional

# Identifier given to places found outside the closed gazetteer.
EXTERNAL_PLACE_ID = -1


class MatchMethod(str, Enum):
    """Pipeline stage that produced a destination match."""

    LOCAL_FUZZY = "local-fuzzy"
    SEMANTIC_FALLBACK = "semantic-fallback"
    GEOCODING_FALLBACK = "geocoding-fallback"


class MatchStatus(Enum):
    """Outcome of a single matching stage."""

    MATCHED = auto()
    NO_MATCH = auto()
    FAILED = auto()


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )


@dataclass(frozen=True, slots=True)
class Place:
    """A named place with its coordinates and spelling variants.

    Attributes:
        id: Stable identifier, unique within the gazetteer
        canonical_name: Display name
        variants: Alternate spellings (may mix Arabic and Latin script)
        location: GPS coordinates
    """

    id: int
    canonical_name: str
    variants: tuple[str, ...]
    location: GeoLocation

    @property
    def lat(self) -> float:
        return self.location.latitude

    @property
    def lon(self) -> float:
        return self.location.longitude

    @property
    def is_external(self) -> bool:
        """Check if this place comes from outside the gazetteer."""
        return self.id == EXTERNAL_PLACE_ID

    @classmethod
    def external(cls, name: str, location: GeoLocation) -> Place:
        """Build a place found by an open-world search."""
        return cls(
            id=EXTERNAL_PLACE_ID,
            canonical_name=name,
            variants=(name,),
            location=location,
        )


@dataclass(frozen=True, slots=True)
class Gazetteer:
    """The ordered, read-only list of known places."""

    places: tuple[Place, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Place]:
        return iter(self.places)

    def __len__(self) -> int:
        return len(self.places)

    def get(self, place_id: int) -> Optional[Place]:
        """Look up a place by identifier.

        Args:
            place_id: The identifier to look up.

        Returns:
            The place, or None if the identifier is unknown.
        """
        for place in self.places:
            if place.id == place_id:
                return place
        return None

    @property
    def canonical_names(self) -> tuple[str, ...]:
        return tuple(place.canonical_name for place in self.places)


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    """A scored (place, variant) pairing produced during local matching."""

    place: Place
    variant: str
    score: float


@dataclass(frozen=True, slots=True)
class DestinationMatch:
    """Result of a successful destination resolution.

    Attributes:
        place: The resolved place (gazetteer entry or external place)
        matched_variant: The variant string that matched
        confidence: Confidence score in [0, 1]
        method: Stage that produced this match
    """

    place: Place
    matched_variant: str
    confidence: float
    method: MatchMethod

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"Confidence must be between 0 and 1, got {self.confidence}"
            )


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    """What one matching stage returned.

    FAILED and NO_MATCH both let the resolver move on to the next stage,
    but are kept apart so logs and traces can tell them apart.

    Attributes:
        stage: The method tag of the stage that ran
        status: MATCHED, NO_MATCH or FAILED
        match: The accepted match (only when status is MATCHED)
        best_score: Best score seen by the stage, even when rejected
        error: Error text when status is FAILED
    """

    stage: MatchMethod
    status: MatchStatus
    match: Optional[DestinationMatch] = None
    best_score: float = 0.0
    error: Optional[str] = None

    @property
    def is_match(self) -> bool:
        return self.status is MatchStatus.MATCHED and self.match is not None

    @classmethod
    def matched(cls, match: DestinationMatch) -> MatchOutcome:
        return cls(
            stage=match.method,
            status=MatchStatus.MATCHED,
            match=match,
            best_score=match.confidence,
        )

    @classmethod
    def no_match(cls, stage: MatchMethod, best_score: float = 0.0) -> MatchOutcome:
        return cls(stage=stage, status=MatchStatus.NO_MATCH, best_score=best_score)

    @classmethod
    def failed(cls, stage: MatchMethod, error: str) -> MatchOutcome:
        return cls(stage=stage, status=MatchStatus.FAILED, error=error)


@dataclass(frozen=True, slots=True)
class SemanticMatchResult:
    """Answer of the semantic matcher.

    A None place_id with confidence 0 is the "no match" signal.
    """

    place_id: Optional[int] = None
    confidence: float = 0.0
    reasoning: str = ""


@dataclass(frozen=True, slots=True)
class AreaAnchor:
    """The city a geocoding search is restricted to."""

    name: str
    location: GeoLocation
    radius_km: float = 25.0
    country_code: str = ""


@dataclass(frozen=True, slots=True)
class GeocodeHit:
    """Best single result of an external point-of-interest search."""

    name: str
    location: GeoLocation
    address: str = ""


@dataclass(frozen=True, slots=True)
class TranscriptionResult:
    """Result of ASR transcription.

    Attributes:
        text: Complete transcribed text
        language: Detected language code
        language_probability: Confidence in language detection
        duration_seconds: Total audio duration if available
    """

    text: str
    language: str = "ar"
    language_probability: float = 1.0
    duration_seconds: Optional[float] = None

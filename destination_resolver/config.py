"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
matching thresholds, intent phrases, external collaborators (semantic
matcher, geocoder, ASR) and the gazetteer location.

Configuration can be overridden via environment variables:
- NDR_MATCH_LOCAL_THRESHOLD=0.8
- NDR_SEMANTIC_MODEL=gpt-4o-mini
- NDR_GEO_PROVIDER=google
- NDR_ASR_DEVICE=cpu
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.models import AreaAnchor, GeoLocation
from .nlp.normalization import DEFAULT_MAX_SPAN_LENGTH, INTENT_PHRASES


class MatchingConfig(BaseSettings):
    """Thresholds and text rules of the resolution pipeline.

    Environment variables prefixed with NDR_MATCH_.
    """

    model_config = SettingsConfigDict(env_prefix="NDR_MATCH_")

    local_threshold: float = Field(default=0.75, ge=0.0, le=1.0)
    semantic_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    geocoding_confidence: float = Field(default=0.7, ge=0.0, le=1.0)
    max_span_length: int = Field(default=DEFAULT_MAX_SPAN_LENGTH, ge=1)
    intent_phrases: List[str] = Field(default_factory=lambda: list(INTENT_PHRASES))


class SemanticConfig(BaseSettings):
    """Semantic (LLM) fallback configuration.

    Environment variables prefixed with NDR_SEMANTIC_. The API key is
    also read from OPENAI_API_KEY.
    """

    model_config = SettingsConfigDict(
        env_prefix="NDR_SEMANTIC_", populate_by_name=True
    )

    enabled: bool = True
    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("NDR_SEMANTIC_API_KEY", "OPENAI_API_KEY"),
    )
    model: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int = 200
    timeout_seconds: float = 15.0


class GeocodingConfig(BaseSettings):
    """Geocoding fallback configuration.

    Environment variables prefixed with NDR_GEO_.
    """

    model_config = SettingsConfigDict(env_prefix="NDR_GEO_")

    enabled: bool = True
    provider: Literal["nominatim", "google"] = "nominatim"
    api_key: Optional[str] = None
    user_agent: str = "nouakchott-destination-resolver"
    timeout_seconds: int = 10
    rate_limit_delay: float = 1.0
    max_retries: int = 2
    error_wait_seconds: float = 2.0
    cache_ttl_seconds: Optional[float] = 24 * 3600

    anchor_name: str = "Nouakchott, Mauritania"
    anchor_latitude: float = 18.0735
    anchor_longitude: float = -15.9582
    anchor_radius_km: float = 25.0
    country_code: str = "mr"

    @property
    def anchor(self) -> AreaAnchor:
        """The city searches are restricted to."""
        return AreaAnchor(
            name=self.anchor_name,
            location=GeoLocation(self.anchor_latitude, self.anchor_longitude),
            radius_km=self.anchor_radius_km,
            country_code=self.country_code,
        )


class ASRConfig(BaseSettings):
    """ASR-related configuration.

    Environment variables prefixed with NDR_ASR_.
    """

    model_config = SettingsConfigDict(env_prefix="NDR_ASR_")

    default_model: str = "large-v3"
    device: Literal["cuda", "cpu", "auto"] = "auto"
    compute_type: str = "float16"
    fallback_device: str = "cpu"
    fallback_compute_type: str = "int8"
    beam_size: int = 5
    language: Optional[str] = "ar"
    prompt_with_destinations: bool = True
    max_audio_bytes: int = 25 * 1024 * 1024


class GazetteerConfig(BaseSettings):
    """Gazetteer data configuration.

    Environment variables prefixed with NDR_GAZETTEER_.
    """

    model_config = SettingsConfigDict(env_prefix="NDR_GAZETTEER_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent / "data"
    )
    places_file: str = "places.json"

    @property
    def places_path(self) -> Path:
        """Full path to the places JSON file."""
        return self.data_dir / self.places_file


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with NDR_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="NDR_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.matching.local_threshold)
        print(config.gazetteer.places_path)

    Environment variables prefixed with NDR_.
    """

    model_config = SettingsConfigDict(env_prefix="NDR_")

    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    semantic: SemanticConfig = Field(default_factory=SemanticConfig)
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    asr: ASRConfig = Field(default_factory=ASRConfig)
    gazetteer: GazetteerConfig = Field(default_factory=GazetteerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()

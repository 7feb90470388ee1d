"""Dependency injection container.

Ports are bound to factories and built on first resolution. The default
bindings read the matching chain from the application config: the local
stage is always present, the semantic and geocoding stages only when
they are enabled. The Whisper model itself loads on the first audio
request, not when the transcriber is built.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import AppConfig, get_config


@dataclass
class Container:
    """Maps port types to factories.

    Usage:
        container = Container.create_default()
        service = container.resolve(DestinationService)

        # Tests rebind a port before anything resolves it
        container.register(SemanticMatcherPort, lambda: StubMatcher())

    Attributes:
        config: Application configuration used by the default bindings
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[Any, Tuple[Callable[[], Any], bool]] = field(
        default_factory=dict, repr=False
    )
    _instances: Dict[Any, Any] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self, port_type: Any, factory: Callable[[], Any], singleton: bool = True
    ) -> None:
        """Bind a factory to a port, dropping any instance built before."""
        with self._lock:
            self._bindings[port_type] = (factory, singleton)
            self._instances.pop(port_type, None)

    def resolve(self, port_type: Any) -> Any:
        """Build or return the instance bound to a port.

        Raises:
            KeyError: If nothing is bound to the port.
        """
        with self._lock:
            if port_type not in self._bindings:
                raise KeyError(f"Type not registered: {port_type}")
            factory, singleton = self._bindings[port_type]
            if not singleton:
                return factory()
            if port_type not in self._instances:
                self._instances[port_type] = factory()
            return self._instances[port_type]

    def clear_all(self) -> None:
        with self._lock:
            self._bindings.clear()
            self._instances.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with the production adapters bound."""
        from .adapters.asr import WhisperTranscriberAdapter
        from .adapters.cache import InMemoryCache
        from .adapters.gazetteer import JsonGazetteerRepository
        from .adapters.geocoding import GeopyGeocodeSearchAdapter
        from .adapters.matching import (
            GeocodingFallbackMatcher,
            LocalFuzzyMatcher,
            SemanticFallbackMatcher,
        )
        from .adapters.semantic import OpenAISemanticMatcher
        from .nlp.normalization import TextNormalizer
        from .ports.asr import TranscriberPort
        from .ports.gazetteer import GazetteerRepositoryPort
        from .ports.geocoding import GeocodeSearchPort
        from .ports.matching import MatcherPort
        from .ports.semantic import SemanticMatcherPort
        from .services import DestinationResolverService, DestinationService

        config = config or get_config()
        container = cls(config=config)
        matching = config.matching
        normalizer = TextNormalizer(intent_phrases=tuple(matching.intent_phrases))

        container.register(
            GazetteerRepositoryPort, lambda: JsonGazetteerRepository(config.gazetteer)
        )
        container.register(
            SemanticMatcherPort,
            lambda: OpenAISemanticMatcher(
                config.semantic, InMemoryCache(name="openai_client")
            ),
        )
        container.register(
            GeocodeSearchPort,
            lambda: GeopyGeocodeSearchAdapter(
                config.geocoding,
                InMemoryCache(
                    default_ttl_seconds=config.geocoding.cache_ttl_seconds,
                    name="geocode",
                ),
            ),
        )

        def create_transcriber() -> TranscriberPort:
            gazetteer = container.resolve(GazetteerRepositoryPort).load()
            return WhisperTranscriberAdapter(
                config.asr,
                destinations=gazetteer.canonical_names,
                cache=InMemoryCache(name="whisper"),
            )

        def create_matchers() -> List[MatcherPort]:
            chain: List[MatcherPort] = [
                LocalFuzzyMatcher(
                    threshold=matching.local_threshold,
                    max_span_length=matching.max_span_length,
                    normalizer=normalizer,
                )
            ]
            if config.semantic.enabled and config.semantic.api_key:
                chain.append(
                    SemanticFallbackMatcher(
                        container.resolve(SemanticMatcherPort),
                        threshold=matching.semantic_threshold,
                    )
                )
            if config.geocoding.enabled:
                chain.append(
                    GeocodingFallbackMatcher(
                        container.resolve(GeocodeSearchPort),
                        anchor=config.geocoding.anchor,
                        confidence=matching.geocoding_confidence,
                    )
                )
            return chain

        container.register(TranscriberPort, create_transcriber)
        container.register(
            DestinationResolverService,
            lambda: DestinationResolverService(create_matchers()),
        )
        container.register(
            DestinationService,
            lambda: DestinationService(
                resolver=container.resolve(DestinationResolverService),
                gazetteer_repository=container.resolve(GazetteerRepositoryPort),
                transcriber=container.resolve(TranscriberPort),
                normalizer=normalizer,
                asr_config=config.asr,
            ),
        )
        return container


_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Return the process-wide container, creating it on first use."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Forget the process-wide container so the next call rebuilds it."""
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None

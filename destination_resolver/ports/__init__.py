"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the resolution core and external
adapters. They enable dependency injection and make the system testable.
"""

from .asr import TranscriberPort
from .cache import CachePort
from .gazetteer import GazetteerRepositoryPort
from .geocoding import GeocodeSearchPort
from .matching import MatcherPort
from .semantic import SemanticMatcherPort

__all__ = [
    "MatcherPort",
    "SemanticMatcherPort",
    "GeocodeSearchPort",
    "TranscriberPort",
    "GazetteerRepositoryPort",
    "CachePort",
]

"""Services layer - Application orchestration.

Available services:
- DestinationResolverService: Walks the matching chain
- DestinationService: Builds response payloads from text or audio
"""

from .destination_resolver import DestinationResolverService
from .destination_service import NO_MATCH_MESSAGE, DestinationService

__all__ = ["DestinationResolverService", "DestinationService", "NO_MATCH_MESSAGE"]

"""Gazetteer adapters - Implementations of GazetteerRepositoryPort.

Available implementations:
- JsonGazetteerRepository: places loaded from a JSON file
"""

from .json_repository import JsonGazetteerRepository

__all__ = ["JsonGazetteerRepository"]

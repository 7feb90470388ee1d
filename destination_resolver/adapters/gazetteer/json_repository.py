"""JSON gazetteer repository adapter.

Loads the known places from a JSON array of objects:

    {"id": 1, "canonicalName": "...", "variants": ["..."], "lat": 18.0, "lon": -15.9}

The gazetteer is validated and cached on first load, then reused for the
lifetime of the repository.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, List, Optional

from ...config import GazetteerConfig, get_config
from ...domain.errors import GazetteerError
from ...domain.models import EXTERNAL_PLACE_ID, Gazetteer, GeoLocation, Place


@dataclass
class JsonGazetteerRepository:
    """Gazetteer repository that loads from a JSON file.

    Attributes:
        config: Gazetteer configuration (directory, file name)
    """

    config: GazetteerConfig = field(default_factory=lambda: get_config().gazetteer)

    _gazetteer: Optional[Gazetteer] = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> Gazetteer:
        """Load the gazetteer from the configured JSON file.

        Returns:
            The immutable gazetteer.

        Raises:
            GazetteerError: If the file cannot be read or is invalid.
        """
        with self._lock:
            if self._gazetteer is not None:
                return self._gazetteer

            path = self.config.places_path
            self._logger.debug("Loading gazetteer", extra={"path": str(path)})

            try:
                with path.open(encoding="utf-8") as f:
                    raw = json.load(f)
            except (OSError, ValueError) as e:
                raise GazetteerError(
                    f"Failed to read gazetteer: {e}",
                    file_path=str(path),
                    cause=e,
                )

            gazetteer = Gazetteer(places=tuple(self._parse_places(raw)))
            self._gazetteer = gazetteer
            self._logger.info("Gazetteer loaded", extra={"places": len(gazetteer)})
            return gazetteer

    def _parse_places(self, raw: Any) -> List[Place]:
        path = str(self.config.places_path)
        if not isinstance(raw, list):
            raise GazetteerError(
                "Gazetteer must be a JSON array of places", file_path=path
            )

        places: List[Place] = []
        seen_ids: set[int] = set()
        for index, entry in enumerate(raw):
            try:
                place = _parse_place(entry)
            except (KeyError, TypeError, ValueError) as e:
                raise GazetteerError(
                    f"Invalid place at index {index}",
                    file_path=path,
                    cause=e,
                )

            if place.id in seen_ids:
                raise GazetteerError(f"Duplicate place id {place.id}", file_path=path)
            seen_ids.add(place.id)
            places.append(place)

        return places


def _parse_place(entry: Any) -> Place:
    """Build one Place from its JSON object."""
    place_id = entry["id"]
    if isinstance(place_id, bool) or not isinstance(place_id, int):
        raise TypeError(f"id must be an integer, got {place_id!r}")
    if place_id < 0 or place_id == EXTERNAL_PLACE_ID:
        raise ValueError(f"id must be non-negative, got {place_id}")

    name = str(entry["canonicalName"]).strip()
    if not name:
        raise ValueError("canonicalName must not be empty")

    raw_variants = entry["variants"]
    if isinstance(raw_variants, str):
        raise TypeError("variants must be a list of strings")
    variants = tuple(
        dict.fromkeys(str(v).strip() for v in raw_variants if str(v).strip())
    )
    if not variants:
        raise ValueError(f"place {place_id} has no variants")

    return Place(
        id=place_id,
        canonical_name=name,
        variants=variants,
        location=GeoLocation(
            latitude=float(entry["lat"]), longitude=float(entry["lon"])
        ),
    )

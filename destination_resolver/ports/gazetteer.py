"""Gazetteer port - Abstraction for loading the known places."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Gazetteer


class GazetteerRepositoryPort(Protocol):
    """Port for gazetteer repositories.

    Implementation: adapters/gazetteer/json_repository.py

    The gazetteer is loaded once and never reloaded; repeated calls
    return the same instance.
    """

    def load(self) -> Gazetteer:
        """Load the gazetteer.

        Returns:
            The immutable gazetteer.

        Raises:
            GazetteerError: If the data cannot be read or is invalid.
        """
        ...

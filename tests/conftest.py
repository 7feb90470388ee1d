"""Shared fixtures: a small hand-built gazetteer."""

from __future__ import annotations

import pytest

from destination_resolver.domain.models import Gazetteer, GeoLocation, Place


def make_place(place_id, name, variants, lat=18.08, lon=-15.96):
    return Place(
        id=place_id,
        canonical_name=name,
        variants=tuple(variants),
        location=GeoLocation(lat, lon),
    )


@pytest.fixture
def toujounine():
    return make_place(
        1, "توجنين", ["توجنين", "توجونين", "Toujounine"], 18.0693, -15.8886
    )


@pytest.fixture
def tevragh_zeina():
    return make_place(
        4, "تفرغ زينه", ["تفرغ زينه", "تفرغ زينة", "Tevragh Zeina"], 18.1, -15.98
    )


@pytest.fixture
def arafat():
    return make_place(7, "عرفات", ["عرفات", "Arafat"], 18.051, -15.96)


@pytest.fixture
def gazetteer(toujounine, tevragh_zeina, arafat):
    return Gazetteer(places=(toujounine, tevragh_zeina, arafat))


@pytest.fixture
def make_gazetteer():
    """Build a gazetteer from (id, name, variants) tuples."""

    def _make(*entries):
        return Gazetteer(places=tuple(make_place(*entry) for entry in entries))

    return _make

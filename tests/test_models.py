"""Tests for the domain models."""

from __future__ import annotations

import pytest

from destination_resolver.domain.models import (
    EXTERNAL_PLACE_ID,
    DestinationMatch,
    Gazetteer,
    GeoLocation,
    MatchMethod,
    MatchOutcome,
    MatchStatus,
    Place,
)


def test_geolocation_rejects_out_of_range_coordinates():
    with pytest.raises(ValueError):
        GeoLocation(91.0, 0.0)
    with pytest.raises(ValueError):
        GeoLocation(0.0, -181.0)


def test_method_tags():
    assert MatchMethod.LOCAL_FUZZY.value == "local-fuzzy"
    assert MatchMethod.SEMANTIC_FALLBACK.value == "semantic-fallback"
    assert MatchMethod.GEOCODING_FALLBACK.value == "geocoding-fallback"


def test_external_place_uses_sentinel_id():
    place = Place.external("مستشفى الصداقة", GeoLocation(18.1, -15.95))
    assert place.id == EXTERNAL_PLACE_ID
    assert place.is_external
    assert place.variants == ("مستشفى الصداقة",)


def test_gazetteer_lookup(gazetteer, arafat):
    assert gazetteer.get(7) == arafat
    assert gazetteer.get(99) is None
    assert len(gazetteer) == 3
    assert gazetteer.canonical_names[0] == "توجنين"
    assert len(Gazetteer()) == 0


def test_destination_match_confidence_range(arafat):
    with pytest.raises(ValueError):
        DestinationMatch(arafat, "عرفات", 1.2, MatchMethod.LOCAL_FUZZY)


def test_outcome_constructors(arafat):
    match = DestinationMatch(arafat, "عرفات", 0.9, MatchMethod.SEMANTIC_FALLBACK)

    matched = MatchOutcome.matched(match)
    assert matched.is_match
    assert matched.stage is MatchMethod.SEMANTIC_FALLBACK
    assert matched.best_score == 0.9

    missed = MatchOutcome.no_match(MatchMethod.LOCAL_FUZZY, best_score=0.4)
    assert not missed.is_match
    assert missed.status is MatchStatus.NO_MATCH

    failed = MatchOutcome.failed(MatchMethod.GEOCODING_FALLBACK, "timeout")
    assert failed.status is MatchStatus.FAILED
    assert failed.error == "timeout"

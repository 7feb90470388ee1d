"""Tests for the destination resolver chain."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from destination_resolver.adapters.matching import (
    GeocodingFallbackMatcher,
    LocalFuzzyMatcher,
    SemanticFallbackMatcher,
)
from destination_resolver.domain.errors import GeocodingError, SemanticMatchError
from destination_resolver.domain.models import (
    EXTERNAL_PLACE_ID,
    AreaAnchor,
    Gazetteer,
    GeocodeHit,
    GeoLocation,
    MatchMethod,
    MatchStatus,
    SemanticMatchResult,
)
from destination_resolver.services import DestinationResolverService

ANCHOR = AreaAnchor("Nouakchott, Mauritania", GeoLocation(18.0735, -15.9582))
NO_SEMANTIC_MATCH = SemanticMatchResult(place_id=None, confidence=0.0)


@pytest.fixture
def semantic():
    mock = MagicMock()
    mock.match.return_value = NO_SEMANTIC_MATCH
    return mock


@pytest.fixture
def search():
    mock = MagicMock()
    mock.search.return_value = None
    return mock


@pytest.fixture
def resolver(semantic, search):
    return DestinationResolverService(
        matchers=[
            LocalFuzzyMatcher(threshold=0.75),
            SemanticFallbackMatcher(semantic, threshold=0.85),
            GeocodingFallbackMatcher(search, anchor=ANCHOR, confidence=0.7),
        ]
    )


class TestResolve:
    def test_intent_phrase_then_place_resolves_locally(
        self, resolver, gazetteer, semantic, search
    ):
        match = resolver.resolve("نبغي نمشي توجنين", gazetteer)

        assert match.place.id == 1
        assert match.method is MatchMethod.LOCAL_FUZZY
        assert match.confidence >= 0.75
        semantic.match.assert_not_called()
        search.search.assert_not_called()

    @pytest.mark.parametrize("variant", ["توجنين", "تفرغ زينة", "Arafat"])
    def test_exact_variant_resolves_with_full_confidence(
        self, resolver, gazetteer, variant
    ):
        match = resolver.resolve(variant, gazetteer)

        assert match.method is MatchMethod.LOCAL_FUZZY
        assert match.confidence == 1.0

    def test_no_match_anywhere_returns_none(
        self, resolver, gazetteer, semantic, search
    ):
        assert resolver.resolve("zzzz", gazetteer) is None
        semantic.match.assert_called_once_with("zzzz", gazetteer)
        search.search.assert_called_once_with("zzzz", ANCHOR)

    def test_semantic_fallback_when_local_is_below_threshold(
        self, resolver, gazetteer, semantic, search
    ):
        semantic.match.return_value = SemanticMatchResult(place_id=7, confidence=0.9)

        match = resolver.resolve("zzzz", gazetteer)

        assert match.place.id == 7
        assert match.method is MatchMethod.SEMANTIC_FALLBACK
        assert match.confidence == 0.9
        assert match.matched_variant == "عرفات"
        search.search.assert_not_called()

    def test_semantic_fallback_receives_raw_transcript(
        self, resolver, gazetteer, semantic
    ):
        resolver.resolve("نبغي نمشي zzzz", gazetteer)

        semantic.match.assert_called_once_with("نبغي نمشي zzzz", gazetteer)

    def test_semantic_below_threshold_falls_through_to_geocoding(
        self, resolver, gazetteer, semantic, search
    ):
        semantic.match.return_value = SemanticMatchResult(place_id=7, confidence=0.6)
        search.search.return_value = GeocodeHit(
            "Mosquée Saudi", GeoLocation(18.09, -15.97)
        )

        match = resolver.resolve("zzzz", gazetteer)

        assert match.method is MatchMethod.GEOCODING_FALLBACK
        assert match.place.id == EXTERNAL_PLACE_ID
        assert match.confidence == 0.7

    def test_semantic_failure_is_swallowed(self, resolver, gazetteer, semantic, search):
        semantic.match.side_effect = SemanticMatchError("timeout", model="m")
        search.search.return_value = GeocodeHit("x", GeoLocation(18.09, -15.97))

        match = resolver.resolve("zzzz", gazetteer)

        assert match.method is MatchMethod.GEOCODING_FALLBACK

    def test_all_failures_yield_none(self, resolver, gazetteer, semantic, search):
        semantic.match.side_effect = SemanticMatchError("timeout", model="m")
        search.search.side_effect = GeocodingError("down", query="zzzz")

        assert resolver.resolve("zzzz", gazetteer) is None

    @pytest.mark.parametrize("transcript", ["", "   ", "\n\t"])
    def test_empty_transcript_skips_every_stage(
        self, resolver, gazetteer, semantic, search, transcript
    ):
        assert resolver.resolve(transcript, gazetteer) is None
        semantic.match.assert_not_called()
        search.search.assert_not_called()

    def test_empty_gazetteer_skips_every_stage(self, resolver, semantic, search):
        assert resolver.resolve("نبغي نمشي توجنين", Gazetteer()) is None
        semantic.match.assert_not_called()
        search.search.assert_not_called()

    def test_bare_intent_phrase_still_reaches_fallbacks(
        self, resolver, gazetteer, semantic, search
    ):
        match, outcomes = resolver.resolve_with_trace("نبغي نمشي", gazetteer)

        assert match is None
        assert len(outcomes) == 3
        semantic.match.assert_called_once_with("نبغي نمشي", gazetteer)
        search.search.assert_called_once()


class TestResolveWithTrace:
    def test_trace_stops_at_first_match(self, resolver, gazetteer):
        match, outcomes = resolver.resolve_with_trace("توجنين", gazetteer)

        assert match is not None
        assert [o.stage for o in outcomes] == [MatchMethod.LOCAL_FUZZY]

    def test_trace_keeps_failed_and_no_match_apart(
        self, resolver, gazetteer, semantic
    ):
        semantic.match.side_effect = SemanticMatchError("timeout", model="m")

        match, outcomes = resolver.resolve_with_trace("zzzz", gazetteer)

        assert match is None
        assert [o.status for o in outcomes] == [
            MatchStatus.NO_MATCH,
            MatchStatus.FAILED,
            MatchStatus.NO_MATCH,
        ]

    def test_empty_transcript_has_empty_trace(self, resolver, gazetteer):
        assert resolver.resolve_with_trace("", gazetteer) == (None, [])


class TestChainComposition:
    def test_raising_matcher_is_treated_as_failed(self, gazetteer):
        broken = MagicMock()
        broken.method = MatchMethod.SEMANTIC_FALLBACK
        broken.attempt_match.side_effect = RuntimeError("boom")
        resolver = DestinationResolverService(matchers=[broken, LocalFuzzyMatcher()])

        match, outcomes = resolver.resolve_with_trace("عرفات", gazetteer)

        assert match.place.id == 7
        assert outcomes[0].status is MatchStatus.FAILED
        assert outcomes[0].error == "boom"

    def test_local_only_chain(self, gazetteer):
        resolver = DestinationResolverService(matchers=[LocalFuzzyMatcher()])

        assert resolver.resolve("zzzz", gazetteer) is None

    def test_stricter_local_threshold_defers_to_semantic(self, gazetteer, semantic):
        semantic.match.return_value = SemanticMatchResult(place_id=1, confidence=0.95)
        resolver = DestinationResolverService(
            matchers=[
                LocalFuzzyMatcher(threshold=0.9),
                SemanticFallbackMatcher(semantic),
            ]
        )

        match = resolver.resolve("نبغي نمشي توجنن", gazetteer)

        assert match.method is MatchMethod.SEMANTIC_FALLBACK
        assert match.confidence == 0.95

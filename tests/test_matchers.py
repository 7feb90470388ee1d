"""Tests for the three matching strategies."""

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
    GeocodeHit,
    GeoLocation,
    MatchMethod,
    MatchStatus,
    SemanticMatchResult,
)
from destination_resolver.nlp.normalization import TextNormalizer

ANCHOR = AreaAnchor(
    name="Nouakchott, Mauritania",
    location=GeoLocation(18.0735, -15.9582),
    radius_km=25.0,
    country_code="mr",
)


class TestLocalFuzzyMatcher:
    def test_intent_phrase_then_exact_name(self, gazetteer):
        outcome = LocalFuzzyMatcher().attempt_match("نبغي نمشي توجنين", gazetteer)

        assert outcome.status is MatchStatus.MATCHED
        assert outcome.match.place.id == 1
        assert outcome.match.method is MatchMethod.LOCAL_FUZZY
        assert outcome.match.confidence == 1.0
        assert outcome.match.matched_variant == "توجنين"

    def test_matched_variant_is_the_raw_variant(self, gazetteer):
        outcome = LocalFuzzyMatcher().attempt_match("وديني لتفرغ زينة", gazetteer)

        assert outcome.match.place.id == 4
        # Both Arabic spellings normalize alike; the first one is kept
        assert outcome.match.matched_variant == "تفرغ زينه"

    def test_latin_variant(self, gazetteer):
        outcome = LocalFuzzyMatcher().attempt_match("ARAFAT", gazetteer)

        assert outcome.match.place.id == 7
        assert outcome.match.matched_variant == "Arafat"

    def test_misspelling_above_threshold(self, gazetteer):
        outcome = LocalFuzzyMatcher().attempt_match("نبغي نمشي توجنن", gazetteer)

        assert outcome.is_match
        assert outcome.match.place.id == 1
        assert outcome.match.confidence == pytest.approx(1 - 1 / 6)

    def test_threshold_is_configurable(self, gazetteer):
        strict = LocalFuzzyMatcher(threshold=0.9)
        outcome = strict.attempt_match("نبغي نمشي توجنن", gazetteer)

        assert outcome.status is MatchStatus.NO_MATCH
        assert outcome.best_score == pytest.approx(1 - 1 / 6)

    def test_unrelated_transcript(self, gazetteer):
        outcome = LocalFuzzyMatcher().attempt_match("zzzz", gazetteer)

        assert outcome.status is MatchStatus.NO_MATCH
        assert outcome.match is None

    def test_transcript_embedded_in_longer_variant(self, gazetteer):
        candidate = LocalFuzzyMatcher().best_candidate("زينه", gazetteer)

        assert candidate.place.id == 4
        assert candidate.score == pytest.approx(0.95)

    def test_exact_variant_longer_than_span_limit(self, make_gazetteer):
        name = "carrefour ain talh grand mosque"
        gazetteer = make_gazetteer((20, name, [name]))

        outcome = LocalFuzzyMatcher(max_span_length=2).attempt_match(name, gazetteer)

        assert outcome.match.confidence == 1.0

    def test_custom_normalizer(self, gazetteer):
        matcher = LocalFuzzyMatcher(
            normalizer=TextNormalizer(intent_phrases=("ندور كورس",))
        )
        outcome = matcher.attempt_match("ندور كورس عرفات", gazetteer)

        assert outcome.match.place.id == 7
        assert outcome.match.confidence == 1.0


class TestSemanticFallbackMatcher:
    @pytest.fixture
    def semantic(self):
        return MagicMock()

    def test_known_id_above_threshold(self, semantic, gazetteer):
        semantic.match.return_value = SemanticMatchResult(place_id=7, confidence=0.9)

        outcome = SemanticFallbackMatcher(semantic).attempt_match("عرفه", gazetteer)

        assert outcome.match.place.id == 7
        assert outcome.match.confidence == 0.9
        assert outcome.match.method is MatchMethod.SEMANTIC_FALLBACK
        assert outcome.match.matched_variant == "عرفات"
        semantic.match.assert_called_once_with("عرفه", gazetteer)

    def test_threshold_is_inclusive(self, semantic, gazetteer):
        semantic.match.return_value = SemanticMatchResult(place_id=7, confidence=0.85)

        outcome = SemanticFallbackMatcher(semantic).attempt_match("x", gazetteer)

        assert outcome.is_match

    def test_below_threshold(self, semantic, gazetteer):
        semantic.match.return_value = SemanticMatchResult(place_id=7, confidence=0.6)

        outcome = SemanticFallbackMatcher(semantic).attempt_match("x", gazetteer)

        assert outcome.status is MatchStatus.NO_MATCH
        assert outcome.best_score == 0.6

    def test_lower_threshold_accepts(self, semantic, gazetteer):
        semantic.match.return_value = SemanticMatchResult(place_id=7, confidence=0.6)

        matcher = SemanticFallbackMatcher(semantic, threshold=0.6)

        assert matcher.attempt_match("x", gazetteer).is_match

    def test_null_id_is_no_match(self, semantic, gazetteer):
        semantic.match.return_value = SemanticMatchResult(place_id=None, confidence=0)

        outcome = SemanticFallbackMatcher(semantic).attempt_match("x", gazetteer)

        assert outcome.status is MatchStatus.NO_MATCH

    def test_unknown_id_is_no_match(self, semantic, gazetteer):
        semantic.match.return_value = SemanticMatchResult(place_id=99, confidence=1.0)

        outcome = SemanticFallbackMatcher(semantic).attempt_match("x", gazetteer)

        assert outcome.status is MatchStatus.NO_MATCH

    def test_confidence_is_clamped(self, semantic, gazetteer):
        semantic.match.return_value = SemanticMatchResult(place_id=1, confidence=1.5)

        outcome = SemanticFallbackMatcher(semantic).attempt_match("x", gazetteer)

        assert outcome.match.confidence == 1.0

    def test_nan_confidence_is_no_match(self, semantic, gazetteer):
        semantic.match.return_value = SemanticMatchResult(
            place_id=1, confidence=float("nan")
        )

        outcome = SemanticFallbackMatcher(semantic).attempt_match("x", gazetteer)

        assert outcome.status is MatchStatus.NO_MATCH

    def test_collaborator_error_is_failed_outcome(self, semantic, gazetteer):
        semantic.match.side_effect = SemanticMatchError("timeout", model="m")

        outcome = SemanticFallbackMatcher(semantic).attempt_match("x", gazetteer)

        assert outcome.status is MatchStatus.FAILED
        assert "timeout" in outcome.error


class TestGeocodingFallbackMatcher:
    @pytest.fixture
    def search(self):
        return MagicMock()

    def test_hit_becomes_external_place(self, search, gazetteer):
        search.search.return_value = GeocodeHit(
            name="مستشفى الصداقة", location=GeoLocation(18.11, -15.95)
        )

        matcher = GeocodingFallbackMatcher(search, anchor=ANCHOR)
        outcome = matcher.attempt_match("مستشفى الصداقة", gazetteer)

        match = outcome.match
        assert match.method is MatchMethod.GEOCODING_FALLBACK
        assert match.confidence == 0.7
        assert match.place.id == EXTERNAL_PLACE_ID
        assert match.place.canonical_name == "مستشفى الصداقة"
        assert match.matched_variant == "مستشفى الصداقة"
        assert (match.place.lat, match.place.lon) == (18.11, -15.95)
        search.search.assert_called_once_with("مستشفى الصداقة", ANCHOR)

    def test_configured_confidence(self, search, gazetteer):
        search.search.return_value = GeocodeHit("x", GeoLocation(18.1, -15.9))

        matcher = GeocodingFallbackMatcher(search, anchor=ANCHOR, confidence=0.5)

        assert matcher.attempt_match("x", gazetteer).match.confidence == 0.5

    def test_invalid_confidence_rejected(self, search):
        with pytest.raises(ValueError):
            GeocodingFallbackMatcher(search, anchor=ANCHOR, confidence=1.5)

    def test_no_hit(self, search, gazetteer):
        search.search.return_value = None

        outcome = GeocodingFallbackMatcher(search, ANCHOR).attempt_match("x", gazetteer)

        assert outcome.status is MatchStatus.NO_MATCH

    def test_search_error_is_failed_outcome(self, search, gazetteer):
        search.search.side_effect = GeocodingError("down", query="x")

        outcome = GeocodingFallbackMatcher(search, ANCHOR).attempt_match("x", gazetteer)

        assert outcome.status is MatchStatus.FAILED

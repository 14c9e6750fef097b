"""Tests for the data-quality confidence breakdown."""

import pytest

from trend_engine.models.model_analysis import ConfidenceBreakdown, ConfidenceGrade
from trend_engine.models.model_scores import SubScores
from trend_engine.scoring.confidence import (
    compute_confidence,
    compute_signal_agreement,
    get_confidence_description,
    get_confidence_label,
    grade_from_score,
)


def test_full_confidence():
    """Test full coverage, fresh data, long history and agreeing signals grade A."""
    sub_scores = SubScores(code_hosting=60, community=60, jobs=60, ecosystem=60)
    breakdown = compute_confidence("frontend", 14, 1.0, 45, sub_scores)

    assert breakdown.overall == 100
    assert breakdown.source_coverage == 100
    assert breakdown.data_recency == 100
    assert breakdown.historical_depth == 100
    assert breakdown.signal_agreement == 100
    assert breakdown.grade == ConfidenceGrade.A


def test_sparse_confidence():
    """Test one source, stale data and no history grade F."""
    breakdown = compute_confidence("cloud", 1, 200.0, 0, SubScores(jobs=40))

    assert breakdown.source_coverage == 11
    assert breakdown.data_recency == 10
    assert breakdown.historical_depth == 0
    assert breakdown.signal_agreement == 50
    assert breakdown.grade == ConfidenceGrade.F


def test_unknown_category_uses_default_sources():
    """Test unknown categories expect 12 sources."""
    breakdown = compute_confidence("quantum", 6, 1.0, 30, SubScores())
    assert breakdown.source_coverage == 50


@pytest.mark.parametrize(
    "hours, expected",
    [(0, 100), (23.9, 100), (24, 80), (47, 80), (71, 50), (100, 30), (168, 10), (1000, 10)],
)
def test_recency_tiers(hours: float, expected: int):
    """Test data recency tiers."""
    assert compute_confidence(None, 1, hours, 0, SubScores()).data_recency == expected


@pytest.mark.parametrize(
    "score, grade",
    [
        (100, ConfidenceGrade.A),
        (85, ConfidenceGrade.A),
        (84.9, ConfidenceGrade.B),
        (70, ConfidenceGrade.B),
        (69, ConfidenceGrade.C),
        (50, ConfidenceGrade.C),
        (30, ConfidenceGrade.D),
        (29.9, ConfidenceGrade.F),
        (0, ConfidenceGrade.F),
    ],
)
def test_grade_thresholds(score: float, grade: ConfidenceGrade):
    """Test grade boundaries."""
    assert grade_from_score(score) == grade


def test_signal_agreement():
    """Test agreement falls as sub-scores spread out."""
    assert compute_signal_agreement(SubScores(jobs=10, ecosystem=10)) == 100.0
    assert compute_signal_agreement(SubScores(jobs=0, ecosystem=100)) == 0.0
    # std dev 10 -> 100 - 30
    assert compute_signal_agreement(SubScores(jobs=40, ecosystem=60)) == pytest.approx(70.0)
    assert compute_signal_agreement(SubScores(jobs=40)) == 50.0


def test_labels_cover_every_grade():
    """Test every grade has a label."""
    for grade in ConfidenceGrade:
        assert get_confidence_label(grade)


def test_description():
    """Test the description names strong and weak components."""
    strong = ConfidenceBreakdown(
        overall=95,
        source_coverage=90,
        data_recency=100,
        historical_depth=100,
        signal_agreement=85,
        grade=ConfidenceGrade.A,
    )
    assert get_confidence_description(strong) == "strong source coverage · solid history · signals agree"

    middling = strong.model_copy(
        update={"source_coverage": 60, "historical_depth": 60, "signal_agreement": 60}
    )
    assert get_confidence_description(middling) == "Moderate data quality"

    weak = strong.model_copy(
        update={"source_coverage": 20, "historical_depth": 10, "signal_agreement": 30}
    )
    assert get_confidence_description(weak) == "limited sources · short history · contradictory signals"


def test_half_points_round_up():
    """Test components landing on .5 round up rather than to the even integer."""
    breakdown = compute_confidence("frontend", 7, 1.0, 0, SubScores(jobs=40))

    assert breakdown.source_coverage == 50
    assert breakdown.data_recency == 100
    assert breakdown.signal_agreement == 50
    # 50*0.35 + 100*0.25 + 0*0.20 + 50*0.20 = 52.5
    assert breakdown.overall == 53
    assert breakdown.grade == ConfidenceGrade.C

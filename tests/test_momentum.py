"""Tests for multi-window momentum analysis."""

from datetime import date, timedelta

import pytest

from trend_engine.analysis.momentum import (
    analyze_momentum,
    classify_trend,
    compute_ema,
    compute_legacy_momentum,
)
from trend_engine.models.model_analysis import MomentumAnalysis, MomentumTrend
from trend_engine.models.model_scores import ScorePoint


def _series(scores: list[float]) -> list[ScorePoint]:
    start = date(2024, 1, 1)
    return [ScorePoint(date=start + timedelta(days=i), score=s) for i, s in enumerate(scores)]


def test_compute_ema():
    """Test EMA seeding and recursion."""
    assert compute_ema([], 7) == []
    # k = 2 / (3 + 1) = 0.5
    assert compute_ema([10.0, 20.0, 20.0], 3) == [10.0, 15.0, 17.5]


def test_constant_history_is_stable():
    """Test a flat series has zero momentum and volatility."""
    analysis = analyze_momentum(_series([55.0] * 20))

    assert analysis.short_term == 0.0
    assert analysis.medium_term == 0.0
    assert analysis.long_term == 0.0
    assert analysis.volatility == 0.0
    assert analysis.trend == MomentumTrend.STABLE


def test_short_history_is_neutral():
    """Test fewer than 3 points returns the neutral default."""
    analysis = analyze_momentum(_series([40.0, 90.0]))

    assert analysis == MomentumAnalysis()
    assert analysis.confidence == 0.0
    assert analysis.streak == 0
    assert analysis.trend == MomentumTrend.STABLE


def test_empty_history_is_neutral():
    """Test an empty series returns the neutral default."""
    assert analyze_momentum([]) == MomentumAnalysis()


def test_rising_series():
    """Test a steady climb has positive momentum and an upward streak."""
    scores = [40.0 + i for i in range(30)]
    analysis = analyze_momentum(_series(scores))

    assert analysis.short_term > analysis.medium_term > 0
    assert analysis.acceleration > 0
    assert analysis.volatility == 0.0
    assert analysis.streak == 29
    assert analysis.confidence == 0.5


def test_falling_streak_is_negative():
    """Test a downward streak is reported as a negative count."""
    analysis = analyze_momentum(_series([50.0, 52.0, 51.0, 49.0, 46.0]))
    assert analysis.streak == -3


def test_flat_latest_day_counts_as_one():
    """Test a flat final delta yields a streak of 1."""
    analysis = analyze_momentum(_series([50.0, 51.0, 52.0, 52.0]))
    assert analysis.streak == 1


def test_volatile_series():
    """Test large day-over-day swings classify as volatile."""
    analysis = analyze_momentum(_series([20.0, 60.0, 25.0, 70.0, 15.0, 65.0]))
    assert analysis.volatility > 3
    assert analysis.trend == MomentumTrend.VOLATILE


def test_confidence_caps_at_one():
    """Test confidence saturates at 60 points."""
    analysis = analyze_momentum(_series([50.0] * 120))
    assert analysis.confidence == 1.0


def test_outputs_rounded():
    """Test numeric outputs are rounded to 3 decimals."""
    analysis = analyze_momentum(_series([10.0, 13.0, 17.0, 16.0, 22.0]))
    for value in (
        analysis.short_term,
        analysis.medium_term,
        analysis.long_term,
        analysis.acceleration,
        analysis.volatility,
    ):
        assert round(value, 3) == value


class TestClassifyTrend:
    """Tests for classify_trend priority order."""

    def test_volatile_overrides(self) -> None:
        """Test volatility wins over every other rule."""
        assert classify_trend(5.0, -5.0, 10.0, 3.5) == MomentumTrend.VOLATILE

    def test_reversing(self) -> None:
        """Test opposite signs above 0.5 are a reversal."""
        assert classify_trend(1.0, -0.8, 1.8, 0.5) == MomentumTrend.REVERSING

    def test_accelerating(self) -> None:
        """Test short-term movement with positive acceleration."""
        assert classify_trend(1.0, 0.2, 0.8, 0.5) == MomentumTrend.ACCELERATING

    def test_decelerating(self) -> None:
        """Test short-term movement with negative acceleration."""
        assert classify_trend(0.4, 1.2, -0.8, 0.5) == MomentumTrend.DECELERATING

    def test_stable(self) -> None:
        """Test small movement is stable."""
        assert classify_trend(0.2, 0.1, 0.1, 0.5) == MomentumTrend.STABLE


class TestLegacyMomentum:
    """Tests for the single-scalar momentum."""

    def test_formula(self) -> None:
        """Test (short*0.4 + medium*0.6) * 10, rounded to 2 decimals."""
        analysis = MomentumAnalysis(short_term=1.5, medium_term=0.5)
        assert compute_legacy_momentum(analysis) == pytest.approx(9.0)

    def test_clamped(self) -> None:
        """Test the scalar stays within [-100, 100]."""
        assert compute_legacy_momentum(MomentumAnalysis(short_term=50, medium_term=50)) == 100.0
        assert compute_legacy_momentum(MomentumAnalysis(short_term=-50, medium_term=-50)) == -100.0

    def test_neutral(self) -> None:
        """Test neutral momentum is zero."""
        assert compute_legacy_momentum(MomentumAnalysis()) == 0.0

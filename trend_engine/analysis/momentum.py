"""Multi-window momentum analysis of a technology's score history.

Tells how a score is moving, not just that it moved: exponential moving
averages over three windows, acceleration, volatility, a trend label and a
directional streak.
"""

import math

from trend_engine.consts import (
    MOMENTUM_CONFIDENCE_DAYS,
    MOMENTUM_LONG_WINDOW,
    MOMENTUM_MEDIUM_WINDOW,
    MOMENTUM_MIN_POINTS,
    MOMENTUM_SHORT_WINDOW,
)
from trend_engine.models.model_analysis import MomentumAnalysis, MomentumTrend
from trend_engine.models.model_scores import ScorePoint

# Trend classification thresholds
VOLATILE_THRESHOLD = 3.0
REVERSAL_MAGNITUDE = 0.5
MOVING_MAGNITUDE = 0.3
ACCELERATION_THRESHOLD = 0.5

# Legacy scalar blend. Fixed heuristic kept for output compatibility with
# existing consumers of the single momentum column; not derived from a model.
LEGACY_SHORT_WEIGHT = 0.4
LEGACY_MEDIUM_WEIGHT = 0.6
LEGACY_SCALE = 10


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def compute_ema(values: list[float], window: int) -> list[float]:
    """Exponential moving average seeded at the first value, k = 2 / (window + 1)."""
    if not values:
        return []

    k = 2 / (window + 1)
    result = [values[0]]
    for value in values[1:]:
        result.append(value * k + result[-1] * (1 - k))
    return result


def _last_delta(series: list[float]) -> float:
    if len(series) < 2:
        return 0.0
    return series[-1] - series[-2]


def _population_std(values: list[float]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))


def _streak(deltas: list[float]) -> int:
    """Consecutive most-recent deltas sharing the latest delta's sign.

    Negative for a downward streak. A flat latest day counts as a streak of 1.
    """
    if len(deltas) < 2:
        return 0

    last_sign = _sign(deltas[-1])
    streak = 1
    if last_sign != 0:
        for delta in reversed(deltas[:-1]):
            if _sign(delta) != last_sign:
                break
            streak += 1

    return streak * (last_sign or 1)


def classify_trend(
    short_term: float,
    medium_term: float,
    acceleration: float,
    volatility: float,
) -> MomentumTrend:
    """Classify the trend. Rules are evaluated in priority order."""
    # High volatility overrides everything
    if volatility > VOLATILE_THRESHOLD:
        return MomentumTrend.VOLATILE

    if (
        _sign(short_term) != _sign(medium_term)
        and abs(short_term) > REVERSAL_MAGNITUDE
        and abs(medium_term) > REVERSAL_MAGNITUDE
    ):
        return MomentumTrend.REVERSING

    if abs(short_term) > MOVING_MAGNITUDE and acceleration > ACCELERATION_THRESHOLD:
        return MomentumTrend.ACCELERATING

    if abs(short_term) > MOVING_MAGNITUDE and acceleration < -ACCELERATION_THRESHOLD:
        return MomentumTrend.DECELERATING

    return MomentumTrend.STABLE


def analyze_momentum(points: list[ScorePoint]) -> MomentumAnalysis:
    """Analyze momentum from a chronological (oldest first) score series.

    Args:
        points: Score history including today's score

    Returns:
        MomentumAnalysis. Fewer than 3 points yields the neutral default.
    """
    if len(points) < MOMENTUM_MIN_POINTS:
        return MomentumAnalysis()

    values = [p.score for p in points]

    short_term = _last_delta(compute_ema(values, MOMENTUM_SHORT_WINDOW))
    medium_term = _last_delta(compute_ema(values, MOMENTUM_MEDIUM_WINDOW))
    long_term = _last_delta(compute_ema(values, min(MOMENTUM_LONG_WINDOW, len(values))))

    # Positive when the short-term trend outpaces the medium-term trend
    acceleration = short_term - medium_term

    deltas = [current - previous for previous, current in zip(values, values[1:])]
    volatility = _population_std(deltas)

    return MomentumAnalysis(
        short_term=round(short_term, 3),
        medium_term=round(medium_term, 3),
        long_term=round(long_term, 3),
        acceleration=round(acceleration, 3),
        volatility=round(volatility, 3),
        trend=classify_trend(short_term, medium_term, acceleration, volatility),
        confidence=round(min(1.0, len(points) / MOMENTUM_CONFIDENCE_DAYS), 2),
        streak=_streak(deltas),
    )


def compute_legacy_momentum(analysis: MomentumAnalysis) -> float:
    """Single momentum scalar in [-100, 100] for consumers that want one number."""
    raw = analysis.short_term * LEGACY_SHORT_WEIGHT + analysis.medium_term * LEGACY_MEDIUM_WEIGHT
    return max(-100.0, min(100.0, round(raw * LEGACY_SCALE, 2)))

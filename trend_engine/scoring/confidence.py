"""Data-quality confidence for a technology's score.

High confidence means many sources, fresh data, long history and sub-scores
that agree with each other.
"""

import math

from trend_engine.models.model_analysis import ConfidenceBreakdown, ConfidenceGrade
from trend_engine.models.model_scores import SubScores
from trend_engine.models.model_settings import EngineSettings

# (max age in hours, recency score). First match wins.
RECENCY_TIERS = [
    (24, 100),
    (48, 80),
    (72, 50),
    (168, 30),  # 1 week
]
STALE_RECENCY = 10

# Days of history for full depth
FULL_DEPTH_DAYS = 30

# (min overall score, grade). First match wins.
GRADE_THRESHOLDS = [
    (85, ConfidenceGrade.A),
    (70, ConfidenceGrade.B),
    (50, ConfidenceGrade.C),
    (30, ConfidenceGrade.D),
]

CONFIDENCE_LABELS = {
    ConfidenceGrade.A: "High confidence",
    ConfidenceGrade.B: "Good confidence",
    ConfidenceGrade.C: "Moderate confidence",
    ConfidenceGrade.D: "Low confidence",
    ConfidenceGrade.F: "Very low confidence",
}


def compute_signal_agreement(sub_scores: SubScores) -> float:
    """Agreement between present sub-scores (0-100).

    0 std dev is full agreement, 33+ is none. Fewer than two scores is
    neutral (50): there is no evidence of disagreement.
    """
    scores = [score for _, score in sub_scores.present()]
    if len(scores) < 2:
        return 50.0

    mean = sum(scores) / len(scores)
    std_dev = math.sqrt(sum((s - mean) ** 2 for s in scores) / len(scores))
    return max(0.0, min(100.0, 100 - std_dev * 3))


def _round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (52.5 -> 53)."""
    return math.floor(value + 0.5)


def grade_from_score(score: float) -> ConfidenceGrade:
    """Map an overall confidence score to a letter grade."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return ConfidenceGrade.F


def compute_confidence(
    category: str | None,
    active_sources: int,
    last_data_point_age_hours: float,
    history_days: int,
    sub_scores: SubScores,
    settings: EngineSettings | None = None,
) -> ConfidenceBreakdown:
    """Compute the confidence breakdown for one technology.

    Args:
        category: Technology category (selects expected source count)
        active_sources: Distinct sources that reported data
        last_data_point_age_hours: Age of the freshest data point
        history_days: Days of score history available
        sub_scores: Today's sub-scores
        settings: Engine settings (defaults if None)

    Returns:
        ConfidenceBreakdown with components and grade
    """
    settings = settings or EngineSettings()

    source_coverage = min(100.0, active_sources / settings.max_sources_for(category) * 100)

    data_recency = STALE_RECENCY
    for max_hours, recency in RECENCY_TIERS:
        if last_data_point_age_hours < max_hours:
            data_recency = recency
            break

    historical_depth = min(100.0, history_days / FULL_DEPTH_DAYS * 100)
    signal_agreement = compute_signal_agreement(sub_scores)

    overall = (
        source_coverage * 0.35
        + data_recency * 0.25
        + historical_depth * 0.20
        + signal_agreement * 0.20
    )

    return ConfidenceBreakdown(
        overall=_round_half_up(overall),
        source_coverage=_round_half_up(source_coverage),
        data_recency=_round_half_up(data_recency),
        historical_depth=_round_half_up(historical_depth),
        signal_agreement=_round_half_up(signal_agreement),
        grade=grade_from_score(overall),
    )


def get_confidence_label(grade: ConfidenceGrade) -> str:
    """Human-readable label for a confidence grade."""
    return CONFIDENCE_LABELS[grade]


def get_confidence_description(breakdown: ConfidenceBreakdown) -> str:
    """Short description of data quality for detail views."""
    parts = []

    if breakdown.source_coverage >= 80:
        parts.append("strong source coverage")
    elif breakdown.source_coverage < 40:
        parts.append("limited sources")

    if breakdown.historical_depth >= 80:
        parts.append("solid history")
    elif breakdown.historical_depth < 40:
        parts.append("short history")

    if breakdown.signal_agreement >= 80:
        parts.append("signals agree")
    elif breakdown.signal_agreement < 40:
        parts.append("contradictory signals")

    if not parts:
        return "Moderate data quality"
    return " · ".join(parts)

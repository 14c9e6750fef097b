"""Statistical anomaly detection over a technology's score history.

Detects per-metric spikes and drops (z-scores), momentum trend breaks and
cross-signal divergences. Pure: identical inputs give an identical,
order-stable list.
"""

import math

from trend_engine.consts import (
    ANOMALY_MIN_HISTORY,
    ZSCORE_CRITICAL,
    ZSCORE_NOTABLE,
    ZSCORE_SIGNIFICANT,
)
from trend_engine.models.model_analysis import (
    AnomalyDetectionResult,
    AnomalySeverity,
    AnomalyType,
    TechSignals,
)
from trend_engine.models.model_scores import ScoreRow

# (metric, source, ScoreRow attribute) checked for spikes/drops, in output order
METRIC_CHECKS = [
    ("composite_score", "overall", "composite_score"),
    ("code_hosting_score", "code_hosting", "code_hosting_score"),
    ("community_score", "community", "community_score"),
    ("jobs_score", "jobs", "jobs_score"),
]

# Trend break: minimum |short - medium| and the significant tier
TREND_BREAK_MIN = 3.0
TREND_BREAK_SIGNIFICANT = 10.0
TREND_BREAK_DIVISOR = 3.0

# Divergence thresholds (notable, significant) and magnitude divisor
HOSTING_COMMUNITY_DIVERGENCE = (15.0, 25.0)
JOBS_INTEREST_DIVERGENCE = (20.0, 30.0)
DIVERGENCE_DIVISOR = 5.0


def _severity_for_z(z_score: float) -> AnomalySeverity | None:
    if z_score > ZSCORE_CRITICAL:
        return AnomalySeverity.CRITICAL
    if z_score > ZSCORE_SIGNIFICANT:
        return AnomalySeverity.SIGNIFICANT
    if z_score > ZSCORE_NOTABLE:
        return AnomalySeverity.NOTABLE
    return None


def detect_metric_anomaly(
    metric: str,
    current_value: float,
    historical_values: list[float],
    source: str,
) -> AnomalyDetectionResult | None:
    """Flag a spike or drop in one metric using a z-score against its history.

    Zero values are left out of the statistics (a zero is a missing day, not
    a measurement). Needs 7 non-zero points and non-zero variance.
    """
    values = [v for v in historical_values if v > 0]
    if len(values) < ANOMALY_MIN_HISTORY:
        return None

    mean = sum(values) / len(values)
    std_dev = math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))
    if std_dev == 0:
        return None

    z_score = abs(current_value - mean) / std_dev
    severity = _severity_for_z(z_score)
    if severity is None:
        return None

    return AnomalyDetectionResult(
        type=AnomalyType.SPIKE if current_value > mean else AnomalyType.DROP,
        severity=severity,
        source=source,
        metric=metric,
        expected_value=mean,
        actual_value=current_value,
        deviation_sigma=z_score,
    )


def detect_trend_break(signals: TechSignals) -> AnomalyDetectionResult | None:
    """Flag short-term momentum pointing the other way from medium-term momentum."""
    short_term = signals.short_term_momentum
    medium_term = signals.medium_term_momentum
    if short_term is None or medium_term is None:
        return None

    if (short_term > 0) == (medium_term > 0):
        return None

    magnitude_diff = abs(short_term - medium_term)
    if magnitude_diff <= TREND_BREAK_MIN:
        return None

    return AnomalyDetectionResult(
        type=AnomalyType.TREND_BREAK,
        severity=(
            AnomalySeverity.SIGNIFICANT
            if magnitude_diff > TREND_BREAK_SIGNIFICANT
            else AnomalySeverity.NOTABLE
        ),
        source="momentum",
        metric="trend_direction",
        expected_value=medium_term,
        actual_value=short_term,
        deviation_sigma=magnitude_diff / TREND_BREAK_DIVISOR,
        is_true_sigma=False,
    )


def detect_hosting_community_divergence(signals: TechSignals) -> AnomalyDetectionResult | None:
    """Flag code-hosting activity and community discussion that have moved apart."""
    hosting = signals.code_hosting_score
    community = signals.community_score

    delta = hosting - community
    notable, significant = HOSTING_COMMUNITY_DIVERGENCE
    if abs(delta) <= notable:
        return None

    hosting_higher = delta > 0
    return AnomalyDetectionResult(
        type=AnomalyType.DIVERGENCE,
        severity=AnomalySeverity.SIGNIFICANT if abs(delta) > significant else AnomalySeverity.NOTABLE,
        source="cross_signal",
        metric="code_hosting_vs_community" if hosting_higher else "community_vs_code_hosting",
        expected_value=community if hosting_higher else hosting,
        actual_value=hosting if hosting_higher else community,
        deviation_sigma=abs(delta) / DIVERGENCE_DIVISOR,
        is_true_sigma=False,
    )


def detect_jobs_interest_divergence(signals: TechSignals) -> AnomalyDetectionResult | None:
    """Flag job demand out of line with developer interest (mean of hosting and community)."""
    interest = (signals.code_hosting_score + signals.community_score) / 2
    delta = signals.jobs_score - interest
    notable, significant = JOBS_INTEREST_DIVERGENCE
    if abs(delta) <= notable:
        return None

    return AnomalyDetectionResult(
        type=AnomalyType.DIVERGENCE,
        severity=AnomalySeverity.SIGNIFICANT if abs(delta) > significant else AnomalySeverity.NOTABLE,
        source="market",
        metric="jobs_vs_interest" if delta > 0 else "interest_vs_jobs",
        expected_value=interest,
        actual_value=signals.jobs_score,
        deviation_sigma=abs(delta) / DIVERGENCE_DIVISOR,
        is_true_sigma=False,
    )


def detect_anomalies(
    current: ScoreRow,
    history: list[ScoreRow],
    signals: TechSignals,
) -> list[AnomalyDetectionResult]:
    """Detect anomalies for one technology.

    Args:
        current: Today's score row
        history: Previous rows, ideally the last 30-90 days
        signals: Current sub-scores and momentum components

    Returns:
        Anomalies in check order: per-metric (composite, code hosting,
        community, jobs), trend break, hosting/community divergence, then
        jobs/interest divergence. Empty when history has fewer than 7 rows.
    """
    if len(history) < ANOMALY_MIN_HISTORY:
        return []

    anomalies = []

    for metric, source, attribute in METRIC_CHECKS:
        anomaly = detect_metric_anomaly(
            metric,
            getattr(current, attribute) or 0.0,
            [getattr(row, attribute) or 0.0 for row in history],
            source,
        )
        if anomaly:
            anomalies.append(anomaly)

    for check in (
        detect_trend_break,
        detect_hosting_community_divergence,
        detect_jobs_interest_divergence,
    ):
        anomaly = check(signals)
        if anomaly:
            anomalies.append(anomaly)

    return anomalies


def signals_from_row(row: ScoreRow) -> TechSignals:
    """Build the cross-dimension snapshot from a scored row and its momentum detail."""
    detail = row.raw_sub_scores.momentum_detail
    return TechSignals(
        code_hosting_score=row.code_hosting_score or 0.0,
        community_score=row.community_score or 0.0,
        jobs_score=row.jobs_score or 0.0,
        ecosystem_score=row.ecosystem_score or 0.0,
        momentum=row.momentum,
        short_term_momentum=detail.short_term if detail else None,
        medium_term_momentum=detail.medium_term if detail else None,
        long_term_momentum=detail.long_term if detail else None,
    )

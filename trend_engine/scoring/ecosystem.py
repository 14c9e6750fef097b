"""Ecosystem/package adoption score."""

from trend_engine.models.common import clamp
from trend_engine.models.model_metrics import NormalizedMetrics, TechDataPoints
from trend_engine.scoring.normalize import min_max_normalize

# Week-over-week download growth range (-50% to +100%)
GROWTH_MIN = -0.5
GROWTH_MAX = 1.0

# Packages with a maintenance rating below this get penalized
ABANDONED_MAINTENANCE = 0.3
ABANDONED_PENALTY = 0.85


def compute_ecosystem_score(
    downloads_pct: float = 0.0,
    download_growth_rate: float = 0.0,
    questions_pct: float = 0.0,
    recent_questions_pct: float = 50.0,
    dependents_pct: float = 50.0,
) -> float:
    """Ecosystem score (0-100).

    Args:
        downloads_pct: Percentile-ranked downloads across all package registries (0-100)
        download_growth_rate: Week-over-week change, clamped to [-0.5, 1.0] then scaled
        questions_pct: Percentile-ranked lifetime Q&A question count (0-100)
        recent_questions_pct: Percentile-ranked 30-day question count (0-100)
        dependents_pct: Percentile-ranked downstream dependents count (0-100)
    """
    growth = clamp(download_growth_rate, GROWTH_MIN, GROWTH_MAX)
    return clamp(
        downloads_pct * 0.20
        + min_max_normalize(growth, GROWTH_MIN, GROWTH_MAX) * 0.15
        + questions_pct * 0.15
        + recent_questions_pct * 0.15
        + dependents_pct * 0.35
    )


def download_growth_rate(downloads: float | None, prior_downloads: float | None) -> float:
    """Week-over-week download growth, clamped. 0 when either week is unknown."""
    if downloads is None or not prior_downloads or prior_downloads <= 0:
        return 0.0
    return clamp((downloads - prior_downloads) / prior_downloads, GROWTH_MIN, GROWTH_MAX)


class EcosystemEvaluator:
    """Scores package adoption. Present if downloads, questions or dependents were reported."""

    dimension = "ecosystem"

    def evaluate(self, data: TechDataPoints, normalized: NormalizedMetrics) -> float | None:
        """Calculate the ecosystem score, penalizing abandoned packages."""
        signals = (data.downloads, data.so_questions, data.so_mentions, data.dependents_count)
        if all(v is None for v in signals):
            return None

        score = compute_ecosystem_score(
            normalized.downloads,
            download_growth_rate(data.downloads, data.prior_downloads),
            normalized.so_questions,
            normalized.so_mentions,
            normalized.dependents,
        )

        if data.npms_maintenance is not None and data.npms_maintenance < ABANDONED_MAINTENANCE:
            score = round(score * ABANDONED_PENALTY, 2)

        return score

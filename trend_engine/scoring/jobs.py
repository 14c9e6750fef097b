"""Job-market demand score."""

from trend_engine.models.common import clamp
from trend_engine.models.model_metrics import NormalizedMetrics, TechDataPoints


def compute_jobs_score(
    primary_board_pct: float = 0.0,
    secondary_board_pct: float = 0.0,
    remote_board_pct: float = 0.0,
) -> float:
    """Jobs score (0-100) from three percentile-ranked posting counts (40/40/20)."""
    return clamp(primary_board_pct * 0.40 + secondary_board_pct * 0.40 + remote_board_pct * 0.20)


class JobsEvaluator:
    """Scores job postings. Present if any job board was reported."""

    dimension = "jobs"

    def evaluate(self, data: TechDataPoints, normalized: NormalizedMetrics) -> float | None:
        """Calculate the jobs score."""
        if data.adzuna_jobs is None and data.jsearch_jobs is None and data.remotive_jobs is None:
            return None

        return compute_jobs_score(
            normalized.adzuna_jobs,
            normalized.jsearch_jobs,
            normalized.remotive_jobs,
        )

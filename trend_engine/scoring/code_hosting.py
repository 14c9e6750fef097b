"""Code-hosting activity score (stars, forks, issue closing, contributors)."""

from trend_engine.models.common import clamp
from trend_engine.models.model_metrics import NormalizedMetrics, TechDataPoints


def compute_code_hosting_score(
    star_velocity_pct: float = 0.0,
    fork_velocity_pct: float = 0.0,
    issue_close_rate: float = 0.0,
    contributor_growth_pct: float = 50.0,
) -> float:
    """Code-hosting score (0-100).

    Args:
        star_velocity_pct: Percentile-ranked star gain (0-100)
        fork_velocity_pct: Percentile-ranked fork count (0-100)
        issue_close_rate: closed / (closed + open), 0 to 1, used directly as a percentage
        contributor_growth_pct: Percentile-ranked active contributors (0-100)
    """
    star_component = star_velocity_pct * 0.35
    fork_component = fork_velocity_pct * 0.15
    issue_component = clamp(issue_close_rate, 0.0, 1.0) * 100 * 0.20
    contributor_component = contributor_growth_pct * 0.30
    return clamp(star_component + fork_component + issue_component + contributor_component)


def issue_close_rate(closed_issues: float | None, open_issues: float | None) -> float:
    """Share of issues closed. A repo with zero open issues counts as fully closed."""
    if closed_issues is not None and open_issues is not None and closed_issues + open_issues > 0:
        return closed_issues / (closed_issues + open_issues)
    if open_issues == 0:
        return 1.0
    return 0.0


class CodeHostingEvaluator:
    """Scores repository activity. Present only if stars or forks were reported."""

    dimension = "code_hosting"

    def evaluate(self, data: TechDataPoints, normalized: NormalizedMetrics) -> float | None:
        """Calculate the code-hosting score."""
        if data.stars is None and data.forks is None:
            return None

        return compute_code_hosting_score(
            normalized.stars,
            normalized.forks,
            issue_close_rate(data.closed_issues, data.open_issues),
            normalized.contributors,
        )

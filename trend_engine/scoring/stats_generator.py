"""Batch statistics: grouping raw metrics and ranking them across technologies.

Raw values live on wildly different scales (millions of downloads, dozens of
job postings). Each metric is percentile-ranked across every technology in
the day's batch before the sub-score formulas see it. Ranks are computed once
per run and handed to evaluators as NormalizedMetrics.
"""

from collections import defaultdict

from trend_engine.consts import DOWNLOAD_SOURCES, METRIC_FIELD_MAP
from trend_engine.models.model_metrics import NormalizedMetrics, RawMetric, TechDataPoints
from trend_engine.scoring.normalize import percentile_rank_normalize

# NormalizedMetrics field -> TechDataPoints field
RANKED_METRICS = {
    "stars": "stars",
    "forks": "forks",
    "contributors": "active_contributors",
    "hn_mentions": "hn_mentions",
    "reddit_posts": "reddit_posts",
    "devto_articles": "devto_articles",
    "rss_mentions": "rss_mentions",
    "adzuna_jobs": "adzuna_jobs",
    "jsearch_jobs": "jsearch_jobs",
    "remotive_jobs": "remotive_jobs",
    "downloads": "downloads",
    "so_questions": "so_questions",
    "so_mentions": "so_mentions",
    "dependents": "dependents_count",
}


def _sum_downloads(data_points: list[RawMetric]) -> dict[str, float]:
    """Sum registry downloads per technology."""
    totals: dict[str, float] = defaultdict(float)
    for dp in data_points:
        if dp.metric == "downloads" and dp.source in DOWNLOAD_SOURCES:
            totals[dp.technology_id] += dp.value
    return dict(totals)


def group_data_points(
    data_points: list[RawMetric],
    technology_ids: list[str],
    prior_data_points: list[RawMetric] | None = None,
) -> dict[str, TechDataPoints]:
    """Group a day's raw metrics into one TechDataPoints per technology.

    Downloads from every package registry are summed. Metrics for unknown
    technologies and unrecognized source:metric keys are ignored.

    Args:
        data_points: Raw metrics measured on the scoring date
        technology_ids: Technologies in the batch
        prior_data_points: Raw metrics from one week earlier (for download growth)

    Returns:
        Dictionary mapping technology id to its grouped values
    """
    grouped = {tech_id: TechDataPoints(technology_id=tech_id) for tech_id in technology_ids}
    sources: dict[str, set[str]] = defaultdict(set)

    for dp in data_points:
        tech = grouped.get(dp.technology_id)
        if tech is None:
            continue

        tech.data_point_count += 1
        sources[dp.technology_id].add(dp.source)

        field = METRIC_FIELD_MAP.get(dp.key)
        if field is not None:
            setattr(tech, field, dp.value)

    for tech_id, total in _sum_downloads(data_points).items():
        if tech_id in grouped:
            grouped[tech_id].downloads = total

    for tech_id, total in _sum_downloads(prior_data_points or []).items():
        if tech_id in grouped:
            grouped[tech_id].prior_downloads = total

    for tech_id, tech_sources in sources.items():
        grouped[tech_id].sources = sorted(tech_sources)

    return grouped


def compute_normalized_metrics(techs: list[TechDataPoints]) -> dict[str, NormalizedMetrics]:
    """Percentile-rank every ranked metric across the batch.

    Technologies that did not report a metric are ranked as if they reported 0.

    Args:
        techs: All technologies in the day's batch

    Returns:
        Dictionary mapping technology id to its percentile ranks
    """
    if not techs:
        return {}

    ranks: dict[str, list[float]] = {}
    for normalized_field, raw_field in RANKED_METRICS.items():
        values = [getattr(tech, raw_field) or 0.0 for tech in techs]
        ranks[normalized_field] = percentile_rank_normalize(values)

    return {
        tech.technology_id: NormalizedMetrics(
            **{name: column[i] for name, column in ranks.items()}
        )
        for i, tech in enumerate(techs)
    }

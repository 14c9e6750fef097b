"""Raw metric models consumed by the scoring engine."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class Technology(BaseModel):
    """A tracked technology."""

    id: str = Field(description="Stable technology identifier (e.g. 'react')")
    name: str = Field(default="", description="Display name")
    category: str | None = Field(default=None, description="Category label (frontend, cloud, ...)")
    created_at: datetime | None = Field(default=None, description="When tracking started")

    def model_post_init(self, __context: object) -> None:
        """Default the display name to the id."""
        if not self.name:
            self.name = self.id


class RawMetric(BaseModel):
    """One measured value for one technology on one day from one source+metric pair.

    Immutable once recorded. Owned by the ingestion layer.
    """

    model_config = ConfigDict(frozen=True)

    technology_id: str
    source: str = Field(description="Data source (github, hackernews, npm, ...)")
    metric: str = Field(description="Metric name within the source (stars, mentions, ...)")
    value: float = Field(allow_inf_nan=False, description="Raw reading (NaN and inf rejected)")
    measured_at: date

    @property
    def key(self) -> str:
        """Lookup key in 'source:metric' form."""
        return f"{self.source}:{self.metric}"


class TechDataPoints(BaseModel):
    """All raw values reported for one technology on one day.

    None means the source did not report the metric, which is distinct from 0.
    """

    technology_id: str

    # Code hosting
    stars: float | None = None
    forks: float | None = None
    open_issues: float | None = None
    closed_issues: float | None = None
    active_contributors: float | None = None
    commit_velocity: float | None = None

    # Community
    hn_mentions: float | None = None
    hn_sentiment: float | None = None
    reddit_posts: float | None = None
    reddit_sentiment: float | None = None
    devto_articles: float | None = None
    rss_mentions: float | None = None

    # Jobs
    adzuna_jobs: float | None = None
    jsearch_jobs: float | None = None
    remotive_jobs: float | None = None

    # Ecosystem
    downloads: float | None = Field(default=None, description="Summed across package registries")
    prior_downloads: float | None = Field(
        default=None, description="Summed downloads from one week earlier"
    )
    so_questions: float | None = None
    so_mentions: float | None = None
    dependents_count: float | None = None
    dependent_repos: float | None = None
    sourcerank: float | None = None
    npms_quality: float | None = None
    npms_popularity: float | None = None
    npms_maintenance: float | None = None

    # On-chain (blockchain only)
    tvl_score: float | None = None
    dev_activity_score: float | None = None
    chain_activity_score: float | None = None

    # Bookkeeping
    data_point_count: int = Field(default=0, ge=0, description="Raw metrics reported today")
    sources: list[str] = Field(default_factory=list, description="Distinct reporting sources")


class NormalizedMetrics(BaseModel):
    """Percentile ranks (0-100) of a technology's raw values across the batch.

    Technologies that did not report a metric are ranked as if they reported 0.
    """

    stars: float = Field(default=50.0, ge=0.0, le=100.0)
    forks: float = Field(default=50.0, ge=0.0, le=100.0)
    contributors: float = Field(default=50.0, ge=0.0, le=100.0)
    hn_mentions: float = Field(default=50.0, ge=0.0, le=100.0)
    reddit_posts: float = Field(default=50.0, ge=0.0, le=100.0)
    devto_articles: float = Field(default=50.0, ge=0.0, le=100.0)
    rss_mentions: float = Field(default=50.0, ge=0.0, le=100.0)
    adzuna_jobs: float = Field(default=50.0, ge=0.0, le=100.0)
    jsearch_jobs: float = Field(default=50.0, ge=0.0, le=100.0)
    remotive_jobs: float = Field(default=50.0, ge=0.0, le=100.0)
    downloads: float = Field(default=50.0, ge=0.0, le=100.0)
    so_questions: float = Field(default=50.0, ge=0.0, le=100.0)
    so_mentions: float = Field(default=50.0, ge=0.0, le=100.0)
    dependents: float = Field(default=50.0, ge=0.0, le=100.0)

"""Score models: sub-scores, composite results and the persisted daily row."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from trend_engine.consts import DIMENSIONS
from trend_engine.models.common import _utc_now
from trend_engine.models.model_analysis import (
    ConfidenceGrade,
    LifecycleStage,
    MomentumTrend,
)


class SubScores(BaseModel):
    """Per-dimension scores for one technology on one day.

    None means "no data for this dimension today", never zero.
    """

    model_config = ConfigDict(frozen=True)

    code_hosting: float | None = Field(default=None, ge=0.0, le=100.0)
    community: float | None = Field(default=None, ge=0.0, le=100.0)
    jobs: float | None = Field(default=None, ge=0.0, le=100.0)
    ecosystem: float | None = Field(default=None, ge=0.0, le=100.0)
    onchain: float | None = Field(default=None, ge=0.0, le=100.0)

    def present(self) -> list[tuple[str, float]]:
        """Return (dimension, score) pairs for present dimensions in canonical order."""
        return [(d, getattr(self, d)) for d in DIMENSIONS if getattr(self, d) is not None]


class CompositeResult(BaseModel):
    """Composite score with category-relative completeness."""

    model_config = ConfigDict(frozen=True)

    composite: float = Field(ge=0.0, le=100.0)
    completeness: float = Field(ge=0.0, le=1.0)
    effective_weights: dict[str, float] = Field(
        default_factory=dict, description="Renormalized weights of present dimensions"
    )


class ScorePoint(BaseModel):
    """One point of a score history."""

    model_config = ConfigDict(frozen=True)

    date: date
    score: float


class LibrariesIoSignals(BaseModel):
    """Dependency-graph signals carried alongside the scores."""

    sourcerank: float | None = None
    dependents_count: float | None = None
    latest_release_age_days: int | None = None


class NpmsSignals(BaseModel):
    """Package quality signals carried alongside the scores."""

    quality: float | None = None
    popularity: float | None = None
    maintenance: float | None = None


class MomentumDetail(BaseModel):
    """Momentum analysis embedded in the daily row."""

    short_term: float
    medium_term: float
    long_term: float
    trend: MomentumTrend
    acceleration: float
    volatility: float
    streak: int


class ConfidenceSummary(BaseModel):
    """Confidence breakdown embedded in the daily row."""

    overall: int
    grade: ConfidenceGrade
    source_coverage: int
    signal_agreement: int


class LifecycleSummary(BaseModel):
    """Lifecycle classification embedded in the daily row."""

    stage: LifecycleStage
    confidence: float
    reasoning: list[str] = Field(default_factory=list)
    days_in_stage: int
    transition_probability: float


class RawSubScores(BaseModel):
    """Typed auxiliary record stored next to the numeric scores."""

    sub_scores: SubScores = Field(default_factory=SubScores)
    librariesio: LibrariesIoSignals | None = None
    npms: NpmsSignals | None = None
    momentum_detail: MomentumDetail | None = None
    confidence: ConfidenceSummary | None = None
    lifecycle: LifecycleSummary | None = None


class ScoreRow(BaseModel):
    """One persisted score row per technology per day."""

    technology_id: str
    score_date: date
    composite_score: float = Field(ge=0.0, le=100.0)
    code_hosting_score: float | None = Field(default=None, ge=0.0, le=100.0)
    community_score: float | None = Field(default=None, ge=0.0, le=100.0)
    jobs_score: float | None = Field(default=None, ge=0.0, le=100.0)
    ecosystem_score: float | None = Field(default=None, ge=0.0, le=100.0)
    onchain_score: float | None = Field(default=None, ge=0.0, le=100.0)
    momentum: float = Field(default=0.0, ge=-100.0, le=100.0, description="Legacy scalar")
    data_completeness: float = Field(default=0.0, ge=0.0, le=1.0)
    raw_sub_scores: RawSubScores = Field(default_factory=RawSubScores)
    computed_at: datetime = Field(default_factory=_utc_now)

    @property
    def sub_scores(self) -> SubScores:
        """Sub-scores of this row as a SubScores record."""
        return SubScores(
            code_hosting=self.code_hosting_score,
            community=self.community_score,
            jobs=self.jobs_score,
            ecosystem=self.ecosystem_score,
            onchain=self.onchain_score,
        )

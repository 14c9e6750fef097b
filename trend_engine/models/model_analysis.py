"""Time-series analysis models: momentum, anomalies, confidence, lifecycle."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MomentumTrend(str, Enum):
    """How a technology's score is moving."""

    ACCELERATING = "accelerating"  # moving and speeding up
    DECELERATING = "decelerating"  # moving but slowing down
    STABLE = "stable"
    REVERSING = "reversing"  # short and medium term disagree
    VOLATILE = "volatile"  # high variance, no clear direction


class MomentumAnalysis(BaseModel):
    """Multi-window momentum of a score series.

    Recomputed from history on every run; only the legacy scalar is persisted
    on the daily row.
    """

    model_config = ConfigDict(frozen=True)

    short_term: float = Field(default=0.0, description="Last-step delta of the 7-window EMA")
    medium_term: float = Field(default=0.0, description="Last-step delta of the 30-window EMA")
    long_term: float = Field(default=0.0, description="Last-step delta of the 90-window EMA")
    acceleration: float = Field(default=0.0, description="short_term - medium_term")
    volatility: float = Field(default=0.0, ge=0.0, description="Std dev of daily deltas")
    trend: MomentumTrend = Field(default=MomentumTrend.STABLE)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    streak: int = Field(default=0, description="Consecutive same-direction days, negative = down")


class MomentumRecord(BaseModel):
    """Momentum analysis row for one technology on one date."""

    technology_id: str
    analysis_date: date
    analysis: MomentumAnalysis
    legacy_momentum: float = Field(ge=-100.0, le=100.0)


class AnomalyType(str, Enum):
    """Kinds of anomalies."""

    SPIKE = "spike"
    DROP = "drop"
    DIVERGENCE = "divergence"
    TREND_BREAK = "trend_break"
    CORRELATION_BREAK = "correlation_break"


class AnomalySeverity(str, Enum):
    """Anomaly severity, lowest to highest."""

    INFO = "info"
    NOTABLE = "notable"
    SIGNIFICANT = "significant"
    CRITICAL = "critical"


class TechSignals(BaseModel):
    """Cross-dimension snapshot used for trend-break and divergence checks."""

    code_hosting_score: float = 0.0
    community_score: float = 0.0
    jobs_score: float = 0.0
    ecosystem_score: float = 0.0
    momentum: float = 0.0
    short_term_momentum: float | None = None
    medium_term_momentum: float | None = None
    long_term_momentum: float | None = None


class AnomalyDetectionResult(BaseModel):
    """A single detected anomaly.

    deviation_sigma is a true z-score only when is_true_sigma is set. Trend
    breaks and divergences report a magnitude divided by a constant so their
    severity tiers line up with the z-score checks.
    """

    model_config = ConfigDict(frozen=True)

    type: AnomalyType
    severity: AnomalySeverity
    source: str = Field(description="Signal family (overall, code_hosting, momentum, market, ...)")
    metric: str
    expected_value: float
    actual_value: float
    deviation_sigma: float = Field(ge=0.0)
    is_true_sigma: bool = Field(default=True, description="False for magnitude proxies")
    related_headlines: list[str] = Field(default_factory=list)


class ConfidenceGrade(str, Enum):
    """Letter grade for data confidence."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class ConfidenceBreakdown(BaseModel):
    """How much to trust a technology's score, with its components (0-100)."""

    overall: int = Field(ge=0, le=100)
    source_coverage: int = Field(ge=0, le=100)
    data_recency: int = Field(ge=0, le=100)
    historical_depth: int = Field(ge=0, le=100)
    signal_agreement: int = Field(ge=0, le=100)
    grade: ConfidenceGrade


class LifecycleStage(str, Enum):
    """Technology lifecycle stages."""

    EMERGING = "emerging"
    GROWING = "growing"
    MATURE = "mature"
    DECLINING = "declining"
    LEGACY = "legacy"
    NICHE = "niche"
    HYPE = "hype"
    PLATEAU = "plateau"


class LifecycleContext(BaseModel):
    """Inputs for lifecycle classification."""

    composite_score: float = Field(ge=0.0, le=100.0)
    momentum: MomentumAnalysis
    confidence: ConfidenceBreakdown
    data_age_days: int = Field(ge=0)
    category: str | None = None
    recent_scores: list[float] = Field(default_factory=list, description="Last 30 days")


class LifecycleClassification(BaseModel):
    """Lifecycle stage with reasoning."""

    stage: LifecycleStage
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: list[str] = Field(default_factory=list)
    days_in_stage: int = Field(ge=0)
    stage_transition_probability: float = Field(ge=0.0, le=1.0)
    previous_stage: LifecycleStage | None = None

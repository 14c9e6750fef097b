"""Pydantic models for the trend engine."""

from trend_engine.models.model_analysis import (
    AnomalyDetectionResult,
    AnomalySeverity,
    AnomalyType,
    ConfidenceBreakdown,
    ConfidenceGrade,
    LifecycleClassification,
    LifecycleContext,
    LifecycleStage,
    MomentumAnalysis,
    MomentumRecord,
    MomentumTrend,
    TechSignals,
)
from trend_engine.models.model_metrics import (
    NormalizedMetrics,
    RawMetric,
    TechDataPoints,
    Technology,
)
from trend_engine.models.model_scores import (
    CompositeResult,
    ConfidenceSummary,
    LibrariesIoSignals,
    LifecycleSummary,
    MomentumDetail,
    NpmsSignals,
    RawSubScores,
    ScorePoint,
    ScoreRow,
    SubScores,
)
from trend_engine.models.model_settings import EngineSettings, WeightProfile
from trend_engine.models.model_storage import MomentumFile, ScoresFile

__all__ = [
    # Input models
    "NormalizedMetrics",
    "RawMetric",
    "TechDataPoints",
    "Technology",
    # Score models
    "CompositeResult",
    "RawSubScores",
    "ScorePoint",
    "ScoreRow",
    "SubScores",
    # Auxiliary row records
    "ConfidenceSummary",
    "LibrariesIoSignals",
    "LifecycleSummary",
    "MomentumDetail",
    "NpmsSignals",
    # Analysis models
    "AnomalyDetectionResult",
    "AnomalySeverity",
    "AnomalyType",
    "ConfidenceBreakdown",
    "ConfidenceGrade",
    "LifecycleClassification",
    "LifecycleContext",
    "LifecycleStage",
    "MomentumAnalysis",
    "MomentumRecord",
    "MomentumTrend",
    "TechSignals",
    # Configuration
    "EngineSettings",
    "WeightProfile",
    # Storage models
    "MomentumFile",
    "ScoresFile",
]

"""Time-series analysis over a technology's score history."""

from trend_engine.analysis.anomaly import detect_anomalies, signals_from_row
from trend_engine.analysis.lifecycle import (
    classify_lifecycle,
    get_lifecycle_description,
    get_lifecycle_recommendation,
)
from trend_engine.analysis.momentum import (
    analyze_momentum,
    classify_trend,
    compute_ema,
    compute_legacy_momentum,
)

__all__ = [
    "analyze_momentum",
    "classify_trend",
    "compute_ema",
    "compute_legacy_momentum",
    "detect_anomalies",
    "signals_from_row",
    "classify_lifecycle",
    "get_lifecycle_description",
    "get_lifecycle_recommendation",
]

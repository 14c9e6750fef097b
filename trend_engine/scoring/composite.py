"""Composite scoring with weight redistribution for missing dimensions."""

from trend_engine.models.model_scores import CompositeResult, SubScores
from trend_engine.models.model_settings import EngineSettings, WeightProfile


def _effective_weights(
    sub_scores: SubScores, weights: WeightProfile
) -> list[tuple[str, float, float]]:
    """Collect (dimension, score, renormalized weight) for every present dimension.

    A dimension with no weight in the profile (onchain outside blockchain)
    does not take part. If the present weights sum to zero, they are
    treated as equal.
    """
    available = [
        (dimension, score, weights.weight_for(dimension))
        for dimension, score in sub_scores.present()
        if weights.weight_for(dimension) is not None
    ]
    if not available:
        return []

    total = sum(weight for _, _, weight in available)
    if total == 0:
        return [(dimension, score, 1 / len(available)) for dimension, score, _ in available]

    return [(dimension, score, weight / total) for dimension, score, weight in available]


def compute_composite_score(
    sub_scores: SubScores,
    weights: WeightProfile | None = None,
    category: str | None = None,
    settings: EngineSettings | None = None,
) -> CompositeResult:
    """Compute the composite score, redistributing weight away from missing dimensions.

    A technology missing a data source is scored on the dimensions it has;
    completeness separately reports how much of the picture is missing,
    relative to what its category can achieve.

    Args:
        sub_scores: Dimension scores (None = no data today)
        weights: Weight profile (defaults to the settings' default profile)
        category: Technology category for the completeness denominator
        settings: Engine settings (defaults if None)

    Returns:
        CompositeResult with composite rounded to 2 decimals
    """
    settings = settings or EngineSettings()
    weights = weights or settings.default_weights

    available = _effective_weights(sub_scores, weights)
    if not available:
        return CompositeResult(composite=0.0, completeness=0.0)

    composite = sum(score * weight for _, score, weight in available)
    completeness = min(1.0, len(available) / settings.max_dimensions_for(category))

    return CompositeResult(
        composite=min(100.0, max(0.0, round(composite, 2))),
        completeness=completeness,
        effective_weights={dimension: weight for dimension, _, weight in available},
    )

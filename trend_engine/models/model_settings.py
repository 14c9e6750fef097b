"""Configuration models for scoring technologies."""

from pydantic import BaseModel, ConfigDict, Field

from trend_engine import consts


class WeightProfile(BaseModel):
    """Dimension weights for the composite score.

    Weights need not sum to 1.0. Only the weights of dimensions that are
    present on a given day are renormalized at aggregation time.
    """

    model_config = ConfigDict(frozen=True)

    code_hosting: float = Field(default=0.25, ge=0.0)
    community: float = Field(default=0.20, ge=0.0)
    jobs: float = Field(default=0.25, ge=0.0)
    ecosystem: float = Field(default=0.30, ge=0.0)
    onchain: float | None = Field(default=None, ge=0.0, description="Blockchain only")

    def weight_for(self, dimension: str) -> float | None:
        """Get the weight for a dimension name."""
        return getattr(self, dimension)

    def total(self) -> float:
        """Sum of all defined weights."""
        return sum(w for w in (self.weight_for(d) for d in consts.DIMENSIONS) if w is not None)


def _default_weights() -> WeightProfile:
    return WeightProfile(**consts.DEFAULT_WEIGHTS)


def _default_category_weights() -> dict[str, WeightProfile]:
    return {name: WeightProfile(**weights) for name, weights in consts.CATEGORY_WEIGHTS.items()}


class EngineSettings(BaseModel):
    """Immutable engine configuration.

    Every scoring function receives settings explicitly. Nothing reads a
    module-level table at call time, so one instance can be shared across
    workers without locking.
    """

    model_config = ConfigDict(frozen=True)

    default_weights: WeightProfile = Field(default_factory=_default_weights)
    category_weights: dict[str, WeightProfile] = Field(default_factory=_default_category_weights)
    max_dimensions: dict[str, int] = Field(
        default_factory=lambda: dict(consts.MAX_POSSIBLE_DIMENSIONS),
        description="Completeness denominator per category",
    )
    default_max_dimensions: int = Field(default=consts.DEFAULT_MAX_DIMENSIONS, ge=1)
    max_sources: dict[str, int] = Field(default_factory=lambda: dict(consts.MAX_SOURCES))
    default_max_sources: int = Field(default=consts.DEFAULT_MAX_SOURCES, ge=1)
    max_daily_metrics: int = Field(default=consts.MAX_DAILY_METRICS, ge=1)
    default_category: str = Field(default=consts.DEFAULT_CATEGORY)
    default_data_age_days: int = Field(default=consts.DEFAULT_DATA_AGE_DAYS, ge=0)
    bayesian_prior_weight: float = Field(default=consts.BAYESIAN_PRIOR_WEIGHT, ge=0.0)
    history_window_days: int = Field(default=consts.HISTORY_WINDOW_DAYS, ge=1)

    def weights_for(self, category: str | None) -> WeightProfile:
        """Get the base weight profile for a category (default if unknown)."""
        if category is None:
            return self.default_weights
        return self.category_weights.get(category, self.default_weights)

    def max_dimensions_for(self, category: str | None) -> int:
        """Get the completeness denominator for a category."""
        if category is None:
            return self.default_max_dimensions
        return self.max_dimensions.get(category, self.default_max_dimensions)

    def max_sources_for(self, category: str | None) -> int:
        """Get the expected number of raw data sources for a category."""
        if category is None:
            return self.default_max_sources
        return self.max_sources.get(category, self.default_max_sources)

"""Adaptive weight profiles by category and data maturity."""

from trend_engine.models.model_settings import EngineSettings, WeightProfile

# Days of data after which a technology counts as mature
MATURITY_DAYS = 365


def get_adaptive_weights(
    category: str | None,
    data_age_days: int,
    data_completeness: float,
    settings: EngineSettings | None = None,
) -> WeightProfile:
    """Compute weights from the category profile adjusted for maturity.

    New technologies lean on early signals (code hosting, community). Mature
    technologies lean on adoption signals (jobs, ecosystem). Sparse data
    shifts weight away from jobs, which is often missing for niche
    technologies. The result always sums to 1.0.

    Args:
        category: Technology category (unknown categories use the default profile)
        data_age_days: Days since tracking started
        data_completeness: Share of daily metrics reported (0-1)
        settings: Engine settings (defaults if None)

    Returns:
        WeightProfile summing to 1.0
    """
    settings = settings or EngineSettings()
    base = settings.weights_for(category)

    maturity = min(1.0, max(0, data_age_days) / MATURITY_DAYS)

    raw = {
        "code_hosting": base.code_hosting * (1 + (1 - maturity) * 0.3),
        "community": base.community * (1 + (1 - maturity) * 0.2),
        "jobs": base.jobs * (1 + maturity * 0.2),
        "ecosystem": base.ecosystem * (1 + maturity * 0.1),
    }
    if base.onchain is not None:
        raw["onchain"] = base.onchain

    if data_completeness < 0.5:
        raw["jobs"] *= 0.8
        raw["ecosystem"] *= 0.9
        raw["code_hosting"] *= 1.1
        raw["community"] *= 1.1

    total = sum(raw.values())
    if total == 0:
        return base

    return WeightProfile(**{name: weight / total for name, weight in raw.items()})

"""Statistical transforms shared by every sub-score formula.

All functions are total: degenerate inputs (zero variance, empty series,
inverted ranges, non-finite values) return defined values instead of raising.
"""

import math

from scipy.stats import norm, rankdata

MIDPOINT = 50.0


def z_score_to_100(z: float) -> float:
    """Map a z-score onto 0-100 through the standard normal CDF.

    z=0 maps to 50, the mapping is monotonic and saturates toward 0 and 100
    for large |z|.
    """
    if math.isnan(z):
        return MIDPOINT
    return float(norm.cdf(z)) * 100


def min_max_normalize(value: float, min_value: float, max_value: float) -> float:
    """Linearly scale value from [min_value, max_value] to [0, 100], clamping outside."""
    if math.isnan(value) or max_value <= min_value:
        return MIDPOINT
    if value <= min_value:
        return 0.0
    if value >= max_value:
        return 100.0
    return (value - min_value) / (max_value - min_value) * 100


def z_score_normalize(values: list[float]) -> list[float]:
    """Normalize a series to 0-100 via population z-scores.

    A zero-variance series maps every value to the midpoint.
    """
    if not values:
        return []

    mean = sum(values) / len(values)
    std = math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))
    if std == 0:
        return [MIDPOINT] * len(values)

    return [z_score_to_100((v - mean) / std) for v in values]


def percentile_rank_normalize(values: list[float]) -> list[float]:
    """Rank each value among all values, scaled to 0-100.

    The smallest value ranks 0 and the largest 100. Ties share their average
    rank. A single value, or a series of identical values, ranks 50.
    """
    if not values:
        return []
    if min(values) == max(values):
        return [MIDPOINT] * len(values)

    ranks = rankdata(values, method="average")
    span = len(values) - 1
    return [float((rank - 1) / span * 100) for rank in ranks]

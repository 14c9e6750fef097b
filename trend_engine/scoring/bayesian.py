"""Bayesian smoothing of composite scores for low-data technologies."""


def bayesian_smooth(
    score: float,
    data_points: int,
    prior_mean: float,
    prior_weight: float,
) -> float:
    """Shrink a score toward the prior mean in proportion to how little data backs it.

    Computes (n * score + C * prior_mean) / (n + C), where n is the number of
    raw data points behind the score and C the prior strength in data points.
    With C = 0 the score is returned unchanged.

    Args:
        score: Raw composite score (0-100)
        data_points: Raw metrics that fed the score
        prior_mean: Mean composite across the batch
        prior_weight: Prior strength C

    Returns:
        Smoothed score (0-100)
    """
    n = max(0, data_points)
    if prior_weight <= 0 or n + prior_weight == 0:
        return score
    return (n * score + prior_weight * prior_mean) / (n + prior_weight)

"""Base evaluator protocol defining the contract for all dimension evaluators."""

from typing import Protocol

from trend_engine.models.model_metrics import NormalizedMetrics, TechDataPoints


class BaseEvaluator(Protocol):
    """Protocol defining the evaluator contract.

    Evaluators are pure functions of a technology's raw values and its
    percentile ranks within the day's batch. They return a score between
    0-100, or None when the technology reported no data for the dimension.
    """

    dimension: str

    def evaluate(self, data: TechDataPoints, normalized: NormalizedMetrics) -> float | None:
        """Evaluate a technology on this dimension.

        Args:
            data: Raw values reported by the technology today
            normalized: Percentile ranks of those values across the batch

        Returns:
            Score between 0-100, or None if the dimension has no data
        """
        ...

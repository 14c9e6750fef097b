"""On-chain activity score, blockchain technologies only."""

from trend_engine.models.common import clamp
from trend_engine.models.model_metrics import NormalizedMetrics, TechDataPoints


def compute_onchain_score(
    tvl_score: float = 0.0,
    dev_activity_score: float = 0.0,
    chain_activity_score: float = 0.0,
    has_protocol: bool = False,
) -> float:
    """On-chain score (0-100), rounded to a whole number.

    Technologies without a protocol of their own (languages, toolchains) have
    no locked value, so their weight moves to developer and chain activity.
    """
    if has_protocol:
        raw = tvl_score * 0.40 + dev_activity_score * 0.40 + chain_activity_score * 0.20
    else:
        raw = dev_activity_score * 0.70 + chain_activity_score * 0.30
    return float(round(clamp(raw)))


class OnchainEvaluator:
    """Scores on-chain activity. Present only if an on-chain signal was reported."""

    dimension = "onchain"

    def evaluate(self, data: TechDataPoints, normalized: NormalizedMetrics) -> float | None:
        """Calculate the on-chain score from pre-scaled (0-100) inputs."""
        signals = (data.tvl_score, data.dev_activity_score, data.chain_activity_score)
        if all(v is None for v in signals):
            return None

        return compute_onchain_score(
            data.tvl_score or 0.0,
            data.dev_activity_score or 0.0,
            data.chain_activity_score or 0.0,
            has_protocol=data.tvl_score is not None,
        )

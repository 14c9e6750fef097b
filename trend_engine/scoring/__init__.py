"""Scoring module turning raw technology signals into sub-scores and a composite.

Technologies are scored on four dimensions (plus on-chain for blockchain):
- Code hosting (stars, forks, issue closing, contributors)
- Community (discussion volume and sentiment)
- Jobs (postings across job boards)
- Ecosystem (downloads, Q&A activity, dependents)

Raw values are percentile-ranked across the day's batch, scored per
dimension, then blended with weights redistributed away from missing
dimensions.
"""

from trend_engine.scoring.adaptive_weights import get_adaptive_weights
from trend_engine.scoring.base import BaseEvaluator
from trend_engine.scoring.bayesian import bayesian_smooth
from trend_engine.scoring.code_hosting import CodeHostingEvaluator, compute_code_hosting_score
from trend_engine.scoring.community import CommunityEvaluator, compute_community_score
from trend_engine.scoring.composite import compute_composite_score
from trend_engine.scoring.confidence import (
    compute_confidence,
    get_confidence_description,
    get_confidence_label,
)
from trend_engine.scoring.ecosystem import EcosystemEvaluator, compute_ecosystem_score
from trend_engine.scoring.jobs import JobsEvaluator, compute_jobs_score
from trend_engine.scoring.normalize import (
    min_max_normalize,
    percentile_rank_normalize,
    z_score_normalize,
    z_score_to_100,
)
from trend_engine.scoring.onchain import OnchainEvaluator, compute_onchain_score
from trend_engine.scoring.registry import ScoringRegistry
from trend_engine.scoring.stats_generator import compute_normalized_metrics, group_data_points

__all__ = [
    # Protocol
    "BaseEvaluator",
    # Individual evaluators
    "CodeHostingEvaluator",
    "CommunityEvaluator",
    "JobsEvaluator",
    "EcosystemEvaluator",
    "OnchainEvaluator",
    # Sub-score formulas
    "compute_code_hosting_score",
    "compute_community_score",
    "compute_jobs_score",
    "compute_ecosystem_score",
    "compute_onchain_score",
    # Orchestration
    "ScoringRegistry",
    # Normalization
    "min_max_normalize",
    "percentile_rank_normalize",
    "z_score_normalize",
    "z_score_to_100",
    "group_data_points",
    "compute_normalized_metrics",
    # Composite scoring
    "compute_composite_score",
    "get_adaptive_weights",
    "bayesian_smooth",
    # Confidence
    "compute_confidence",
    "get_confidence_label",
    "get_confidence_description",
]

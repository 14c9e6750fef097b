"""Evaluator registry for orchestrating all dimension evaluators."""

from datetime import date

from trend_engine.models.model_metrics import NormalizedMetrics, TechDataPoints, Technology
from trend_engine.models.model_scores import (
    LibrariesIoSignals,
    NpmsSignals,
    RawSubScores,
    ScoreRow,
    SubScores,
)
from trend_engine.models.model_settings import EngineSettings
from trend_engine.scoring.adaptive_weights import get_adaptive_weights
from trend_engine.scoring.code_hosting import CodeHostingEvaluator
from trend_engine.scoring.community import CommunityEvaluator
from trend_engine.scoring.composite import compute_composite_score
from trend_engine.scoring.ecosystem import EcosystemEvaluator
from trend_engine.scoring.jobs import JobsEvaluator
from trend_engine.scoring.onchain import OnchainEvaluator


def data_age_days(technology: Technology, score_date: date, settings: EngineSettings) -> int:
    """Days between the start of tracking and the scoring date."""
    if technology.created_at is None:
        return settings.default_data_age_days
    return max(0, (score_date - technology.created_at.date()).days)


class ScoringRegistry:
    """Orchestrates all dimension evaluators to score technologies.

    This registry manages the dimension evaluators and provides a unified
    interface for turning one technology's raw values into a score row. It
    handles:
    - Running all dimension evaluators
    - Choosing adaptive weights for the category and maturity
    - Calculating the composite score and completeness
    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        """Initialize registry with all evaluators."""
        self.settings = settings or EngineSettings()
        self.evaluators = {
            "code_hosting": CodeHostingEvaluator(),
            "community": CommunityEvaluator(),
            "jobs": JobsEvaluator(),
            "ecosystem": EcosystemEvaluator(),
            "onchain": OnchainEvaluator(),
        }

    def evaluate_sub_scores(self, data: TechDataPoints, normalized: NormalizedMetrics) -> SubScores:
        """Run every evaluator for one technology."""
        return SubScores(
            **{name: evaluator.evaluate(data, normalized) for name, evaluator in self.evaluators.items()}
        )

    def score_technology(
        self,
        technology: Technology,
        data: TechDataPoints,
        normalized: NormalizedMetrics,
        score_date: date,
    ) -> ScoreRow:
        """Score one technology for one day.

        The returned row carries the unsmoothed composite and a zero momentum;
        the pipeline fills both in once the whole batch is scored.

        Args:
            technology: The technology being scored
            data: Its raw values for the day
            normalized: Its percentile ranks within the batch
            score_date: Scoring date

        Returns:
            ScoreRow for the technology
        """
        sub_scores = self.evaluate_sub_scores(data, normalized)

        category = technology.category or self.settings.default_category
        weights = get_adaptive_weights(
            category,
            data_age_days(technology, score_date, self.settings),
            data.data_point_count / self.settings.max_daily_metrics,
            self.settings,
        )
        result = compute_composite_score(sub_scores, weights, category, self.settings)

        return ScoreRow(
            technology_id=technology.id,
            score_date=score_date,
            composite_score=result.composite,
            code_hosting_score=sub_scores.code_hosting,
            community_score=sub_scores.community,
            jobs_score=sub_scores.jobs,
            ecosystem_score=sub_scores.ecosystem,
            onchain_score=sub_scores.onchain,
            data_completeness=result.completeness,
            raw_sub_scores=RawSubScores(
                sub_scores=sub_scores,
                librariesio=_librariesio_signals(data),
                npms=_npms_signals(data),
            ),
        )


def _librariesio_signals(data: TechDataPoints) -> LibrariesIoSignals | None:
    if data.sourcerank is None and data.dependents_count is None:
        return None
    return LibrariesIoSignals(sourcerank=data.sourcerank, dependents_count=data.dependents_count)


def _npms_signals(data: TechDataPoints) -> NpmsSignals | None:
    if data.npms_quality is None and data.npms_maintenance is None:
        return None
    return NpmsSignals(
        quality=data.npms_quality,
        popularity=data.npms_popularity,
        maintenance=data.npms_maintenance,
    )

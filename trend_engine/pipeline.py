"""Pipeline orchestration for one day's scoring run.

This module coordinates all steps of the scoring workflow:
1. Group raw metrics per technology
2. Percentile-rank raw metrics across the batch
3. Evaluate sub-scores and the adaptive-weight composite
4. Bayesian-smooth composites toward the batch mean
5. Analyze momentum, confidence and lifecycle against history
6. Build momentum records and detect anomalies

Nothing here reads or writes storage; callers pass history in and persist the
returned rows.
"""

import logging
from datetime import UTC, date, datetime

from pydantic import BaseModel, Field

from trend_engine.analysis.anomaly import detect_anomalies, signals_from_row
from trend_engine.analysis.lifecycle import classify_lifecycle
from trend_engine.analysis.momentum import analyze_momentum, compute_legacy_momentum
from trend_engine.consts import BAYESIAN_FALLBACK_MEAN
from trend_engine.models.model_analysis import (
    AnomalyDetectionResult,
    LifecycleContext,
    MomentumRecord,
)
from trend_engine.models.model_metrics import RawMetric, Technology
from trend_engine.models.model_scores import (
    ConfidenceSummary,
    LifecycleSummary,
    MomentumDetail,
    ScorePoint,
    ScoreRow,
)
from trend_engine.models.model_settings import EngineSettings
from trend_engine.scoring.bayesian import bayesian_smooth
from trend_engine.scoring.confidence import compute_confidence
from trend_engine.scoring.registry import ScoringRegistry, data_age_days
from trend_engine.scoring.stats_generator import compute_normalized_metrics, group_data_points

logger = logging.getLogger(__name__)

# Recent scores handed to the lifecycle classifier
LIFECYCLE_RECENT_DAYS = 30


class PipelineError(BaseModel):
    """A technology that failed during the run."""

    technology_id: str
    stage: str
    message: str


class PipelineResult(BaseModel):
    """Everything one scoring run produced."""

    score_date: date
    rows: list[ScoreRow] = Field(default_factory=list)
    momentum_records: list[MomentumRecord] = Field(default_factory=list)
    anomalies: dict[str, list[AnomalyDetectionResult]] = Field(default_factory=dict)
    errors: list[PipelineError] = Field(default_factory=list)

    @property
    def scored(self) -> int:
        """Number of technologies that produced a row."""
        return len(self.rows)

    @property
    def anomaly_count(self) -> int:
        """Total anomalies across all technologies."""
        return sum(len(found) for found in self.anomalies.values())


def _analyze_row(
    technology: Technology,
    row: ScoreRow,
    history: list[ScoreRow],
    active_sources: int,
    settings: EngineSettings,
) -> tuple[ScoreRow, MomentumRecord, list[AnomalyDetectionResult]]:
    """Run the history-dependent stages for one technology.

    Args:
        technology: The technology being scored
        row: Today's row with its smoothed composite
        history: Previous rows in chronological order
        active_sources: Distinct sources that reported today
        settings: Engine settings

    Returns:
        Tuple of (final row, momentum record, anomalies)
    """
    series = [ScorePoint(date=r.score_date, score=r.composite_score) for r in history]
    series.append(ScorePoint(date=row.score_date, score=row.composite_score))

    momentum = analyze_momentum(series)
    legacy = compute_legacy_momentum(momentum)

    category = technology.category or settings.default_category
    confidence = compute_confidence(
        category,
        active_sources=active_sources,
        last_data_point_age_hours=0,
        history_days=len(series),
        sub_scores=row.sub_scores,
        settings=settings,
    )

    lifecycle = classify_lifecycle(
        LifecycleContext(
            composite_score=row.composite_score,
            momentum=momentum,
            confidence=confidence,
            data_age_days=data_age_days(technology, row.score_date, settings),
            category=category,
            recent_scores=[p.score for p in series[-LIFECYCLE_RECENT_DAYS:]],
        )
    )

    raw = row.raw_sub_scores.model_copy(
        update={
            "momentum_detail": MomentumDetail(
                short_term=momentum.short_term,
                medium_term=momentum.medium_term,
                long_term=momentum.long_term,
                trend=momentum.trend,
                acceleration=momentum.acceleration,
                volatility=momentum.volatility,
                streak=momentum.streak,
            ),
            "confidence": ConfidenceSummary(
                overall=confidence.overall,
                grade=confidence.grade,
                source_coverage=confidence.source_coverage,
                signal_agreement=confidence.signal_agreement,
            ),
            "lifecycle": LifecycleSummary(
                stage=lifecycle.stage,
                confidence=lifecycle.confidence,
                reasoning=lifecycle.reasoning,
                days_in_stage=lifecycle.days_in_stage,
                transition_probability=lifecycle.stage_transition_probability,
            ),
        }
    )
    final_row = row.model_copy(update={"momentum": legacy, "raw_sub_scores": raw})

    record = MomentumRecord(
        technology_id=technology.id,
        analysis_date=row.score_date,
        analysis=momentum,
        legacy_momentum=legacy,
    )
    anomalies = detect_anomalies(final_row, history, signals_from_row(final_row))

    return final_row, record, anomalies


def run_scoring_pipeline(
    technologies: list[Technology],
    data_points: list[RawMetric],
    score_date: date,
    history: dict[str, list[ScoreRow]] | None = None,
    prior_data_points: list[RawMetric] | None = None,
    settings: EngineSettings | None = None,
    computed_at: datetime | None = None,
) -> PipelineResult:
    """Run the full scoring pipeline for one day.

    A failure inside one technology's stages is logged and recorded in
    ``errors``; the remaining technologies are still scored.

    Args:
        technologies: Technologies in the batch
        data_points: Raw metrics measured on score_date
        score_date: Day being scored
        history: Previous score rows per technology id, chronological
        prior_data_points: Raw metrics from one week earlier (download growth)
        settings: Engine settings. Uses defaults if None.
        computed_at: Timestamp stamped on every row. Uses the current time if None.

    Returns:
        PipelineResult with rows, momentum records, anomalies and errors
    """
    settings = settings or EngineSettings()
    history = history or {}
    computed_at = computed_at or datetime.now(UTC)
    result = PipelineResult(score_date=score_date)

    logger.info(f"Starting scoring pipeline for {score_date} ({len(technologies)} technologies)")
    start_time = datetime.now(UTC)

    # Step 1: Group raw metrics
    logger.info("Step 1/6: Grouping data points...")
    technology_ids = [tech.id for tech in technologies]
    grouped = group_data_points(data_points, technology_ids, prior_data_points)
    logger.info(f"Grouped {len(data_points)} data points")

    # Step 2: Normalize across the batch
    logger.info("Step 2/6: Ranking metrics across technologies...")
    normalized = compute_normalized_metrics(list(grouped.values()))

    # Step 3: Sub-scores and composite
    logger.info("Step 3/6: Evaluating sub-scores...")
    registry = ScoringRegistry(settings)
    raw_rows: dict[str, ScoreRow] = {}
    for tech in technologies:
        try:
            raw_rows[tech.id] = registry.score_technology(
                tech, grouped[tech.id], normalized[tech.id], score_date
            ).model_copy(update={"computed_at": computed_at})
        except Exception as e:
            logger.exception(f"Failed to score {tech.id}")
            result.errors.append(PipelineError(technology_id=tech.id, stage="score", message=str(e)))

    # Step 4: Bayesian smoothing
    logger.info("Step 4/6: Smoothing composites...")
    if raw_rows:
        prior_mean = sum(r.composite_score for r in raw_rows.values()) / len(raw_rows)
    else:
        prior_mean = BAYESIAN_FALLBACK_MEAN
    logger.debug(f"Batch mean composite: {prior_mean:.2f}")

    smoothed: dict[str, ScoreRow] = {}
    for tech_id, row in raw_rows.items():
        score = bayesian_smooth(
            row.composite_score,
            grouped[tech_id].data_point_count,
            prior_mean,
            settings.bayesian_prior_weight,
        )
        smoothed[tech_id] = row.model_copy(update={"composite_score": round(score, 2)})

    # Step 5-6: History-dependent analysis and anomalies
    logger.info("Step 5/6: Analyzing momentum, confidence and lifecycle...")
    for tech in technologies:
        row = smoothed.get(tech.id)
        if row is None:
            continue
        try:
            final_row, record, anomalies = _analyze_row(
                tech,
                row,
                history.get(tech.id, []),
                len(grouped[tech.id].sources),
                settings,
            )
        except Exception as e:
            logger.exception(f"Failed to analyze {tech.id}")
            result.errors.append(
                PipelineError(technology_id=tech.id, stage="analyze", message=str(e))
            )
            continue

        result.rows.append(final_row)
        result.momentum_records.append(record)
        result.anomalies[tech.id] = anomalies

    logger.info(f"Step 6/6: Detected {result.anomaly_count} anomalies")

    duration = (datetime.now(UTC) - start_time).total_seconds()
    logger.info(
        f"Pipeline complete in {duration:.2f}s: {result.scored} scored, {len(result.errors)} failed"
    )
    return result

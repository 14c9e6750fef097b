"""Tests for the batch scoring pipeline."""

from datetime import UTC, datetime

import pytest

import trend_engine.pipeline as pipeline_module
from trend_engine.models.model_metrics import Technology
from trend_engine.models.model_settings import EngineSettings
from trend_engine.pipeline import PipelineResult, run_scoring_pipeline
from trend_engine.scoring.registry import ScoringRegistry
from trend_engine.scoring.stats_generator import compute_normalized_metrics, group_data_points

COMPUTED_AT = datetime(2024, 6, 1, 6, 0, tzinfo=UTC)


@pytest.fixture
def result(sample_technologies, sample_data_points, score_date) -> PipelineResult:
    """Pipeline result for the sample batch."""
    return run_scoring_pipeline(
        sample_technologies, sample_data_points, score_date, computed_at=COMPUTED_AT
    )


class TestRunScoringPipeline:
    """Tests for run_scoring_pipeline."""

    def test_scores_every_technology(self, result: PipelineResult) -> None:
        """Test each technology gets a row, a momentum record and an anomaly list."""
        assert result.scored == 3
        assert result.errors == []
        assert [r.technology_id for r in result.rows] == ["react", "svelte", "postgres"]
        assert [m.technology_id for m in result.momentum_records] == ["react", "svelte", "postgres"]
        assert set(result.anomalies) == {"react", "svelte", "postgres"}

    def test_rows_are_valid(self, result: PipelineResult, score_date) -> None:
        """Test row invariants hold for every technology."""
        for row in result.rows:
            assert row.score_date == score_date
            assert row.computed_at == COMPUTED_AT
            assert 0.0 <= row.composite_score <= 100.0
            assert 0.0 <= row.data_completeness <= 1.0
            assert -100.0 <= row.momentum <= 100.0
            for _, score in row.sub_scores.present():
                assert 0.0 <= score <= 100.0

    def test_missing_dimensions_stay_missing(self, result: PipelineResult) -> None:
        """Test a technology without repository data has no code-hosting score."""
        postgres = next(r for r in result.rows if r.technology_id == "postgres")
        assert postgres.code_hosting_score is None
        assert postgres.community_score is not None
        assert postgres.jobs_score is not None
        assert postgres.ecosystem_score is not None
        assert postgres.data_completeness == 0.75

    def test_raw_sub_scores_filled(self, result: PipelineResult) -> None:
        """Test the typed auxiliary record carries momentum, confidence and lifecycle."""
        for row in result.rows:
            raw = row.raw_sub_scores
            assert raw.momentum_detail is not None
            assert raw.confidence is not None
            assert raw.lifecycle is not None
            assert raw.sub_scores == row.sub_scores

    def test_deterministic(self, sample_technologies, sample_data_points, score_date) -> None:
        """Test re-running on unchanged inputs gives the same output."""
        first = run_scoring_pipeline(
            sample_technologies, sample_data_points, score_date, computed_at=COMPUTED_AT
        )
        second = run_scoring_pipeline(
            sample_technologies, sample_data_points, score_date, computed_at=COMPUTED_AT
        )
        assert first.rows == second.rows
        assert first.momentum_records == second.momentum_records
        assert first.anomalies == second.anomalies

    def test_zero_prior_weight_skips_smoothing(
        self, sample_technologies, sample_data_points, score_date
    ) -> None:
        """Test composites equal the raw registry composites without a prior."""
        settings = EngineSettings(bayesian_prior_weight=0.0)
        result = run_scoring_pipeline(
            sample_technologies, sample_data_points, score_date, settings=settings
        )

        grouped = group_data_points(sample_data_points, [t.id for t in sample_technologies])
        normalized = compute_normalized_metrics(list(grouped.values()))
        registry = ScoringRegistry(settings)
        for tech, row in zip(sample_technologies, result.rows):
            raw = registry.score_technology(tech, grouped[tech.id], normalized[tech.id], score_date)
            assert row.composite_score == raw.composite_score

    def test_smoothing_pulls_toward_batch_mean(
        self, sample_technologies, sample_data_points, score_date
    ) -> None:
        """Test smoothed composites sit between the raw score and the batch mean."""
        raw = run_scoring_pipeline(
            sample_technologies,
            sample_data_points,
            score_date,
            settings=EngineSettings(bayesian_prior_weight=0.0),
        )
        smoothed = run_scoring_pipeline(sample_technologies, sample_data_points, score_date)

        mean = sum(r.composite_score for r in raw.rows) / len(raw.rows)
        for before, after in zip(raw.rows, smoothed.rows):
            low, high = sorted([before.composite_score, mean])
            assert low - 0.01 <= after.composite_score <= high + 0.01

    def test_history_feeds_momentum(
        self, sample_technologies, sample_data_points, score_date, rows_factory
    ) -> None:
        """Test stored history reaches the momentum analyzer."""
        history = {"react": rows_factory("react", [50.0] * 29)}
        result = run_scoring_pipeline(
            sample_technologies, sample_data_points, score_date, history=history
        )

        records = {m.technology_id: m for m in result.momentum_records}
        assert records["react"].analysis.confidence == 0.5
        assert records["svelte"].analysis.confidence == 0.0
        assert records["react"].legacy_momentum == next(
            r.momentum for r in result.rows if r.technology_id == "react"
        )

    def test_history_depth_counts_today(
        self, sample_technologies, sample_data_points, score_date, rows_factory, monkeypatch
    ) -> None:
        """Test 29 stored rows plus today give a full 30 days of history depth."""
        original = pipeline_module.compute_confidence
        depths = []

        def spy(category, **kwargs):
            breakdown = original(category, **kwargs)
            depths.append(breakdown.historical_depth)
            return breakdown

        monkeypatch.setattr(pipeline_module, "compute_confidence", spy)

        history = {"react": rows_factory("react", [50.0] * 29)}
        result = run_scoring_pipeline(
            sample_technologies, sample_data_points, score_date, history=history
        )

        # react, svelte, postgres in batch order; one day is 1/30 of full depth
        assert result.scored == 3
        assert depths == [100, 3, 3]

    def test_failing_technology_is_isolated(
        self, sample_technologies, sample_data_points, score_date, monkeypatch
    ) -> None:
        """Test one technology failing to score does not stop the batch."""
        original = ScoringRegistry.score_technology

        def flaky(self, technology, *args, **kwargs):
            if technology.id == "svelte":
                raise ValueError("malformed record")
            return original(self, technology, *args, **kwargs)

        monkeypatch.setattr(ScoringRegistry, "score_technology", flaky)

        result = run_scoring_pipeline(sample_technologies, sample_data_points, score_date)

        assert [r.technology_id for r in result.rows] == ["react", "postgres"]
        assert len(result.errors) == 1
        assert result.errors[0].technology_id == "svelte"
        assert result.errors[0].stage == "score"
        assert "malformed record" in result.errors[0].message

    def test_failing_analysis_is_isolated(
        self, sample_technologies, sample_data_points, score_date, monkeypatch
    ) -> None:
        """Test a failure in the history stages is recorded per technology."""
        original = pipeline_module.detect_anomalies

        def flaky(current, history, signals):
            if current.technology_id == "react":
                raise RuntimeError("boom")
            return original(current, history, signals)

        monkeypatch.setattr(pipeline_module, "detect_anomalies", flaky)

        result = run_scoring_pipeline(sample_technologies, sample_data_points, score_date)

        assert [r.technology_id for r in result.rows] == ["svelte", "postgres"]
        assert result.errors[0].technology_id == "react"
        assert result.errors[0].stage == "analyze"
        assert "react" not in result.anomalies

    def test_empty_batch(self, score_date) -> None:
        """Test an empty batch produces an empty result."""
        result = run_scoring_pipeline([], [], score_date)
        assert result.scored == 0
        assert result.errors == []
        assert result.anomaly_count == 0

    def test_technology_without_data(self, score_date) -> None:
        """Test a technology with no metrics scores zero with zero completeness."""
        result = run_scoring_pipeline([Technology(id="ghost")], [], score_date)

        row = result.rows[0]
        assert row.technology_id == "ghost"
        assert row.data_completeness == 0.0
        assert row.sub_scores.present() == []

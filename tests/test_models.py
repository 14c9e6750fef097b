"""Tests for pydantic models and settings."""

from datetime import date

import pytest
from pydantic import ValidationError

from trend_engine.models.model_metrics import RawMetric, Technology
from trend_engine.models.model_scores import ScoreRow, SubScores
from trend_engine.models.model_settings import EngineSettings, WeightProfile


class TestSubScores:
    """Tests for SubScores."""

    def test_present_in_canonical_order(self) -> None:
        """Test present() skips missing dimensions and keeps dimension order."""
        sub_scores = SubScores(ecosystem=10.0, code_hosting=70.0, onchain=5.0)
        assert sub_scores.present() == [
            ("code_hosting", 70.0),
            ("ecosystem", 10.0),
            ("onchain", 5.0),
        ]

    def test_zero_is_present(self) -> None:
        """Test a zero score is data, not a missing dimension."""
        assert SubScores(jobs=0.0).present() == [("jobs", 0.0)]

    @pytest.mark.parametrize("value", [-0.1, 100.1])
    def test_range_validated(self, value: float) -> None:
        """Test scores outside [0, 100] are rejected."""
        with pytest.raises(ValidationError):
            SubScores(community=value)

    def test_frozen(self) -> None:
        """Test sub-scores cannot be mutated."""
        sub_scores = SubScores(jobs=10.0)
        with pytest.raises(ValidationError):
            sub_scores.jobs = 20.0


class TestWeightProfile:
    """Tests for WeightProfile."""

    def test_rejects_negative(self) -> None:
        """Test negative weights are invalid."""
        with pytest.raises(ValidationError):
            WeightProfile(jobs=-0.1)

    def test_total_and_lookup(self) -> None:
        """Test weight lookup and total, including the optional on-chain weight."""
        weights = WeightProfile(code_hosting=1, community=1, jobs=1, ecosystem=1, onchain=2)
        assert weights.weight_for("onchain") == 2
        assert weights.total() == 6
        assert WeightProfile().weight_for("onchain") is None
        assert WeightProfile().total() == pytest.approx(1.0)


class TestEngineSettings:
    """Tests for EngineSettings."""

    def test_category_lookups(self, settings: EngineSettings) -> None:
        """Test category tables with defaults for unknown categories."""
        assert settings.max_dimensions_for("cloud") == 2
        assert settings.max_dimensions_for("quantum") == 4
        assert settings.max_dimensions_for(None) == 4
        assert settings.max_sources_for("frontend") == 14
        assert settings.max_sources_for(None) == 12
        assert settings.weights_for("blockchain").onchain == 0.20
        assert settings.weights_for("quantum") == settings.default_weights

    def test_frozen(self, settings: EngineSettings) -> None:
        """Test settings cannot be mutated after construction."""
        with pytest.raises(ValidationError):
            settings.bayesian_prior_weight = 10.0


def test_technology_name_defaults_to_id():
    """Test the display name falls back to the id."""
    assert Technology(id="rust").name == "rust"
    assert Technology(id="rust", name="Rust").name == "Rust"


def test_raw_metric_key():
    """Test the source:metric lookup key."""
    dp = RawMetric(
        technology_id="react", source="github", metric="stars", value=5, measured_at=date(2024, 1, 1)
    )
    assert dp.key == "github:stars"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_raw_metric_rejects_non_finite(value: float):
    """Test a non-finite reading is rejected before it can skew batch ranks."""
    with pytest.raises(ValidationError):
        RawMetric(
            technology_id="react",
            source="github",
            metric="stars",
            value=value,
            measured_at=date(2024, 1, 1),
        )


def test_score_row_momentum_range():
    """Test the legacy momentum scalar is bounded."""
    with pytest.raises(ValidationError):
        ScoreRow(
            technology_id="react",
            score_date=date(2024, 1, 1),
            composite_score=50.0,
            momentum=150.0,
        )

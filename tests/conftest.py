"""Pytest configuration and fixtures."""

import tempfile
from datetime import UTC, date, datetime, timedelta
from pathlib import Path

import pytest

from trend_engine.models.model_metrics import RawMetric, Technology
from trend_engine.models.model_scores import ScoreRow
from trend_engine.models.model_settings import EngineSettings

SCORE_DATE = date(2024, 6, 1)


def make_rows(
    technology_id: str,
    scores: list[float],
    end_date: date = SCORE_DATE,
    **sub_scores: float | None,
) -> list[ScoreRow]:
    """Build chronological daily rows ending the day before end_date."""
    start = end_date - timedelta(days=len(scores))
    return [
        ScoreRow(
            technology_id=technology_id,
            score_date=start + timedelta(days=i),
            composite_score=score,
            **sub_scores,
        )
        for i, score in enumerate(scores)
    ]


def metric(tech_id: str, key: str, value: float, measured_at: date = SCORE_DATE) -> RawMetric:
    """Build a RawMetric from a 'source:metric' key."""
    source, name = key.split(":")
    return RawMetric(
        technology_id=tech_id, source=source, metric=name, value=value, measured_at=measured_at
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings() -> EngineSettings:
    """Default engine settings."""
    return EngineSettings()


@pytest.fixture
def score_date() -> date:
    """Fixed scoring date."""
    return SCORE_DATE


@pytest.fixture
def sample_technologies() -> list[Technology]:
    """Three technologies across categories, of different ages."""
    return [
        Technology(
            id="react",
            name="React",
            category="frontend",
            created_at=datetime(2020, 1, 1, tzinfo=UTC),
        ),
        Technology(
            id="svelte",
            name="Svelte",
            category="frontend",
            created_at=datetime(2024, 3, 1, tzinfo=UTC),
        ),
        Technology(id="postgres", name="PostgreSQL", category="database"),
    ]


@pytest.fixture
def sample_data_points() -> list[RawMetric]:
    """One day of raw metrics for the sample technologies."""
    rows = {
        "react": {
            "github:stars": 220_000,
            "github:forks": 45_000,
            "github:open_issues": 800,
            "github:closed_issues": 12_000,
            "github:active_contributors": 1_600,
            "hackernews:mentions": 120,
            "hackernews:sentiment": 0.7,
            "reddit:posts": 300,
            "devto:articles": 90,
            "adzuna:job_postings": 15_000,
            "jsearch:job_postings": 9_000,
            "npm:downloads": 25_000_000,
        },
        "svelte": {
            "github:stars": 78_000,
            "github:forks": 4_000,
            "github:open_issues": 700,
            "github:closed_issues": 4_000,
            "hackernews:mentions": 60,
            "reddit:posts": 80,
            "adzuna:job_postings": 800,
            "npm:downloads": 1_200_000,
        },
        "postgres": {
            "hackernews:mentions": 40,
            "reddit:posts": 150,
            "adzuna:job_postings": 20_000,
            "jsearch:job_postings": 11_000,
            "remotive:job_postings": 300,
            "stackoverflow:questions": 160_000,
        },
    }
    return [
        metric(tech_id, key, value)
        for tech_id, metrics in rows.items()
        for key, value in metrics.items()
    ]


@pytest.fixture
def rows_factory():
    """Factory for chronological score rows."""
    return make_rows


@pytest.fixture
def metric_factory():
    """Factory for raw metrics."""
    return metric

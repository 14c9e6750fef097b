"""Storage file models for persisting computed scores."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from trend_engine.models.common import _utc_now
from trend_engine.models.model_analysis import MomentumRecord
from trend_engine.models.model_scores import ScoreRow


class ScoresFile(BaseModel):
    """Scores file stored in data/scores/{date}.json.

    Superseded by the next run for the same date, never patched in place.
    """

    version: str = Field(default="1.0", description="Schema version for migrations")
    score_date: date
    computed_at: datetime = Field(default_factory=_utc_now)
    rows: list[ScoreRow] = Field(default_factory=list)


class MomentumFile(BaseModel):
    """Momentum file stored in data/momentum/{date}.json."""

    version: str = Field(default="1.0")
    analysis_date: date
    computed_at: datetime = Field(default_factory=_utc_now)
    records: list[MomentumRecord] = Field(default_factory=list)

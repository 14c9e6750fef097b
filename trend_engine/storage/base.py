"""Abstract base class for score storage backends.

The scoring engine never talks to storage itself. The pipeline is handed
history and returns rows; a store sits on either side of it.
"""

from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path

from trend_engine.models.model_analysis import MomentumRecord
from trend_engine.models.model_scores import ScoreRow


class ScoreStore(ABC):
    """Abstract base class for score storage implementations.

    Rows are keyed by (technology_id, score_date). Saving a date supersedes
    anything previously stored for it.
    """

    @abstractmethod
    def save_scores(self, score_date: date, rows: list[ScoreRow]) -> Path:
        """Save all score rows for one date.

        Args:
            score_date: Date the rows were scored for.
            rows: Score rows, one per technology.

        Returns:
            Path or identifier where the rows were stored.
        """
        ...

    @abstractmethod
    def load_scores(self, score_date: date) -> list[ScoreRow]:
        """Load all score rows for one date.

        Args:
            score_date: Date to load.

        Returns:
            Stored rows, empty if the date has none.
        """
        ...

    @abstractmethod
    def load_history(
        self, technology_id: str, end_date: date, days: int = 90
    ) -> list[ScoreRow]:
        """Load one technology's rows in the window before end_date.

        Args:
            technology_id: Technology to load.
            end_date: Exclusive upper bound.
            days: Window length in days.

        Returns:
            Rows in chronological order.
        """
        ...

    @abstractmethod
    def list_dates(self) -> list[date]:
        """List dates that have stored scores, ascending."""
        ...

    @abstractmethod
    def save_momentum(self, analysis_date: date, records: list[MomentumRecord]) -> Path:
        """Save all momentum records for one date."""
        ...

    @abstractmethod
    def load_momentum(self, analysis_date: date) -> list[MomentumRecord]:
        """Load all momentum records for one date."""
        ...

"""File-based score storage.

Each date is one JSON file, rewritten whole on every run for that date.
"""

import json
import logging
from datetime import UTC, date, datetime, timedelta
from pathlib import Path

from trend_engine.consts import DEFAULT_DATA_DIR, HISTORY_WINDOW_DAYS
from trend_engine.models.model_analysis import MomentumRecord
from trend_engine.models.model_scores import ScoreRow
from trend_engine.models.model_storage import MomentumFile, ScoresFile
from trend_engine.storage.base import ScoreStore

logger = logging.getLogger(__name__)


class FileScoreStore(ScoreStore):
    """File-based storage for daily scores.

    Directory structure:
        data/
        ├── scores/{YYYY-MM-DD}.json     # One ScoresFile per date
        └── momentum/{YYYY-MM-DD}.json   # One MomentumFile per date
    """

    def __init__(self, data_dir: Path | str = DEFAULT_DATA_DIR):
        """Initialize FileScoreStore with data directory.

        Args:
            data_dir: Root directory for all data files.
        """
        self.data_dir = Path(data_dir)
        self._scores_dir = self.data_dir / "scores"
        self._momentum_dir = self.data_dir / "momentum"

    def _ensure_dirs(self, *dirs: Path) -> None:
        """Create directories if they don't exist."""
        for d in dirs:
            d.mkdir(parents=True, exist_ok=True)

    def _scores_path(self, score_date: date) -> Path:
        return self._scores_dir / f"{score_date.isoformat()}.json"

    def _momentum_path(self, analysis_date: date) -> Path:
        return self._momentum_dir / f"{analysis_date.isoformat()}.json"

    # === SCORE OPERATIONS ===

    def save_scores(self, score_date: date, rows: list[ScoreRow]) -> Path:
        """Save score rows for a date, replacing any earlier run.

        Args:
            score_date: Date the rows were scored for.
            rows: Score rows, one per technology.

        Returns:
            Path to the saved scores file.
        """
        self._ensure_dirs(self._scores_dir)

        scores_file = ScoresFile(
            score_date=score_date,
            computed_at=datetime.now(UTC),
            rows=rows,
        )
        path = self._scores_path(score_date)
        path.write_text(scores_file.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Saved scores: {path} ({len(rows)} technologies)")
        return path

    def load_scores_file(self, score_date: date) -> ScoresFile | None:
        """Load the full scores file for a date.

        Args:
            score_date: Date to load.

        Returns:
            ScoresFile if found, None otherwise.
        """
        path = self._scores_path(score_date)
        if not path.exists():
            logger.debug(f"Scores not found: {path}")
            return None

        data = json.loads(path.read_text(encoding="utf-8"))
        return ScoresFile.model_validate(data)

    def load_scores(self, score_date: date) -> list[ScoreRow]:
        """Load score rows for a date.

        Args:
            score_date: Date to load.

        Returns:
            Stored rows, empty if the date has none.
        """
        scores_file = self.load_scores_file(score_date)
        return scores_file.rows if scores_file else []

    def load_history(
        self, technology_id: str, end_date: date, days: int = HISTORY_WINDOW_DAYS
    ) -> list[ScoreRow]:
        """Load one technology's rows in [end_date - days, end_date).

        Args:
            technology_id: Technology to load.
            end_date: Exclusive upper bound.
            days: Window length in days.

        Returns:
            Rows in chronological order.
        """
        start_date = end_date - timedelta(days=days)
        history = []
        for stored_date in self.list_dates():
            if not start_date <= stored_date < end_date:
                continue
            for row in self.load_scores(stored_date):
                if row.technology_id == technology_id:
                    history.append(row)
                    break
        return history

    def load_all_history(
        self, technology_ids: list[str], end_date: date, days: int = HISTORY_WINDOW_DAYS
    ) -> dict[str, list[ScoreRow]]:
        """Load history for many technologies, reading each date file once.

        Args:
            technology_ids: Technologies to load.
            end_date: Exclusive upper bound.
            days: Window length in days.

        Returns:
            Dictionary mapping technology id to its chronological rows.
        """
        wanted = set(technology_ids)
        start_date = end_date - timedelta(days=days)
        history: dict[str, list[ScoreRow]] = {tech_id: [] for tech_id in technology_ids}
        for stored_date in self.list_dates():
            if not start_date <= stored_date < end_date:
                continue
            for row in self.load_scores(stored_date):
                if row.technology_id in wanted:
                    history[row.technology_id].append(row)
        return history

    def list_dates(self) -> list[date]:
        """List dates that have stored scores, ascending.

        Returns:
            Sorted list of dates.
        """
        if not self._scores_dir.exists():
            return []

        dates = []
        for path in self._scores_dir.glob("*.json"):
            try:
                dates.append(date.fromisoformat(path.stem))
            except ValueError:
                logger.warning(f"Skipping unrecognized scores file: {path}")
        return sorted(dates)

    def latest_date(self) -> date | None:
        """Most recent date with stored scores, None if the store is empty."""
        dates = self.list_dates()
        return dates[-1] if dates else None

    # === MOMENTUM OPERATIONS ===

    def save_momentum(self, analysis_date: date, records: list[MomentumRecord]) -> Path:
        """Save momentum records for a date, replacing any earlier run.

        Args:
            analysis_date: Date the analysis was run for.
            records: Momentum records, one per technology.

        Returns:
            Path to the saved momentum file.
        """
        self._ensure_dirs(self._momentum_dir)

        momentum_file = MomentumFile(
            analysis_date=analysis_date,
            computed_at=datetime.now(UTC),
            records=records,
        )
        path = self._momentum_path(analysis_date)
        path.write_text(momentum_file.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Saved momentum: {path} ({len(records)} technologies)")
        return path

    def load_momentum(self, analysis_date: date) -> list[MomentumRecord]:
        """Load momentum records for a date.

        Args:
            analysis_date: Date to load.

        Returns:
            Stored records, empty if the date has none.
        """
        path = self._momentum_path(analysis_date)
        if not path.exists():
            logger.debug(f"Momentum not found: {path}")
            return []

        data = json.loads(path.read_text(encoding="utf-8"))
        return MomentumFile.model_validate(data).records

"""Storage backends for persisting daily scores.

This module provides:
- ScoreStore: Abstract base class for score storage
- FileScoreStore: JSON file implementation
"""

from trend_engine.storage.base import ScoreStore
from trend_engine.storage.file_store import FileScoreStore

__all__ = [
    "FileScoreStore",
    "ScoreStore",
]

from .catalog import CatalogEntry, ChartCatalog
from .entities.enums import ClearRank, Difficulty, Grade
from .entities.record import (
    Chart,
    NotePlayResult,
    NoteResult,
    PlayResult,
    ScorePlayResult,
    ScoreResult,
    Song,
)
from .exceptions import ArcaeaError, InvalidProfile, UnknownChart, UnknownClearType

__all__ = (
    "ArcaeaError",
    "CatalogEntry",
    "Chart",
    "ChartCatalog",
    "ClearRank",
    "Difficulty",
    "Grade",
    "InvalidProfile",
    "NotePlayResult",
    "NoteResult",
    "PlayResult",
    "ScorePlayResult",
    "ScoreResult",
    "Song",
    "UnknownChart",
    "UnknownClearType",
)

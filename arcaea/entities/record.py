from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional, Union

from dataclasses_json import LetterCase, dataclass_json

from arcaea.entities.enums import ClearRank, Difficulty, Grade
from arcaea.exceptions import InvalidProfile


@dataclass_json
@dataclass(frozen=True)
class BeyondAddon:
    # Some Beyond charts are distinct sub-songs with their own title and cover.
    song: Optional[str] = None
    cover: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL)  # type: ignore[reportGeneralTypeIssues]
@dataclass(frozen=True, kw_only=True)
class Chart:
    id: str
    song_id: str
    difficulty: Difficulty
    constant: float
    level: str
    note: int
    byd: Optional[BeyondAddon] = None


@dataclass_json(letter_case=LetterCase.CAMEL)  # type: ignore[reportGeneralTypeIssues]
@dataclass(frozen=True, kw_only=True)
class Song:
    id: str
    name: str
    bpm: str
    cover: str
    pack: Optional[str] = None
    charts: list[Chart] = field(default_factory=list)

    def chart(self, difficulty: Difficulty) -> Optional[Chart]:
        return next((c for c in self.charts if c.difficulty == difficulty), None)


@dataclass(frozen=True)
class NoteResult:
    pure: int
    perfect: int
    far: int
    lost: int


@dataclass(frozen=True)
class ScoreResult:
    chart_id: str
    score: int
    grade: Grade
    potential: Decimal


@dataclass(frozen=True, kw_only=True)
class ScorePlayResult:
    """A stored result where only the final score is known."""

    chart_id: str
    clear: Optional[ClearRank]
    score: int


@dataclass(frozen=True, kw_only=True)
class NotePlayResult:
    """A stored result carrying the full judgment counts."""

    chart_id: str
    clear: Optional[ClearRank]
    result: NoteResult


PlayResult = Union[ScorePlayResult, NotePlayResult]


def play_result_from_dict(data: dict[str, Any]) -> PlayResult:
    try:
        clear = ClearRank(data["clear"]) if data.get("clear") is not None else None
        match data.get("type"):
            case "score":
                return ScorePlayResult(
                    chart_id=data["chartId"], clear=clear, score=int(data["score"])
                )
            case "note":
                result = data["result"]
                return NotePlayResult(
                    chart_id=data["chartId"],
                    clear=clear,
                    result=NoteResult(
                        pure=int(result["pure"]),
                        perfect=int(result["perfect"]),
                        far=int(result["far"]),
                        lost=int(result["lost"]),
                    ),
                )
            case other:
                msg = f"unknown play result type {other!r}"
                raise InvalidProfile(msg)
    except (KeyError, TypeError, ValueError) as e:
        msg = f"malformed play result {data!r}"
        raise InvalidProfile(msg) from e


def play_result_to_dict(play_result: PlayResult) -> dict[str, Any]:
    clear = play_result.clear.value if play_result.clear is not None else None
    match play_result:
        case ScorePlayResult(chart_id=chart_id, score=score):
            return {"type": "score", "chartId": chart_id, "clear": clear, "score": score}
        case NotePlayResult(chart_id=chart_id, result=result):
            return {
                "type": "note",
                "chartId": chart_id,
                "clear": clear,
                "result": {
                    "pure": result.pure,
                    "perfect": result.perfect,
                    "far": result.far,
                    "lost": result.lost,
                },
            }
        case _:
            msg = f"Unknown play result variant: {type(play_result).__name__}"
            raise TypeError(msg)

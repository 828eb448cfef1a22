import dataclasses
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from arcaea.entities.enums import ClearRank
from arcaea.entities.record import (
    Chart,
    NoteResult,
    PlayResult,
    ScoreResult,
    Song,
    play_result_from_dict,
    play_result_to_dict,
)
from arcaea.exceptions import InvalidProfile
from utils import round_half_up
from utils.calculation.score import play_result_score

PROFILE_VERSION = 1


@dataclass(kw_only=True)
class Profile:
    username: str
    # Rating as reported by the game, kept verbatim.
    potential: str = "0"
    best: dict[str, PlayResult] = field(default_factory=dict)
    characters: Optional[list[Any]] = None
    version: int = PROFILE_VERSION

    @classmethod
    def empty(cls, username: str) -> "Profile":
        return cls(username=username)

    @classmethod
    def from_dict(cls, data: Any) -> "Profile":
        if not isinstance(data, dict):
            msg = "top level is not an object"
            raise InvalidProfile(msg)
        if data.get("version") != PROFILE_VERSION:
            msg = f"unsupported version {data.get('version')!r}"
            raise InvalidProfile(msg)
        if not isinstance(data.get("username"), str):
            msg = "username must be a string"
            raise InvalidProfile(msg)
        if not isinstance(data.get("potential"), str):
            msg = "potential must be a string"
            raise InvalidProfile(msg)
        try:
            potential = Decimal(data["potential"])
        except InvalidOperation:
            potential = None
        if potential is None or not potential.is_finite():
            msg = "potential must be a decimal string"
            raise InvalidProfile(msg)
        if not isinstance(data.get("best"), dict):
            msg = "best must be an object"
            raise InvalidProfile(msg)
        characters = data.get("characters")
        if characters is not None and not isinstance(characters, list):
            msg = "characters must be a list"
            raise InvalidProfile(msg)

        return cls(
            username=data["username"],
            potential=data["potential"],
            best={
                chart_id: play_result_from_dict(value)
                for chart_id, value in data["best"].items()
            },
            characters=characters,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "username": self.username,
            "potential": self.potential,
            "best": {
                chart_id: play_result_to_dict(result)
                for chart_id, result in self.best.items()
            },
        }
        if self.characters is not None:
            data["characters"] = self.characters
        return data

    def with_potential(self, potential: "float | Decimal") -> "Profile":
        return dataclasses.replace(self, potential=str(round_half_up(potential, 2)))

    def merge(self, results: dict[str, PlayResult]) -> "Profile":
        return dataclasses.replace(self, best={**self.best, **results})

    def add_result(
        self, chart: Chart, play_result: PlayResult, *, replace: bool = False
    ) -> bool:
        """Store ``play_result`` as the best result for its chart.

        Unless ``replace`` is set, an existing result is only overwritten by
        a strictly higher score. Returns whether the result was stored.
        """
        old_result = self.best.get(play_result.chart_id)
        if not replace and old_result is not None:
            if play_result_score(chart, play_result) <= play_result_score(
                chart, old_result
            ):
                return False

        self.best[play_result.chart_id] = play_result
        return True

    def remove_result(self, chart_id: str) -> Optional[PlayResult]:
        return self.best.pop(chart_id, None)


@dataclass(frozen=True, kw_only=True)
class BestResultItem:
    no: int
    chart: Chart
    song: Song
    clear: Optional[ClearRank]
    # None when only the score was recorded.
    note: Optional[NoteResult]
    score: ScoreResult


@dataclass(frozen=True, kw_only=True)
class B30Response:
    username: Optional[str] = None
    potential: Optional[str] = None

    ranked: list[BestResultItem]
    b30: list[BestResultItem]
    b31_39: list[BestResultItem]

    max_potential: Decimal
    min_potential: Decimal
    # None when there are no results to average over.
    r10_average: Optional[Decimal]
    b30_average: Optional[Decimal]

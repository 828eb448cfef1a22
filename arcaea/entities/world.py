from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from dataclasses_json import dataclass_json


class RewardType(Enum):
    CHARACTER = "character"
    SONG = "song"
    BACKGROUND = "background"
    ITEM = "item"

    def __str__(self):
        return self.name.capitalize()


@dataclass_json
@dataclass(frozen=True)
class Reward:
    type: RewardType
    name: Optional[str] = None
    id: Optional[str] = None
    count: Optional[int] = None
    img: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.count:
            return f"{self.name or self.id} x{self.count}"
        return self.name or self.id or str(self.type)


@dataclass_json
@dataclass(frozen=True)
class MapPlatform:
    length: float
    reward: Optional[Reward] = None


@dataclass_json
@dataclass(frozen=True)
class WorldMap:
    id: str
    platforms: list[MapPlatform] = field(default_factory=list)

    @property
    def last_level(self) -> int:
        return len(self.platforms)

    def platform(self, level: int) -> MapPlatform:
        # Levels are numbered from 1.
        if not 1 <= level <= len(self.platforms):
            msg = f"Map {self.id} has no level {level}"
            raise IndexError(msg)
        return self.platforms[level - 1]

    @classmethod
    def from_lengths(cls, map_id: str, lengths: "list[float]") -> "WorldMap":
        return cls(map_id, [MapPlatform(length) for length in lengths])


@dataclass(frozen=True)
class CurrentProgress:
    level: int
    # Distance still to walk inside the current level.
    progress: float


@dataclass(frozen=True)
class LegacyBonus:
    fragment: float
    stamina: int

    @property
    def ratio(self) -> Decimal:
        return Decimal(str(self.fragment)) * self.stamina

    def __str__(self) -> str:
        return f"legacy (fragment x{self.fragment}, stamina x{self.stamina})"


@dataclass(frozen=True)
class NewBonus:
    x4: bool

    @property
    def ratio(self) -> Decimal:
        return Decimal(4) if self.x4 else Decimal(1)

    def __str__(self) -> str:
        return "new (x4)" if self.x4 else "new"


WorldMapBonus = Union[LegacyBonus, NewBonus]


@dataclass(frozen=True, kw_only=True)
class InverseProgressSolution:
    bonus: Optional[WorldMapBonus] = None

    low_potential: Decimal
    high_potential: Optional[Decimal]

    invalid_message: Optional[str] = None
    pm_range: Optional[tuple[Decimal, Decimal]] = None

    @property
    def feasible(self) -> bool:
        return self.invalid_message is None and self.pm_range is not None


@dataclass(frozen=True)
class NextRewardInfo:
    reward: Reward
    level: int
    remaining: Decimal


@dataclass(frozen=True)
class RemainingProgress:
    next_reward: Optional[NextRewardInfo]
    total: Decimal

from enum import Enum

from arcaea.consts import (
    A_SCORE,
    AA_SCORE,
    B_SCORE,
    C_SCORE,
    EX_PLUS_SCORE,
    EX_SCORE,
)
from arcaea.exceptions import UnknownClearType


class Difficulty(Enum):
    PAST = "pst"
    PRESENT = "prs"
    FUTURE = "ftr"
    BEYOND = "byd"

    def __str__(self):
        return self.name.capitalize()

    @property
    def index(self) -> int:
        match self:
            case Difficulty.PAST:
                return 0
            case Difficulty.PRESENT:
                return 1
            case Difficulty.FUTURE:
                return 2
            case Difficulty.BEYOND:
                return 3

    def short_form(self):
        return self.value.upper()

    @classmethod
    def from_index(cls, index: int):
        for difficulty in cls:
            if difficulty.index == index:
                return difficulty

        msg = f"Unknown difficulty index: {index}"
        raise ValueError(msg)

    @classmethod
    def from_short_form(cls, short_form: str):
        try:
            return cls(short_form.lower())
        except ValueError:
            msg = f"Unknown difficulty short form: {short_form}"
            raise ValueError(msg) from None


class ClearRank(Enum):
    TRACK_LOST = "TL"
    NORMAL_CLEAR = "NC"
    HARD_CLEAR = "HC"
    FULL_RECALL = "FR"
    PURE_MEMORY = "PM"
    MAXIMUM = "MAX"
    EASY_CLEAR = "EC"

    def __str__(self):
        return self.name.replace("_", " ").title()

    @property
    def is_assist(self) -> bool:
        return self in {ClearRank.EASY_CLEAR, ClearRank.HARD_CLEAR}

    @classmethod
    def from_clear_type(cls, clear_type: int):
        if clear_type == 0:
            return cls.TRACK_LOST
        if clear_type == 1:
            return cls.NORMAL_CLEAR
        if clear_type == 2:
            return cls.FULL_RECALL
        if clear_type == 3:
            return cls.PURE_MEMORY
        if clear_type == 4:
            return cls.EASY_CLEAR
        if clear_type == 5:
            return cls.HARD_CLEAR

        raise UnknownClearType(clear_type)


class Grade(Enum):
    D = 0
    C = 1
    B = 2
    A = 3
    AA = 4
    EX = 5
    EXp = 6

    def __str__(self) -> str:
        return self.name.replace("p", "+")

    @classmethod
    def from_score(cls, score: int):
        if score >= EX_PLUS_SCORE:
            return cls.EXp
        if score >= EX_SCORE:
            return cls.EX
        if score >= AA_SCORE:
            return cls.AA
        if score >= A_SCORE:
            return cls.A
        if score >= B_SCORE:
            return cls.B
        if score >= C_SCORE:
            return cls.C
        return cls.D

    @property
    def min_score(self) -> int:
        match self.value:
            case 0:
                return 0
            case 1:
                return C_SCORE
            case 2:
                return B_SCORE
            case 3:
                return A_SCORE
            case 4:
                return AA_SCORE
            case 5:
                return EX_SCORE
            case 6:
                return EX_PLUS_SCORE

import pytest

from arcaea.entities.enums import ClearRank, Difficulty, Grade
from arcaea.exceptions import UnknownClearType


@pytest.mark.parametrize(
    ("index", "expected"),
    [
        (0, Difficulty.PAST),
        (1, Difficulty.PRESENT),
        (2, Difficulty.FUTURE),
        (3, Difficulty.BEYOND),
    ],
)
def test_difficulty_index(index, expected):
    assert Difficulty.from_index(index) == expected
    assert expected.index == index


def test_difficulty_from_index_rejects_unknown():
    with pytest.raises(ValueError, match="Unknown difficulty index: 4"):
        Difficulty.from_index(4)


def test_difficulty_short_form():
    assert Difficulty.from_short_form("FTR") == Difficulty.FUTURE
    assert Difficulty.BEYOND.short_form() == "BYD"
    assert str(Difficulty.PRESENT) == "Present"

    with pytest.raises(ValueError, match="Unknown difficulty short form: ETR"):
        Difficulty.from_short_form("ETR")


@pytest.mark.parametrize(
    ("grade", "name", "min_score"),
    [
        (Grade.EXp, "EX+", 9_900_000),
        (Grade.EX, "EX", 9_800_000),
        (Grade.AA, "AA", 9_500_000),
        (Grade.A, "A", 9_200_000),
        (Grade.B, "B", 8_900_000),
        (Grade.C, "C", 8_600_000),
        (Grade.D, "D", 0),
    ],
)
def test_grade_thresholds(grade, name, min_score):
    assert str(grade) == name
    assert grade.min_score == min_score
    assert Grade.from_score(min_score) == grade


def test_clear_rank_from_clear_type():
    assert [ClearRank.from_clear_type(i) for i in range(6)] == [
        ClearRank.TRACK_LOST,
        ClearRank.NORMAL_CLEAR,
        ClearRank.FULL_RECALL,
        ClearRank.PURE_MEMORY,
        ClearRank.EASY_CLEAR,
        ClearRank.HARD_CLEAR,
    ]

    with pytest.raises(UnknownClearType, match="Unknown clear type: -1"):
        ClearRank.from_clear_type(-1)


def test_clear_rank_assist():
    assert ClearRank.EASY_CLEAR.is_assist
    assert ClearRank.HARD_CLEAR.is_assist
    assert not ClearRank.MAXIMUM.is_assist
    assert str(ClearRank.FULL_RECALL) == "Full Recall"

from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal
from typing import Optional

from arcaea.consts import (
    AA_RATIO,
    AA_SCORE,
    EX_RATIO,
    EX_SCORE,
    MAX_BASE_SCORE,
    PM_MODIFIER,
)
from arcaea.entities.enums import ClearRank, Grade
from arcaea.entities.record import (
    Chart,
    NotePlayResult,
    NoteResult,
    PlayResult,
    ScorePlayResult,
    ScoreResult,
)
from utils import round_half_ceiling, round_to_step, to_decimal

# Below this PM target, constants are only published in half-point steps.
FINE_CONSTANT_THRESHOLD = 8


def compute_score(chart: Chart, note_result: NoteResult) -> int:
    # Integer form of floor(MAX * (1 - (far / 2 + lost) / note)).
    lost_halves = note_result.far + 2 * note_result.lost
    base = MAX_BASE_SCORE * (2 * chart.note - lost_halves) // (2 * chart.note)
    return base + note_result.perfect


def compute_grade(score: int) -> Grade:
    return Grade.from_score(score)


def compute_clear_rank(
    note_result: NoteResult, chart: Chart, clear: Optional[ClearRank]
) -> Optional[ClearRank]:
    """Derive the clear rank from judgment counts where they determine it.

    A full combo with far notes is a Full Recall, except that some partners
    can still fail the track on the last note, so an explicit Track Lost is
    kept. Once notes are lost the counts say nothing about the clear, and
    the supplied rank is returned as is.
    """
    if note_result.lost == 0:
        if note_result.far == 0:
            if note_result.perfect == chart.note:
                return ClearRank.MAXIMUM
            return ClearRank.PURE_MEMORY
        if clear != ClearRank.TRACK_LOST:
            return ClearRank.FULL_RECALL
    return clear


def map_clear_type(clear_type: int, shiny_perfect_count: int, chart: Chart) -> ClearRank:
    if shiny_perfect_count == chart.note:
        return ClearRank.MAXIMUM
    return ClearRank.from_clear_type(clear_type)


def compute_potential_modifier(score: int) -> Decimal:
    if score >= MAX_BASE_SCORE:
        # Scores above the base maximum only come from perfect bonuses.
        return Decimal(PM_MODIFIER)
    if score >= EX_SCORE:
        return Decimal(score - EX_SCORE) / EX_RATIO + 1
    return Decimal(score - EX_SCORE) / AA_RATIO + 1


def compute_potential(score: int, chart: Chart) -> Decimal:
    return max(Decimal(0), to_decimal(chart.constant) + compute_potential_modifier(score))


def compute_score_result(score: int, chart: Chart) -> ScoreResult:
    return ScoreResult(
        chart_id=chart.id,
        score=score,
        grade=compute_grade(score),
        potential=compute_potential(score, chart),
    )


def play_result_score(chart: Chart, play_result: PlayResult) -> int:
    match play_result:
        case ScorePlayResult(score=score):
            return score
        case NotePlayResult(result=note_result):
            return compute_score(chart, note_result)
        case _:
            msg = f"Unknown play result variant: {type(play_result).__name__}"
            raise TypeError(msg)


def maximum_single_potential(maximum_constant: "Decimal | float") -> Decimal:
    return to_decimal(maximum_constant) + PM_MODIFIER


def compute_pm_constant(potential: "Decimal | float", overflow: bool) -> Decimal:
    """Chart constant whose pure memory play is worth ``potential``.

    ``overflow`` rounds up to the next publishable constant, otherwise down.
    Publishable constants step by 0.1 from 8.0 and by 0.5 below it.
    """
    target = to_decimal(potential) - PM_MODIFIER
    steps_per_unit = 10 if target >= FINE_CONSTANT_THRESHOLD else 2
    return round_to_step(
        target, steps_per_unit, ROUND_CEILING if overflow else ROUND_FLOOR
    )


def inverse_score(potential: "Decimal | float", constant: "Decimal | float") -> int:
    modifier = to_decimal(potential) - to_decimal(constant)
    if modifier < 1:
        raw_score = modifier * AA_RATIO + AA_SCORE
    else:
        raw_score = (modifier - 1) * EX_RATIO + EX_SCORE
    return int(round_half_ceiling(raw_score))


def inverse_constant(potential: "Decimal | float", score: int) -> Decimal:
    return round_half_ceiling(
        to_decimal(potential) - compute_potential_modifier(score), 1
    )


def compute_far(score: int, note: int, overflow: bool) -> int:
    # Far count of a no-lost play scoring ``score``; floor when overflowing.
    numerator = (MAX_BASE_SCORE - score) * note * 2
    if overflow:
        return numerator // MAX_BASE_SCORE
    return -(-numerator // MAX_BASE_SCORE)


def infer_note_result(
    chart: Chart,
    perfect: Optional[int],
    far: Optional[int],
    lost: Optional[int],
    score: Optional[int],
) -> Optional[NoteResult]:
    note = chart.note
    if perfect is not None and far is not None and lost is not None:
        return NoteResult(pure=note - far - lost, perfect=perfect, far=far, lost=lost)

    if score is not None and far is not None and lost is not None:
        pure = note - far - lost
        no_perfect_score = compute_score(
            chart, NoteResult(pure=pure, perfect=0, far=far, lost=lost)
        )
        return NoteResult(
            pure=pure, perfect=score - no_perfect_score, far=far, lost=lost
        )

    if score is not None:
        if score >= MAX_BASE_SCORE:
            # Assume a pure memory; everything above the base maximum is perfects.
            return NoteResult(
                pure=note, perfect=score - MAX_BASE_SCORE, far=0, lost=0
            )

        one_far_score = compute_score(
            chart, NoteResult(pure=note - 1, perfect=0, far=1, lost=0)
        )
        if score >= one_far_score:
            return NoteResult(
                pure=note - 1, perfect=score - one_far_score, far=1, lost=0
            )

    return None

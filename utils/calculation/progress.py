import dataclasses
from decimal import Decimal
from typing import Optional

from arcaea.entities.world import (
    CurrentProgress,
    InverseProgressSolution,
    LegacyBonus,
    NewBonus,
    NextRewardInfo,
    RemainingProgress,
    RewardType,
    WorldMap,
    WorldMapBonus,
)
from utils import to_decimal
from utils.calculation.score import (
    compute_pm_constant,
    inverse_constant,
    maximum_single_potential,
)
from utils.config import config

BASE_PROG = Decimal("2.5")
BASE_BOOST = Decimal(27)
POTENTIAL_FACTOR = Decimal("2.45")
CHARACTER_FACTOR_RATIO = 50

# Landing has to be strictly inside a level, not on its edges.
BOUNDARY_NUDGE = Decimal("0.1")

STAMINA_MULTIPLIERS = (2, 4, 6)
FRAGMENT_MULTIPLIERS = (1, 1.1, 1.25, 1.5)

MESSAGE_OVERSHOOT = "cannot land: even zero score overshoots"
MESSAGE_UNREACHABLE = "no chart at maximum constant {maximum} reaches this"

# Rewards worth walking to; backgrounds and items are ignored.
MILESTONE_REWARDS = {RewardType.CHARACTER, RewardType.SONG}


def compute_play_result(potential: "Decimal | float") -> Decimal:
    return BASE_PROG + POTENTIAL_FACTOR * to_decimal(potential).sqrt()


def compute_basic_progress(step: "Decimal | float", potential: "Decimal | float") -> Decimal:
    return compute_play_result(potential) * to_decimal(step) / CHARACTER_FACTOR_RATIO


def compute_progress(
    step: "Decimal | float",
    potential: "Decimal | float",
    bonus: Optional[WorldMapBonus],
) -> Decimal:
    result = compute_basic_progress(step, potential)
    match bonus:
        case None:
            return result
        case LegacyBonus() | NewBonus():
            return result * bonus.ratio
        case _:
            msg = f"Unknown world map bonus: {bonus!r}"
            raise TypeError(msg)


def compute_distance(
    world_map: WorldMap,
    current_progress: CurrentProgress,
    target_level: int,
    overflow: bool,
) -> Decimal:
    """Distance from the current position to ``target_level``.

    With ``overflow`` the target level is walked through as well, giving the
    distance to its far edge; otherwise the distance to enter it.
    """
    distance = Decimal(0)
    reached_level = current_progress.level
    for level in range(reached_level, target_level + 1):
        if not overflow and level == target_level:
            break
        if level == reached_level:
            distance += to_decimal(current_progress.progress)
        else:
            distance += to_decimal(world_map.platform(level).length)
    return distance


def compute_progress_range(
    world_map: WorldMap, current_progress: CurrentProgress, target_level: int
) -> tuple[Decimal, Decimal]:
    low = compute_distance(world_map, current_progress, target_level, False)
    high = compute_distance(world_map, current_progress, target_level, True)
    if low:
        low += BOUNDARY_NUDGE
    if high:
        high -= BOUNDARY_NUDGE
    return max(Decimal(0), low), max(Decimal(0), high)


def compute_remaining_progress(
    world_map: WorldMap, current_progress: CurrentProgress
) -> RemainingProgress:
    next_reward = None
    for level in range(current_progress.level, world_map.last_level + 1):
        reward = world_map.platform(level).reward
        if reward is not None and reward.type in MILESTONE_REWARDS:
            next_reward = NextRewardInfo(
                reward=reward,
                level=level,
                remaining=compute_distance(world_map, current_progress, level, False),
            )
            break

    return RemainingProgress(
        next_reward=next_reward,
        total=compute_distance(
            world_map, current_progress, world_map.last_level, True
        ),
    )


def inverse_basic_progress(
    progress: "Decimal | float", step: "Decimal | float", overflow: bool
) -> Optional[Decimal]:
    """Potential whose play advances exactly ``progress``.

    A negative root means even a zero potential play goes further. As a lower
    bound (``overflow``) that is still satisfied by 0; as an upper bound there
    is no answer and None is returned.
    """
    root = (
        to_decimal(progress) * CHARACTER_FACTOR_RATIO / to_decimal(step) - BASE_PROG
    ) / POTENTIAL_FACTOR
    if root < 0:
        return Decimal(0) if overflow else None
    return root**2


def solve_progress_range(
    step: "Decimal | float",
    low: "Decimal | float",
    high: "Decimal | float",
    *,
    minimum_constant: "Decimal | float | None" = None,
    maximum_constant: "Decimal | float | None" = None,
) -> InverseProgressSolution:
    minimum = to_decimal(
        config.catalog.minimum_constant if minimum_constant is None else minimum_constant
    )
    maximum = to_decimal(
        config.catalog.maximum_constant if maximum_constant is None else maximum_constant
    )
    maximum_potential = maximum_single_potential(maximum)

    low_potential = inverse_basic_progress(low, step, True)
    assert low_potential is not None
    high_potential = inverse_basic_progress(high, step, False)
    if high_potential is not None:
        high_potential = min(maximum_potential, high_potential)

    if high_potential is None:
        return InverseProgressSolution(
            low_potential=low_potential,
            high_potential=None,
            invalid_message=MESSAGE_OVERSHOOT,
        )
    if low_potential > maximum_potential:
        return InverseProgressSolution(
            low_potential=low_potential,
            high_potential=high_potential,
            invalid_message=MESSAGE_UNREACHABLE.format(maximum=maximum),
        )

    min_constant = max(minimum, compute_pm_constant(low_potential, True))
    max_constant = min(maximum, compute_pm_constant(high_potential, False))
    return InverseProgressSolution(
        low_potential=low_potential,
        high_potential=high_potential,
        pm_range=(min_constant, max_constant) if min_constant <= max_constant else None,
    )


def bonus_hypotheses() -> list[Optional[WorldMapBonus]]:
    hypotheses: list[Optional[WorldMapBonus]] = [None, NewBonus(x4=True)]
    for stamina in STAMINA_MULTIPLIERS:
        for fragment in FRAGMENT_MULTIPLIERS:
            hypotheses.append(LegacyBonus(fragment=fragment, stamina=stamina))
    return hypotheses


def inverse_progress(
    step: "Decimal | float",
    low: "Decimal | float",
    high: "Decimal | float",
    *,
    minimum_constant: "Decimal | float | None" = None,
    maximum_constant: "Decimal | float | None" = None,
) -> list[InverseProgressSolution]:
    """Solve the landing range under every bonus a play could carry.

    Every hypothesis yields one candidate, feasible or not, in a fixed order:
    no bonus, new map x4, then legacy maps by stamina and fragment.
    """
    solutions = []
    for bonus in bonus_hypotheses():
        ratio = bonus.ratio if bonus is not None else Decimal(1)
        solution = solve_progress_range(
            step,
            to_decimal(low) / ratio,
            to_decimal(high) / ratio,
            minimum_constant=minimum_constant,
            maximum_constant=maximum_constant,
        )
        solutions.append(dataclasses.replace(solution, bonus=bonus))
    return solutions


def inverse_beyond_boost(difference: "Decimal | float", score: int) -> Decimal:
    root = (to_decimal(difference) - BASE_BOOST) / POTENTIAL_FACTOR
    if root < 0:
        return Decimal("NaN")
    return inverse_constant(root**2, score)

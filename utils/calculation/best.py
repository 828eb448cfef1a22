import dataclasses
from collections.abc import Mapping
from decimal import Decimal
from typing import Optional, Protocol

from arcaea.catalog import CatalogEntry
from arcaea.entities.profile import B30Response, BestResultItem, Profile
from arcaea.entities.record import NotePlayResult, PlayResult, ScorePlayResult
from utils import to_decimal
from utils.calculation.score import compute_score, compute_score_result
from utils.constants import BEST_COUNT, OVERFLOW_COUNT, RATING_DIVISOR, RECENT_COUNT
from utils.logging import logger as root_logger

logger = root_logger.getChild(__name__)


class ChartLookup(Protocol):
    def search(self, chart_id: str) -> Optional[CatalogEntry]:
        ...


def annotate_result(entry: CatalogEntry, play_result: PlayResult) -> BestResultItem:
    chart = entry.chart
    match play_result:
        case ScorePlayResult(score=score):
            note = None
        case NotePlayResult(result=note):
            score = compute_score(chart, note)
        case _:
            msg = f"Unknown play result variant: {type(play_result).__name__}"
            raise TypeError(msg)

    return BestResultItem(
        no=0,
        chart=chart,
        song=entry.song,
        clear=play_result.clear,
        note=note,
        score=compute_score_result(score, chart),
    )


def rank_results(
    results: Mapping[str, PlayResult], catalog: ChartLookup
) -> list[BestResultItem]:
    items = []
    for chart_id, play_result in results.items():
        entry = catalog.search(chart_id)
        if entry is None:
            logger.warning("Skipping result for unknown chart %s", chart_id)
            continue
        items.append(annotate_result(entry, play_result))

    # sorted() is stable, so equal potentials keep their stored order.
    ordered = sorted(items, key=lambda item: item.score.potential, reverse=True)
    return [
        dataclasses.replace(item, no=no) for no, item in enumerate(ordered, start=1)
    ]


def compute_recent_average(
    potential: "str | Decimal | float", b30_sum: Decimal, result_count: int
) -> Optional[Decimal]:
    """Back out the recent 10 average from the reported rating.

    The rating is (best 30 sum + recent 10 sum) / 40. With fewer than ten
    results in total the recent average is taken over that many plays.
    """
    divisor = min(result_count, RECENT_COUNT)
    if divisor == 0:
        return None
    return (to_decimal(potential) * RATING_DIVISOR - b30_sum) / divisor


def compute_best_n(
    results: Mapping[str, PlayResult],
    catalog: ChartLookup,
    potential: "str | Decimal | float",
) -> B30Response:
    ranked = rank_results(results, catalog)
    b30 = ranked[:BEST_COUNT]

    ptt30 = [item.score.potential for item in b30]
    b30_sum = sum(ptt30, Decimal(0))
    b10_sum = sum(ptt30[:RECENT_COUNT], Decimal(0))

    return B30Response(
        ranked=ranked,
        b30=b30,
        b31_39=ranked[BEST_COUNT : BEST_COUNT + OVERFLOW_COUNT],
        # Assumes the recent 10 are as good as the best 10.
        max_potential=(b10_sum + b30_sum) / RATING_DIVISOR,
        min_potential=b30_sum / RATING_DIVISOR,
        r10_average=compute_recent_average(potential, b30_sum, len(ranked)),
        b30_average=b30_sum / len(ptt30) if ptt30 else None,
    )


def profile_best_n(profile: Profile, catalog: ChartLookup) -> B30Response:
    return dataclasses.replace(
        compute_best_n(profile.best, catalog, profile.potential),
        username=profile.username,
        potential=profile.potential,
    )

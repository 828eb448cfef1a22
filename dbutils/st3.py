from dataclasses import dataclass
from logging import Logger
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from arcaea.catalog import ChartCatalog
from arcaea.entities.enums import Difficulty
from arcaea.entities.record import NotePlayResult, NoteResult
from database.models import St3ClearTypeRow, St3ScoreRow
from utils.calculation.score import map_clear_type


@dataclass(frozen=True, kw_only=True)
class St3Score:
    song_id: str
    song_difficulty: int
    shiny_perfect_count: int
    perfect_count: int
    near_count: int
    miss_count: int
    clear_type: int


def st3_engine(path: "str | Path") -> AsyncEngine:
    return create_async_engine(f"sqlite+aiosqlite:///{Path(path)}")


async def read_scores(engine: AsyncEngine) -> list[St3Score]:
    async_session = async_sessionmaker(engine, expire_on_commit=False)
    async with async_session() as session:
        statement = select(St3ScoreRow, St3ClearTypeRow.clear_type).join(
            St3ClearTypeRow,
            (St3ScoreRow.song_id == St3ClearTypeRow.song_id)
            & (St3ScoreRow.song_difficulty == St3ClearTypeRow.song_difficulty),
        )
        rows = (await session.execute(statement)).all()

    return [
        St3Score(
            song_id=score.song_id,
            song_difficulty=score.song_difficulty,
            shiny_perfect_count=score.shiny_perfect_count,
            perfect_count=score.perfect_count,
            near_count=score.near_count,
            miss_count=score.miss_count,
            clear_type=clear_type,
        )
        for score, clear_type in rows
    ]


async def read_st3(path: "str | Path") -> list[St3Score]:
    engine = st3_engine(path)
    try:
        return await read_scores(engine)
    finally:
        await engine.dispose()


def to_play_results(
    logger: Logger, scores: list[St3Score], catalog: ChartCatalog
) -> dict[str, NotePlayResult]:
    results: dict[str, NotePlayResult] = {}
    for score in scores:
        song = catalog.song(score.song_id)
        if song is None:
            logger.warning("Unknown song id in ST3 file: %s", score.song_id)
            continue

        try:
            difficulty = Difficulty.from_index(score.song_difficulty)
        except ValueError:
            difficulty = None
        chart = song.chart(difficulty) if difficulty is not None else None
        if chart is None:
            logger.warning(
                "Song %s has no chart for difficulty %d",
                song.name,
                score.song_difficulty,
            )
            continue

        results[chart.id] = NotePlayResult(
            chart_id=chart.id,
            clear=map_clear_type(score.clear_type, score.shiny_perfect_count, chart),
            result=NoteResult(
                pure=score.perfect_count,
                perfect=score.shiny_perfect_count,
                far=score.near_count,
                lost=score.miss_count,
            ),
        )
    return results

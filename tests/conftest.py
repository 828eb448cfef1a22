from typing import Callable, Optional

import pytest

from arcaea.catalog import ChartCatalog
from arcaea.entities.enums import Difficulty
from arcaea.entities.record import Chart, Song

ChartFactory = Callable[..., Chart]


@pytest.fixture
def make_chart() -> ChartFactory:
    def factory(
        chart_id: str = "testsong@ftr",
        constant: float = 9.0,
        note: int = 1000,
        difficulty: Difficulty = Difficulty.FUTURE,
        song_id: Optional[str] = None,
    ) -> Chart:
        return Chart(
            id=chart_id,
            song_id=song_id or chart_id.split("@")[0],
            difficulty=difficulty,
            constant=constant,
            level=str(int(constant)),
            note=note,
        )

    return factory


@pytest.fixture
def chart(make_chart: ChartFactory) -> Chart:
    return make_chart()


@pytest.fixture
def catalog(make_chart: ChartFactory) -> ChartCatalog:
    # 40 single-chart songs with constants 8.0, 8.1, ..., 11.9
    songs = [
        Song(
            id=f"song{i}",
            name=f"Song {i}",
            bpm="180",
            cover=f"https://example.com/song{i}.jpg",
            charts=[make_chart(f"song{i}@ftr", constant=round(8.0 + i * 0.1, 1))],
        )
        for i in range(40)
    ]
    return ChartCatalog(songs)

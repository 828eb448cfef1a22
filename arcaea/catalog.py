from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional

from arcaea.entities.record import Chart, Song
from arcaea.exceptions import UnknownChart


@dataclass(frozen=True)
class CatalogEntry:
    chart: Chart
    song: Song

    @property
    def display_name(self) -> str:
        if self.chart.byd is not None and self.chart.byd.song:
            return self.chart.byd.song
        return self.song.name

    @property
    def cover(self) -> str:
        if self.chart.byd is not None and self.chart.byd.cover:
            return self.chart.byd.cover
        return self.song.cover


class ChartCatalog:
    """Read-only index over song data, keyed by chart id and song id."""

    def __init__(self, songs: Iterable[Song]) -> None:
        self._songs: dict[str, Song] = {}
        self._charts: dict[str, CatalogEntry] = {}

        for song in songs:
            self._songs[song.id] = song
            for chart in song.charts:
                self._charts[chart.id] = CatalogEntry(chart, song)

    @classmethod
    def from_json(cls, text: str) -> "ChartCatalog":
        return cls(Song.schema().loads(text, many=True))  # type: ignore[attr-defined]

    @classmethod
    def from_file(cls, path: "str | Path") -> "ChartCatalog":
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def __len__(self) -> int:
        return len(self._charts)

    def __contains__(self, chart_id: object) -> bool:
        return chart_id in self._charts

    @property
    def songs(self) -> list[Song]:
        return list(self._songs.values())

    @property
    def minimum_constant(self) -> Decimal:
        return min(Decimal(str(e.chart.constant)) for e in self._charts.values())

    @property
    def maximum_constant(self) -> Decimal:
        return max(Decimal(str(e.chart.constant)) for e in self._charts.values())

    def search(self, chart_id: str) -> Optional[CatalogEntry]:
        return self._charts.get(chart_id)

    def get(self, chart_id: str) -> CatalogEntry:
        entry = self._charts.get(chart_id)
        if entry is None:
            raise UnknownChart(chart_id)
        return entry

    def song(self, song_id: str) -> Optional[Song]:
        return self._songs.get(song_id)

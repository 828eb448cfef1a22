from sqlalchemy import Integer, String
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase, AsyncAttrs):
    pass


# Only the columns the importer reads are mapped; ST3 files carry more.
class St3ScoreRow(Base):
    __tablename__ = "scores"

    song_id: Mapped[str] = mapped_column("songId", String(), primary_key=True)
    song_difficulty: Mapped[int] = mapped_column(
        "songDifficulty", Integer(), primary_key=True
    )

    shiny_perfect_count: Mapped[int] = mapped_column("shinyPerfectCount", nullable=False)
    perfect_count: Mapped[int] = mapped_column("perfectCount", nullable=False)
    near_count: Mapped[int] = mapped_column("nearCount", nullable=False)
    miss_count: Mapped[int] = mapped_column("missCount", nullable=False)


class St3ClearTypeRow(Base):
    __tablename__ = "cleartypes"

    song_id: Mapped[str] = mapped_column("songId", String(), primary_key=True)
    song_difficulty: Mapped[int] = mapped_column(
        "songDifficulty", Integer(), primary_key=True
    )

    clear_type: Mapped[int] = mapped_column("clearType", nullable=False)

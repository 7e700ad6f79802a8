"""SQLAlchemy ORM models for locally persisted state.

Only two tables exist: ``movies`` holds the user's favorited catalog items and
``preferences`` is a tiny string key/value store used for the "last visited"
timestamp.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class FavoriteMovie(Base):
    """A catalog movie the user marked as favorite."""

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        doc="Catalog ``trackId``; stable across searches for the same item.",
    )
    title: Mapped[str] = mapped_column(String, nullable=False, default="")
    artwork_url: Mapped[str] = mapped_column(String, nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    genre: Mapped[str] = mapped_column(String, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_favorite: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="1",
        doc="Always true for stored rows; the table doubles as the favorites list.",
    )


class Preference(Base):
    __tablename__ = "preferences"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(String, nullable=False)


__all__ = ["Base", "FavoriteMovie", "Preference"]

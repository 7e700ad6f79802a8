"""String key/value preferences backed by the ``preferences`` table."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movietrack.db.models import Preference

LAST_VISITED_KEY = "last_visited"
LAST_VISITED_DEFAULT = "Never"


def format_visit_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``YYYY-MM-DD h:mm:ss AM``."""

    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{moment:%Y-%m-%d} {hour}:{moment:%M:%S} {meridiem}"


class PreferenceStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> str | None:
        async with self._session_factory() as session:
            row = await session.get(Preference, key)
            return row.value if row is not None else None

    async def set(self, key: str, value: str) -> None:
        async with self._session_factory() as session, session.begin():
            await session.merge(Preference(key=key, value=value))

    async def last_visited(self) -> str:
        """Return the stored visit timestamp or ``"Never"`` when unset."""

        stored = await self.get(LAST_VISITED_KEY)
        return stored if stored is not None else LAST_VISITED_DEFAULT

    async def save_last_visited(self, moment: datetime | None = None) -> str:
        """Stamp ``moment`` (local now by default) as the last visit."""

        value = format_visit_timestamp(moment or datetime.now())
        await self.set(LAST_VISITED_KEY, value)
        return value


__all__ = [
    "LAST_VISITED_DEFAULT",
    "LAST_VISITED_KEY",
    "PreferenceStore",
    "format_visit_timestamp",
]

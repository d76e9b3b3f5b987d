from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from meme_vault.schemas.meme import Meme
from meme_vault.services.slots import SlotStorage
from meme_vault.utils.ids import utc_now

logger = logging.getLogger(__name__)

MEME_LIST = TypeAdapter(list[Meme])


class MemeStore:
    """The saved memes, kept as one JSON array in a single storage slot.

    Every mutation reads the whole collection, changes it in memory and
    writes the whole collection back. There is no locking: two callers
    mutating at the same time can lose an update.
    """

    def __init__(
        self,
        slots: SlotStorage,
        key: str = "memes",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._slots = slots
        self.key = key
        self._clock = clock

    async def list(self) -> list[Meme]:
        """All memes in stored order, newest first; empty on any read problem."""
        try:
            data = await self._slots.get_item(self.key)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read storage slot {self.key!r}: {e}")
            return []
        if not data:
            return []
        try:
            return MEME_LIST.validate_json(data)
        except ValidationError as e:
            logger.warning(f"Ignoring corrupt storage slot {self.key!r}: {e}")
            return []

    async def get(self, meme_id: str) -> Optional[Meme]:
        memes = await self.list()
        return next((m for m in memes if m.id == meme_id), None)

    async def find_by_url(self, url: str) -> Optional[Meme]:
        memes = await self.list()
        return next((m for m in memes if m.url == url), None)

    async def upsert(self, meme: Meme) -> Meme:
        memes = await self.list()
        index = next((i for i, m in enumerate(memes) if m.id == meme.id), None)
        if index is None:
            memes.insert(0, meme)
        else:
            memes[index] = meme
        await self._save(memes)
        return meme

    async def delete(self, meme_id: str) -> None:
        memes = await self.list()
        meme = next((m for m in memes if m.id == meme_id), None)
        if meme is None:
            return
        if meme.local_path:
            self._remove_file(meme.local_path)
        await self._save([m for m in memes if m.id != meme_id])

    async def increment_usage(self, meme_id: str) -> Optional[Meme]:
        memes = await self.list()
        meme = next((m for m in memes if m.id == meme_id), None)
        if meme is None:
            return None
        meme.usage_count += 1
        meme.last_used_at = self._clock()
        await self._save(memes)
        return meme

    async def toggle_favorite(self, meme_id: str) -> Optional[Meme]:
        memes = await self.list()
        meme = next((m for m in memes if m.id == meme_id), None)
        if meme is None:
            return None
        meme.is_favorite = not meme.is_favorite
        await self._save(memes)
        return meme

    async def _save(self, memes: list[Meme]) -> None:
        data = MEME_LIST.dump_json(memes, by_alias=True, exclude_none=True)
        await self._slots.set_item(self.key, data.decode("utf-8"))

    @staticmethod
    def _remove_file(path: str) -> None:
        # The record goes away even if its image cannot be removed.
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to delete image {path}: {e}")

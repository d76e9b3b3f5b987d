from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from meme_vault.models.slot import StorageSlot


class SlotStorage:
    """Key-value persistence: one text value per named slot."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_item(self, key: str) -> Optional[str]:
        async with self._session_factory() as session:
            slot = await session.get(StorageSlot, key)
            return slot.value if slot else None

    async def set_item(self, key: str, value: str) -> None:
        async with self._session_factory() as session:
            slot = await session.get(StorageSlot, key)
            if slot is None:
                session.add(StorageSlot(key=key, value=value))
            else:
                slot.value = value
            await session.commit()

    async def remove_item(self, key: str) -> None:
        async with self._session_factory() as session:
            slot = await session.get(StorageSlot, key)
            if slot is not None:
                await session.delete(slot)
                await session.commit()

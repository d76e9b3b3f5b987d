from meme_vault.models.base import Base
from meme_vault.models.slot import StorageSlot

__all__ = ["Base", "StorageSlot"]

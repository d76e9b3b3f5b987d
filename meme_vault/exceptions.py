from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from meme_vault.schemas.meme import Meme


class MemeVaultError(Exception):
    """Base class for errors reported back to the user."""


class InvalidUrlError(MemeVaultError):
    pass


class DuplicateMemeError(MemeVaultError):
    def __init__(self, existing: "Meme") -> None:
        self.existing = existing
        super().__init__(f"Meme already exists: {existing.title or existing.url}")


class MetadataFetchError(MemeVaultError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class LocalImportError(MemeVaultError):
    pass

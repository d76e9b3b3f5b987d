import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

from meme_vault.exceptions import DuplicateMemeError, InvalidUrlError
from meme_vault.schemas.meme import Meme, MemeSection, StorageStats
from meme_vault.services.browse import group_memes
from meme_vault.services.images import copy_into_vault, get_storage_stats
from meme_vault.services.metadata import MetadataService
from meme_vault.services.store import MemeStore
from meme_vault.utils.ids import generate_id, utc_now

logger = logging.getLogger(__name__)

HTTP_URL = TypeAdapter(HttpUrl)


def is_valid_url(url: str) -> bool:
    try:
        HTTP_URL.validate_python(url)
    except ValidationError:
        return False
    return True


class VaultService:
    """The commands the vault exposes: add, import, browse, copy, favorite, delete."""

    def __init__(
        self,
        store: MemeStore,
        metadata: MetadataService,
        images_dir: Path,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.metadata = metadata
        self.images_dir = images_dir
        self._clock = clock

    async def add_url(self, url: str) -> Meme:
        """Save ``url`` with its scraped preview metadata.

        Validation and the duplicate check both happen before any request
        goes out; a failed fetch leaves the vault untouched.
        """
        url = url.strip()
        if not url:
            raise InvalidUrlError("URL is required")
        if not is_valid_url(url):
            raise InvalidUrlError("Please enter a valid URL")

        await self._ensure_new(url)

        og = await self.metadata.extract(url)
        meme = Meme(
            id=generate_id(),
            url=url,
            title=og.title,
            description=og.description,
            image_url=og.image_url,
            added_at=self._clock(),
            usage_count=0,
            is_favorite=False,
            aspect_ratio=og.aspect_ratio,
        )
        await self.store.upsert(meme)
        logger.info(f"Saved {url} as {meme.id}")
        return meme

    async def import_file(self, path: str, title: Optional[str] = None) -> Meme:
        source = Path(path).expanduser()
        url = f"file://{source}"
        await self._ensure_new(url)

        meme_id = generate_id()
        destination = copy_into_vault(source, self.images_dir, meme_id)
        meme = Meme(
            id=meme_id,
            url=url,
            title=title or source.stem,
            image_url=str(destination),
            local_path=str(destination),
            added_at=self._clock(),
        )
        await self.store.upsert(meme)
        logger.info(f"Imported {source} as {meme.id}")
        return meme

    async def browse(self, search: Optional[str] = None) -> list[MemeSection]:
        return group_memes(await self.store.list(), search)

    async def get(self, meme_id: str) -> Optional[Meme]:
        return await self.store.get(meme_id)

    async def copy(self, meme_id: str) -> Optional[Meme]:
        return await self.store.increment_usage(meme_id)

    async def toggle_favorite(self, meme_id: str) -> Optional[Meme]:
        return await self.store.toggle_favorite(meme_id)

    async def delete(self, meme_id: str) -> None:
        await self.store.delete(meme_id)

    def storage_stats(self) -> StorageStats:
        return get_storage_stats(self.images_dir)

    async def _ensure_new(self, url: str) -> None:
        existing = await self.store.find_by_url(url)
        if existing is not None:
            raise DuplicateMemeError(existing)

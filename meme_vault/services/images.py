import logging
import shutil
from pathlib import Path

from meme_vault.exceptions import LocalImportError
from meme_vault.schemas.meme import StorageStats

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".png"


def copy_into_vault(source: Path, images_dir: Path, meme_id: str) -> Path:
    """Copy ``source`` to ``<images_dir>/<meme_id><suffix>`` and return the copy."""
    if not source.is_file():
        raise LocalImportError(f"File not found: {source}")

    images_dir.mkdir(parents=True, exist_ok=True)
    destination = images_dir / f"{meme_id}{source.suffix or DEFAULT_SUFFIX}"
    try:
        shutil.copyfile(source, destination)
    except OSError as e:
        raise LocalImportError(f"Failed to copy {source}: {e}") from e

    logger.info(f"Copied {source} into vault as {destination.name}")
    return destination


def get_storage_stats(images_dir: Path) -> StorageStats:
    image_count = 0
    total_bytes = 0

    if images_dir.is_dir():
        for path in images_dir.iterdir():
            image_count += 1
            try:
                total_bytes += path.stat().st_size
            except OSError:
                continue

    total_size_mb = round(total_bytes / (1024 * 1024), 1)
    return StorageStats(
        image_count=image_count,
        total_size_mb=total_size_mb,
        formatted=format_storage_size(total_size_mb),
    )


def format_storage_size(mb: float) -> str:
    if mb < 1:
        return f"{round(mb * 1024)} KB"
    if mb >= 1024:
        return f"{mb / 1024:.1f} GB"
    return f"{mb:.1f} MB"

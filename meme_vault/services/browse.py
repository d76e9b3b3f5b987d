from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Optional

from meme_vault.schemas.meme import Meme, MemeMetadata, MemeSection

DESCRIPTION_LIMIT = 60


def filter_memes(memes: list[Meme], search: Optional[str]) -> list[Meme]:
    """Case-insensitive substring match over url, title and description."""
    if not search:
        return list(memes)
    needle = search.lower()
    return [
        meme
        for meme in memes
        if any(
            needle in field.lower()
            for field in (meme.url, meme.title, meme.description)
            if field
        )
    ]


def _timestamp(value: Optional[datetime]) -> float:
    return value.timestamp() if value else 0.0


def sort_by_recent_use(memes: list[Meme]) -> list[Meme]:
    # Most recently used first, never-used memes rank as used at epoch;
    # addedAt only breaks ties.
    return sorted(
        memes,
        key=lambda m: (_timestamp(m.last_used_at), _timestamp(m.added_at)),
        reverse=True,
    )


def group_memes(memes: list[Meme], search: Optional[str] = None) -> list[MemeSection]:
    filtered = filter_memes(memes, search)
    favorites = sort_by_recent_use([m for m in filtered if m.is_favorite])
    recent = sort_by_recent_use([m for m in filtered if not m.is_favorite])

    sections = []
    for title, group in (("Favorites", favorites), ("Memes", recent)):
        if group:
            noun = "meme" if len(group) == 1 else "memes"
            sections.append(
                MemeSection(title=title, subtitle=f"{len(group)} {noun}", memes=group)
            )
    return sections


def truncate_description(description: Optional[str]) -> str:
    if not description:
        return ""
    if len(description) <= DESCRIPTION_LIMIT:
        return description
    return description[: DESCRIPTION_LIMIT - 3] + "..."


def format_subtitle(meme: Meme) -> str:
    stats = f"{'★ ' if meme.is_favorite else ''}{meme.usage_count}×"
    description = truncate_description(meme.description)
    return f"{stats} · {description}" if description else stats


def format_date(value: datetime) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def copy_metadata(meme: Meme) -> MemeMetadata:
    return MemeMetadata(
        url=meme.url,
        title=meme.title,
        description=meme.description,
        added_at=format_date(meme.added_at),
        usage_count=meme.usage_count,
    )


class MemeView:
    """Local projection of the store, updated optimistically.

    ``mutate`` shows the expected result right away, then swaps in the list
    the mutation returns. If the mutation fails the previous view comes back
    and the error propagates.
    """

    def __init__(self, memes: Optional[list[Meme]] = None) -> None:
        self.memes: list[Meme] = list(memes or [])

    async def mutate(
        self,
        mutation: Callable[[], Awaitable[list[Meme]]],
        optimistic_update: Callable[[list[Meme]], list[Meme]],
    ) -> list[Meme]:
        previous = self.memes
        self.memes = optimistic_update([m.model_copy() for m in previous])
        try:
            self.memes = await mutation()
        except Exception:
            self.memes = previous
            raise
        return self.memes

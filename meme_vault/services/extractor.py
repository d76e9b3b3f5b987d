"""Best-effort Open Graph extraction from raw HTML.

Nothing in here raises on bad markup: a page without usable tags simply
produces an empty :class:`OGMetadata`.
"""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from meme_vault.schemas.meme import OGMetadata

logger = logging.getLogger(__name__)

LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_og_metadata(html: str) -> OGMetadata:
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        logger.warning(f"Unparseable HTML, no metadata extracted: {e}")
        return OGMetadata()

    metadata = OGMetadata()

    # Prefer og:image, fall back to twitter:image
    metadata.image_url = extract_meta_content(soup, "og:image") or extract_meta_content(
        soup, "twitter:image"
    )

    metadata.title = (
        extract_meta_content(soup, "og:title")
        or extract_meta_content(soup, "twitter:title")
        or _title_tag(soup)
    )
    metadata.description = extract_meta_content(
        soup, "og:description"
    ) or extract_meta_content(soup, "twitter:description")

    width = _parse_int(extract_meta_content(soup, "og:image:width"))
    height = _parse_int(extract_meta_content(soup, "og:image:height"))
    if width is not None and height is not None and width > 0 and height > 0:
        metadata.aspect_ratio = width / height

    return metadata


def extract_meta_content(soup: BeautifulSoup, key: str) -> Optional[str]:
    """Return the first non-empty ``content`` of a meta tag named ``key``.

    ``property=`` tags win over ``name=`` tags. Attribute order inside the
    tag is irrelevant and names are compared case-insensitively; entities
    are already decoded by the parser.
    """
    key = key.lower()
    metas = soup.find_all("meta")
    for attr in ("property", "name"):
        for meta in metas:
            value = meta.get(attr)
            if not isinstance(value, str) or value.strip().lower() != key:
                continue
            content = meta.get("content")
            if isinstance(content, str) and content.strip():
                return content.strip()
    return None


def _title_tag(soup: BeautifulSoup) -> Optional[str]:
    if soup.title is None:
        return None
    return soup.title.get_text(strip=True) or None


def _parse_int(value: Optional[str]) -> Optional[int]:
    # Leading-integer parse: "1200px" is 1200, "abc" is nothing.
    if value is None:
        return None
    match = LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None

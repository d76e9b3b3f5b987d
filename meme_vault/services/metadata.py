import logging
from typing import Optional

import httpx

from meme_vault.config import Settings, get_settings
from meme_vault.exceptions import MetadataFetchError
from meme_vault.schemas.meme import OGMetadata
from meme_vault.services.extractor import parse_og_metadata
from meme_vault.services.normalizer import get_scrapable_url, is_mirror_url

logger = logging.getLogger(__name__)

ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class MetadataService:
    """Fetches a page once and extracts its Open Graph preview metadata."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    def headers_for(self, url: str) -> dict[str, str]:
        # The mirror only returns OG tags to bots it recognises; everyone
        # else gets a desktop browser to get past basic bot blocking.
        if is_mirror_url(url, self.settings.mirror_host):
            user_agent = self.settings.mirror_user_agent
        else:
            user_agent = self.settings.browser_user_agent
        return {"User-Agent": user_agent, "Accept": ACCEPT_HTML}

    async def extract(self, url: str) -> OGMetadata:
        target = get_scrapable_url(url, self.settings.mirror_host)
        if target != url:
            logger.info(f"Scraping {url} through mirror {target}")

        async with httpx.AsyncClient(
            transport=self._transport, follow_redirects=True
        ) as client:
            try:
                response = await client.get(target, headers=self.headers_for(target))
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
                logger.error(f"Failed to fetch HTML for {target}: {e}")
                raise MetadataFetchError(f"Failed to fetch URL: {e}") from e

        if not response.is_success:
            logger.warning(f"Failed to fetch {target}: HTTP {response.status_code}")
            raise MetadataFetchError(
                f"Failed to fetch URL: {response.status_code}",
                status_code=response.status_code,
            )

        return parse_og_metadata(response.text)

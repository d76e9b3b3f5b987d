import re
from urllib.parse import urlparse

MIRROR_HOST = "fxtwitter.com"

# Twitter/X block direct scraping; the mirror serves the same post with OG tags.
STATUS_RE = re.compile(
    r"^https?://(?:www\.)?(?:twitter\.com|x\.com)/(?P<user>[^/]+)/status/(?P<id>\d+)",
    re.IGNORECASE,
)


def get_scrapable_url(url: str, mirror_host: str = MIRROR_HOST) -> str:
    match = STATUS_RE.match(url)
    if not match:
        return url
    return f"https://{mirror_host}/{match.group('user')}/status/{match.group('id')}"


def is_mirror_url(url: str, mirror_host: str = MIRROR_HOST) -> bool:
    host = (urlparse(url).hostname or "").lower()
    mirror_host = mirror_host.lower()
    return host == mirror_host or host.endswith("." + mirror_host)

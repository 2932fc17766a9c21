# Single-page fetch of the URL under analysis.
# No crawling, no retries: any transport problem is a FetchError.

from __future__ import annotations

from urllib.parse import urlparse

import requests
from bs4.dammit import EncodingDetector

from seo_agent.errors import FetchError, InvalidInputError
from seo_agent.log import get_logger
from seo_agent.settings import settings

logger = get_logger("seo_agent.fetcher")

_TEXT_TYPES = ("text/", "application/xhtml+xml", "application/xml")


def validate_url(url: str | None) -> str:
    url = (url or "").strip()
    if not url:
        raise InvalidInputError("URL is required")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidInputError(f"URL must be an absolute http(s) URL: {url!r}")
    return url


class PageFetcher:
    def __init__(self, timeout: float | None = None, user_agent: str | None = None):
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT
        self.headers = {
            "User-Agent": user_agent or settings.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    def fetch(self, url: str) -> str:
        """Return the body of `url` as text."""
        try:
            resp = requests.get(url, headers=self.headers, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        content_type = resp.headers.get("Content-Type", "").split(";")[0].strip().lower()
        if content_type and not content_type.startswith(_TEXT_TYPES):
            raise FetchError(f"Non-text response from {url}: {content_type}")

        # requests falls back to ISO-8859-1 for text/* without a charset
        if "charset" not in resp.headers.get("Content-Type", "").lower():
            declared = EncodingDetector.find_declared_encoding(resp.content, is_html=True)
            resp.encoding = declared or resp.apparent_encoding or "utf-8"

        logger.debug("Fetched %s (%d bytes, %s)", url, len(resp.content), resp.encoding)
        return resp.text

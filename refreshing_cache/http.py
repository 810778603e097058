from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from urllib.parse import quote

import aiohttp

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = "refreshing-cache/0.1"
KEY_PLACEHOLDER = "{key}"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FetchError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


def build_url(url_template: str, key: str) -> str:
    return url_template.replace(KEY_PLACEHOLDER, quote(key, safe=""))


async def fetch_text_async(
    url: str,
    session: aiohttp.ClientSession,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    timeout_config = aiohttp.ClientTimeout(total=timeout)
    try:
        async with session.get(
            url,
            headers={"User-Agent": DEFAULT_USER_AGENT},
            timeout=timeout_config,
        ) as response:
            response.raise_for_status()
            return await response.text(errors="replace")
    except Exception as exc:
        logger.debug("Fetch failed for %s: %s", url, exc)
        raise FetchError(f"Failed to fetch {url}") from exc


@dataclass(frozen=True, slots=True)
class HttpBackingService:
    """Fetches ``url_template`` with ``{key}`` replaced by the quoted key.

    Each call blocks on its own event loop and session, so it must not be
    called from inside a running loop.
    """

    url_template: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if KEY_PLACEHOLDER not in self.url_template:
            raise ValueError(f"url_template must contain {KEY_PLACEHOLDER}")

    def get(self, key: str) -> str:
        return asyncio.run(self.get_async(key))

    async def get_async(self, key: str) -> str:
        url = build_url(self.url_template, key)
        async with aiohttp.ClientSession() as session:
            return await fetch_text_async(url, session, self.timeout)

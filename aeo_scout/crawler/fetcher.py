"""
Fetcher module: retrieves page HTML and robots.txt with timeout and redirect limits.

No retries happen here: a failed HTML fetch raises :class:`FetchError`, a
failed robots.txt fetch yields an empty string.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from aeo_scout.config import AuditConfig
from aeo_scout.crawler.models import PageData
from aeo_scout.errors import FetchError
from aeo_scout.logger import logger
from aeo_scout.utils import origin_of

__all__ = ["Fetcher", "DEFAULT_HEADERS"]

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


class Fetcher:
    """Handles HTTP fetching of one page and its robots.txt."""

    def __init__(self, config: AuditConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent, **DEFAULT_HEADERS},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _require_session(self) -> ClientSession:
        if self.session is None:
            raise RuntimeError("Session not initialized")
        return self.session

    async def fetch_page(self, url: str) -> PageData:
        """Fetch the page HTML. Any transport error or non-2xx status raises FetchError."""
        session = self._require_session()
        try:
            async with session.get(url, max_redirects=self.config.max_redirects) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, resp.reason or "unexpected status", resp.status)
                text = await resp.text(errors="replace")
                return PageData(str(resp.url), text, resp.status)
        except asyncio.TimeoutError as exc:
            logger.error("Timeout fetching %s", url)
            raise FetchError(url, "timeout") from exc
        except ClientError as exc:
            logger.error("Error fetching %s: %s", url, exc)
            raise FetchError(url, str(exc) or type(exc).__name__) from exc

    async def fetch_robots(self, url: str) -> str:
        """Return the robots.txt text for the origin of *url*, or ``""`` on any failure."""
        session = self._require_session()
        robots_url = f"{origin_of(url)}/robots.txt"
        try:
            async with session.get(robots_url, max_redirects=self.config.max_redirects) as resp:
                if resp.status != 200:
                    logger.debug("robots.txt %s -> HTTP %s", robots_url, resp.status)
                    return ""
                return await resp.text(errors="replace")
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
            logger.warning("Error loading robots.txt %s: %s", robots_url, exc)
            return ""

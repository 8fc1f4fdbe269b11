"""Bounded broken-link probe used by the Links scanner."""

from __future__ import annotations

import asyncio
from typing import List, Sequence

from aiohttp import ClientSession

from aeo_scout.crawler.models import LinkStatus
from aeo_scout.logger import logger

__all__ = ["LinkChecker"]


class LinkChecker:
    """Checks a handful of URLs concurrently: HEAD first, GET when HEAD answers 405.

    Any exception counts as a broken link. There is no retry and no timeout
    besides the one configured on the session.
    """

    def __init__(self, session: ClientSession, limit: int = 10, concurrency: int = 10) -> None:
        self.session = session
        self.limit = limit
        self.semaphore = asyncio.Semaphore(concurrency)

    async def probe(self, url: str) -> LinkStatus:
        async with self.semaphore:
            try:
                async with self.session.head(url, allow_redirects=True) as resp:
                    status = resp.status
                if status == 405:
                    async with self.session.get(url) as resp:
                        status = resp.status
            except Exception as exc:
                logger.debug("Link probe failed for %s: %s", url, exc)
                return LinkStatus(url, None, True)
        return LinkStatus(url, status, not 200 <= status < 400)

    async def check(self, urls: Sequence[str]) -> List[LinkStatus]:
        """Probe the first ``limit`` URLs and wait for all of them."""
        targets = list(urls)[: self.limit]
        tasks = [asyncio.create_task(self.probe(url)) for url in targets]
        return list(await asyncio.gather(*tasks))

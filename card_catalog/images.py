"""Remote artwork loading for grid tiles, the detail header and the overlay.

Each image slot is fetched independently and ends in one of the phases
the views render: a placeholder when the card has no URL for the slot,
a spinner while loading, the image once loaded, or a warning icon on
failure. Failures stay local to their slot; there is no retry.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = "CardCatalog/0.1"


class ImagePhase(Enum):
    EMPTY = "empty"  # no URL for this slot
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class ImageResult:
    """Outcome of one image slot."""

    url: Optional[str]
    phase: ImagePhase
    content: bytes = b""
    content_type: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def loading(cls, url: Optional[str]) -> "ImageResult":
        if not url:
            return cls(url=None, phase=ImagePhase.EMPTY)
        return cls(url=url, phase=ImagePhase.LOADING)


class ImageLoader:
    """Fetches card artwork over HTTP with bounded concurrency."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        concurrency: int = 5,
    ) -> None:
        self._timeout = timeout
        self._semaphore = asyncio.Semaphore(concurrency)
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers={"User-Agent": USER_AGENT},
            )
        return self._client

    async def load(self, url: Optional[str]) -> ImageResult:
        """Fetch one image slot. Never raises for HTTP, transport or URL errors."""
        if not url:
            return ImageResult(url=None, phase=ImagePhase.EMPTY)

        async with self._semaphore:
            try:
                client = self._get_client()
                resp = await client.get(url)
                resp.raise_for_status()
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                logger.warning("Image fetch failed for %s: %s", url, exc)
                return ImageResult(url=url, phase=ImagePhase.FAILED, error=str(exc))

        logger.debug("Fetched %s (%d bytes)", url, len(resp.content))
        return ImageResult(
            url=url,
            phase=ImagePhase.LOADED,
            content=resp.content,
            content_type=resp.headers.get("content-type"),
        )

    async def load_many(self, urls: Iterable[Optional[str]]) -> List[ImageResult]:
        """Fetch several slots concurrently, results in input order."""
        return list(await asyncio.gather(*(self.load(url) for url in urls)))

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

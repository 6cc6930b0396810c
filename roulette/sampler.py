"""Paginated collection of a channel's videos and uniform random selection."""

import logging
import random
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Tuple

from .config import RetryConfig
from .resolver import require_credential
from .retry import retry_on_quota
from .search.providers.base import KIND_VIDEO, SearchPage, SearchProvider, SearchRequest

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 5
DEFAULT_PAGE_SIZE = 50


@dataclass
class SampleResult:
    """All collected video ids plus the one picked from them."""

    video_ids: List[str] = field(default_factory=list)
    selected: Optional[str] = None
    pages_fetched: int = 0


class VideoSampler:
    """Collects up to ``max_pages`` pages of a channel's videos and picks one at random.

    With a ``retry`` policy each page request is retried on its own, so a
    quota error part way through resumes from the page that failed.
    """

    def __init__(
        self,
        provider: SearchProvider,
        api_key: Optional[str],
        max_pages: int = DEFAULT_MAX_PAGES,
        page_size: int = DEFAULT_PAGE_SIZE,
        rng: Optional[random.Random] = None,
        retry: Optional[RetryConfig] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        self.provider = provider
        self.api_key = api_key
        self.max_pages = max_pages
        self.page_size = page_size
        self.rng = rng or random.Random()
        self.retry = retry
        self.sleep = sleep

    async def _fetch_page(self, request: SearchRequest) -> SearchPage:
        if self.retry is None:
            return await self.provider.search(request)
        return await retry_on_quota(
            lambda: self.provider.search(request),
            max_attempts=self.retry.max_attempts,
            base_delay=self.retry.base_delay,
            sleep=self.sleep,
        )

    async def _collect(
        self, channel_id: str, on_page: Optional[Callable[[int, int], None]]
    ) -> Tuple[List[str], int]:
        api_key = require_credential(self.api_key)

        video_ids: List[str] = []
        page_token: Optional[str] = None
        pages = 0

        while pages < self.max_pages:
            page = await self._fetch_page(
                SearchRequest(
                    api_key=api_key,
                    kind=KIND_VIDEO,
                    channel_id=channel_id,
                    max_results=self.page_size,
                    page_token=page_token,
                )
            )
            pages += 1

            page_ids = [item.video_id for item in page.items if item.video_id]
            dropped = len(page.items) - len(page_ids)
            if dropped:
                logger.debug(f"Page {pages}: dropped {dropped} entries without a video id")
            video_ids.extend(page_ids)

            if on_page is not None:
                on_page(pages, len(video_ids))

            page_token = page.next_page_token
            if not page_token:
                break
        else:
            if page_token:
                logger.info(f"Stopped after {self.max_pages} pages with more results available")

        logger.info(f"Collected {len(video_ids)} videos from channel {channel_id} in {pages} pages")
        return video_ids, pages

    async def collect(
        self, channel_id: str, on_page: Optional[Callable[[int, int], None]] = None
    ) -> List[str]:
        """Fetch video ids page by page until the token runs out or the page bound is hit."""
        video_ids, _ = await self._collect(channel_id, on_page)
        return video_ids

    def pick(self, video_ids: List[str]) -> Optional[str]:
        """Uniformly random element of ``video_ids``; ``None`` when empty."""
        if not video_ids:
            logger.warning("No videos found for the specified channel.")
            return None
        return video_ids[self.rng.randrange(len(video_ids))]

    async def sample(
        self, channel_id: str, on_page: Optional[Callable[[int, int], None]] = None
    ) -> SampleResult:
        video_ids, pages = await self._collect(channel_id, on_page)
        return SampleResult(video_ids=video_ids, selected=self.pick(video_ids), pages_fetched=pages)

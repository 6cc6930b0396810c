"""Base interface for search providers."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

KIND_CHANNEL = "channel"
KIND_VIDEO = "video"


@dataclass
class SearchRequest:
    """One call against a search endpoint."""

    api_key: str
    kind: str
    query: Optional[str] = None
    channel_id: Optional[str] = None
    max_results: Optional[int] = None
    page_token: Optional[str] = None


@dataclass
class SearchItem:
    """Standardized search hit across providers.

    ``video_id`` is only present for video hits; upstream entries that lack
    one keep ``None`` so callers can drop them.
    """

    kind: str
    channel_id: Optional[str] = None
    title: str = ""
    video_id: Optional[str] = None


@dataclass
class SearchPage:
    """A single page of results plus the continuation token, if any."""

    items: List[SearchItem] = field(default_factory=list)
    next_page_token: Optional[str] = None
    total_results: Optional[int] = None


class SearchProvider(ABC):
    """Abstract base class for all search providers."""

    def __init__(self):
        self.provider_name = self.__class__.__name__.replace("SearchProvider", "").lower()
        self.logger = logging.getLogger(f"{__name__}.{self.provider_name}")

        self.total_requests = 0
        self.failed_requests = 0

    @abstractmethod
    async def search(self, request: SearchRequest) -> SearchPage:
        """Execute one search request and return one page of results."""

    async def aclose(self) -> None:
        """Release network resources held by the provider."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    def get_statistics(self) -> Dict:
        """Get provider request statistics."""
        return {
            "provider": self.provider_name,
            "total_requests": self.total_requests,
            "failed_requests": self.failed_requests,
        }

    def update_statistics(self, request_successful: bool) -> None:
        self.total_requests += 1
        if not request_successful:
            self.failed_requests += 1

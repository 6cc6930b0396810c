"""Channel lookup by free-text name."""

import logging
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError
from .search.providers.base import KIND_CHANNEL, SearchProvider, SearchRequest

logger = logging.getLogger(__name__)


@dataclass
class Channel:
    """A resolved content-publisher entity."""

    identifier: str
    display_name: str


def require_credential(api_key: Optional[str]) -> str:
    """Return the API key or raise before any request is attempted."""
    if not api_key or not api_key.strip():
        logger.error(
            "API key is missing. Set YOUTUBE_API_KEY or api.api_key in the configuration file."
        )
        raise ConfigurationError("YouTube API key is not configured")
    return api_key.strip()


class ChannelResolver:
    """Finds the best-matching channel for a query using a first-match policy."""

    def __init__(self, provider: SearchProvider, api_key: Optional[str]):
        self.provider = provider
        self.api_key = api_key

    async def resolve(self, query: str) -> Optional[Channel]:
        """Return the first channel hit for ``query``, or ``None`` when nothing matches.

        Raises ConfigurationError without touching the network when no API
        key is configured; provider errors propagate unchanged.
        """
        api_key = require_credential(self.api_key)

        page = await self.provider.search(
            SearchRequest(api_key=api_key, kind=KIND_CHANNEL, query=query)
        )
        if not page.items:
            logger.info(f"No channel found for query: '{query}'")
            return None

        first = page.items[0]
        if not first.channel_id:
            logger.warning(f"First channel hit for '{query}' carries no channel id")
            return None

        channel = Channel(identifier=first.channel_id, display_name=first.title)
        logger.info(
            f"Resolved '{query}' to channel {channel.display_name} ({channel.identifier}) "
            f"out of {len(page.items)} candidates"
        )
        return channel

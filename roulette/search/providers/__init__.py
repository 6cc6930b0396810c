"""Search providers for video platforms."""

from .base import KIND_CHANNEL, KIND_VIDEO, SearchItem, SearchPage, SearchProvider, SearchRequest
from .youtube import YouTubeSearchProvider

__all__ = [
    "KIND_CHANNEL",
    "KIND_VIDEO",
    "SearchItem",
    "SearchPage",
    "SearchProvider",
    "SearchRequest",
    "YouTubeSearchProvider",
]

"""Search module for channel and video lookups."""

from .providers.base import SearchItem, SearchPage, SearchProvider, SearchRequest
from .providers.youtube import YouTubeSearchProvider

__all__ = [
    "SearchItem",
    "SearchPage",
    "SearchProvider",
    "SearchRequest",
    "YouTubeSearchProvider",
]

"""Test fixtures and mock data for unit tests."""

from typing import Dict, List, Optional

from roulette.exceptions import QuotaExceededError
from roulette.search.providers.base import SearchItem, SearchPage, SearchProvider, SearchRequest

API_KEY = "test-api-key"

CHANNEL_SEARCH_RESPONSE = {
    "kind": "youtube#searchListResponse",
    "pageInfo": {"totalResults": 2, "resultsPerPage": 5},
    "items": [
        {
            "kind": "youtube#searchResult",
            "id": {"kind": "youtube#channel", "channelId": "UC_first"},
            "snippet": {"channelId": "UC_first", "title": "First Channel"},
        },
        {
            "kind": "youtube#searchResult",
            "id": {"kind": "youtube#channel", "channelId": "UC_second"},
            "snippet": {"channelId": "UC_second", "title": "Second Channel"},
        },
    ],
}

QUOTA_ERROR_BODY = {
    "error": {
        "code": 403,
        "message": "The request cannot be completed because you have exceeded your quota.",
        "errors": [{"domain": "youtube.quota", "reason": "quotaExceeded"}],
    }
}

FORBIDDEN_ERROR_BODY = {
    "error": {
        "code": 403,
        "message": "Requests from this referer are blocked.",
        "errors": [{"domain": "usageLimits", "reason": "forbidden"}],
    }
}


def video_page_response(
    video_ids: List[Optional[str]], next_page_token: Optional[str] = None
) -> Dict:
    """Build a raw ``search.list`` body for video hits; ``None`` ids become id-less entries."""
    items = []
    for video_id in video_ids:
        entry_id = {"kind": "youtube#video"}
        if video_id:
            entry_id["videoId"] = video_id
        items.append({"id": entry_id, "snippet": {"channelId": "UC_first", "title": str(video_id)}})
    body = {"items": items, "pageInfo": {"totalResults": len(items)}}
    if next_page_token:
        body["nextPageToken"] = next_page_token
    return body


def channel_items(*channels) -> List[SearchItem]:
    return [
        SearchItem(kind="channel", channel_id=channel_id, title=title)
        for channel_id, title in channels
    ]


def video_page(
    video_ids: List[Optional[str]], next_page_token: Optional[str] = None
) -> SearchPage:
    return SearchPage(
        items=[SearchItem(kind="video", channel_id="UC_first", video_id=v) for v in video_ids],
        next_page_token=next_page_token,
    )


def full_page(page_number: int, size: int = 50) -> SearchPage:
    """A page of ``size`` distinct ids that always advertises another page."""
    ids = [f"vid-{page_number}-{i}" for i in range(size)]
    return video_page(ids, next_page_token=f"token-{page_number + 1}")


class FakeSearchProvider(SearchProvider):
    """Provider returning scripted pages per kind and recording every request."""

    def __init__(self, channel_pages=None, video_pages=None, endless_videos: bool = False):
        super().__init__()
        self.channel_pages = list(channel_pages or [])
        self.video_pages = list(video_pages or [])
        self.endless_videos = endless_videos
        self.requests: List[SearchRequest] = []
        self.closed = False

    async def search(self, request: SearchRequest) -> SearchPage:
        self.requests.append(request)
        if request.kind == "channel":
            return self._next(self.channel_pages)
        if self.endless_videos:
            return full_page(len(self.video_requests))
        return self._next(self.video_pages)

    @staticmethod
    def _next(scripted):
        result = scripted.pop(0) if scripted else SearchPage()
        if isinstance(result, BaseException):
            raise result
        return result

    @property
    def channel_requests(self) -> List[SearchRequest]:
        return [r for r in self.requests if r.kind == "channel"]

    @property
    def video_requests(self) -> List[SearchRequest]:
        return [r for r in self.requests if r.kind == "video"]

    async def aclose(self) -> None:
        self.closed = True


def quota_error() -> QuotaExceededError:
    return QuotaExceededError("YouTube API quotaExceeded (status 403)", status_code=403, reason="quotaExceeded")

"""YouTube Data API v3 search provider."""

import logging
from typing import Any, Dict, Optional

import httpx

from ...config import ApiConfig
from ...exceptions import (
    QUOTA_REASONS,
    AuthorizationError,
    QuotaExceededError,
    RequestFailedError,
)
from ...utils import redact_key
from .base import SearchItem, SearchPage, SearchProvider, SearchRequest

logger = logging.getLogger(__name__)

MAX_RESULTS_PER_PAGE = 50


def extract_error_reason(response: httpx.Response) -> str:
    """Extract the ``reason`` field from a YouTube API error body, or ``"unknown"``."""
    try:
        body = response.json()
        errors = body.get("error", {}).get("errors", [])
        if errors:
            return errors[0].get("reason", "unknown")
    except (ValueError, AttributeError):
        pass
    return "unknown"


class YouTubeSearchProvider(SearchProvider):
    """Search provider backed by the ``search.list`` endpoint."""

    def __init__(self, api_config: ApiConfig, client: Optional[httpx.AsyncClient] = None):
        super().__init__()
        self.api_config = api_config
        self.search_url = f"{api_config.base_url.rstrip('/')}/search"
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(api_config.timeout_seconds)
        )

    def build_params(self, request: SearchRequest) -> Dict[str, Any]:
        """Translate a :class:`SearchRequest` into ``search.list`` query parameters."""
        params: Dict[str, Any] = {
            "part": "snippet",
            "type": request.kind,
            "key": request.api_key,
        }
        if request.query:
            params["q"] = request.query
        if request.channel_id:
            params["channelId"] = request.channel_id
        if request.max_results:
            params["maxResults"] = min(request.max_results, MAX_RESULTS_PER_PAGE)
        if request.page_token:
            params["pageToken"] = request.page_token
        return params

    async def search(self, request: SearchRequest) -> SearchPage:
        params = self.build_params(request)
        self.logger.debug(f"GET {self.search_url} {redact_key(params)}")

        try:
            response = await self.http_client.get(self.search_url, params=params)
            response.raise_for_status()
            page = self._parse_page(response.json(), request.kind)
        except httpx.HTTPStatusError as e:
            self.update_statistics(False)
            raise self._classify(e.response) from e
        except httpx.RequestError as e:
            self.update_statistics(False)
            raise RequestFailedError(f"YouTube API request failed: {e}") from e
        except (ValueError, AttributeError, TypeError) as e:
            self.update_statistics(False)
            raise RequestFailedError(f"YouTube API returned an unreadable body: {e}") from e

        self.update_statistics(True)
        return page

    def _classify(self, response: httpx.Response):
        """Map an error response onto the exception hierarchy."""
        status_code = response.status_code
        reason = extract_error_reason(response)

        if status_code == 429 or (status_code == 403 and reason in QUOTA_REASONS):
            return QuotaExceededError(
                f"YouTube API quotaExceeded (status {status_code}, reason={reason})",
                status_code=status_code,
                reason=reason,
            )
        if status_code in (401, 403):
            return AuthorizationError(
                f"YouTube API request failed with status {status_code} (reason={reason})",
                status_code=status_code,
                reason=reason,
            )
        return RequestFailedError(
            f"YouTube API request failed with status {status_code}",
            status_code=status_code,
            reason=reason,
        )

    def _parse_page(self, data: Dict, kind: str) -> SearchPage:
        if not isinstance(data, dict):
            raise TypeError("expected a JSON object")

        items = []
        for entry in data.get("items") or []:
            if not entry:
                continue
            snippet = entry.get("snippet") or {}
            entry_id = entry.get("id") or {}
            items.append(
                SearchItem(
                    kind=kind,
                    channel_id=snippet.get("channelId") or entry_id.get("channelId"),
                    title=snippet.get("title", ""),
                    video_id=entry_id.get("videoId") or None,
                )
            )

        page_info = data.get("pageInfo") or {}
        return SearchPage(
            items=items,
            next_page_token=data.get("nextPageToken") or None,
            total_results=page_info.get("totalResults"),
        )

    async def aclose(self) -> None:
        if self._owns_client and self.http_client is not None:
            await self.http_client.aclose()
            logger.debug("HTTP client closed")

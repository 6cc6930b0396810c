"""User-facing messages per locale."""

from enum import Enum
from typing import Dict


class OutcomeStatus(str, Enum):
    """Tag for the result of one search phase."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    SAMPLED = "sampled"
    NO_VIDEOS = "no_videos"
    MISCONFIGURED = "misconfigured"
    QUOTA_EXCEEDED = "quota_exceeded"
    FORBIDDEN = "forbidden"
    FAILED = "failed"


MESSAGES: Dict[str, Dict[OutcomeStatus, str]] = {
    "ko": {
        OutcomeStatus.NOT_FOUND: "채널을 찾을 수 없습니다.",
        OutcomeStatus.NO_VIDEOS: "채널에서 동영상을 찾을 수 없습니다.",
        OutcomeStatus.MISCONFIGURED: "API 키가 설정되지 않았습니다.",
        OutcomeStatus.QUOTA_EXCEEDED: "API 요청 한도가 초과되었습니다. 잠시 후 다시 시도해 주세요.",
        OutcomeStatus.FORBIDDEN: "API 요청이 거부되었습니다. API 키 권한을 확인해 주세요.",
        OutcomeStatus.FAILED: "오류가 발생했습니다.",
    },
    "en": {
        OutcomeStatus.NOT_FOUND: "Channel not found.",
        OutcomeStatus.NO_VIDEOS: "No videos found for this channel.",
        OutcomeStatus.MISCONFIGURED: "The API key is not configured.",
        OutcomeStatus.QUOTA_EXCEEDED: "API quota exceeded. Please try again later.",
        OutcomeStatus.FORBIDDEN: "The API request was refused. Check the API key permissions.",
        OutcomeStatus.FAILED: "An error occurred.",
    },
}


def message_for(status: OutcomeStatus, locale: str = "en") -> str:
    """Localized text for an outcome; success statuses have none."""
    table = MESSAGES.get(locale, MESSAGES["en"])
    return table.get(status, "")

"""
Suggestion Models
Shared records for the suggestion engine: videos in, suggestions out.

A Video is one row of channel metrics. ChannelAverages are derived per run.
A Suggestion is append-only output; its review status belongs to whoever
stores it.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Dict, Mapping, Optional

from dateutil import parser as dateparser

ISO_DURATION_PATTERN = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")
VIDEO_ID_KEYS = ("id", "video_id", "platform_video_id", "platformVideoId")


class SuggestionType(str, Enum):
    TITLE = "title"
    THUMBNAIL = "thumbnail"
    HOOK = "hook"
    LENGTH = "length"
    TIMING = "timing"
    CTR = "ctr"
    ENGAGEMENT = "engagement"


class SuggestionScope(str, Enum):
    VIDEO = "video"
    CHANNEL = "channel"


class SuggestionStatus(str, Enum):
    PENDING = "pending"
    IMPLEMENTED = "implemented"
    DISMISSED = "dismissed"


class Priority(IntEnum):
    """Severity of a suggestion, 1 (informational) to 5 (act now)."""

    INFO = 1
    LOW = 2
    MEDIUM = 3
    HIGH = 4
    URGENT = 5

    @property
    def label(self) -> str:
        return PRIORITY_LABELS[self]


PRIORITY_LABELS = {
    Priority.INFO: "Info",
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
    Priority.URGENT: "Urgent",
}


@dataclass(frozen=True)
class Video:
    id: str
    title: Optional[str] = None
    published_at: Optional[datetime] = None
    views: Optional[int] = None
    likes: Optional[int] = None
    comments: Optional[int] = None
    ctr: Optional[float] = None
    avg_view_duration: Optional[float] = None
    duration_seconds: Optional[int] = None
    thumbnail_url: Optional[str] = None

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Video":
        """Build a Video from a JSON-style record, validating as it goes.

        Both snake_case and camelCase keys are accepted. Raises ValueError
        on a missing id, an unparseable timestamp or duration, or a negative
        count.
        """
        if not isinstance(record, Mapping):
            raise ValueError(f"Video record must be an object, got {type(record).__name__}")

        video_id = record_video_id(record)
        if video_id is None or str(video_id).strip() == "":
            raise ValueError("Video record is missing an id")

        return cls(
            id=str(video_id),
            title=_text(record, "title"),
            published_at=parse_timestamp(_first(record, "published_at", "publishedAt")),
            views=_count(record, "views", "viewCount"),
            likes=_count(record, "likes", "likeCount"),
            comments=_count(record, "comments", "commentCount"),
            ctr=_ratio(record, "ctr"),
            avg_view_duration=_ratio(record, "avg_view_duration", "avgViewDuration"),
            duration_seconds=parse_duration_seconds(_first(record, "duration_seconds", "duration")),
            thumbnail_url=_text(record, "thumbnail_url", "thumbnailUrl"),
        )


@dataclass(frozen=True)
class ChannelAverages:
    avg_views: float = math.nan
    avg_ctr: float = math.nan
    avg_duration: float = math.nan
    sample_size: int = 0

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "ChannelAverages":
        return cls(
            avg_views=_mean_value(record, "avg_views", "avgViews"),
            avg_ctr=_mean_value(record, "avg_ctr", "avgCtr"),
            avg_duration=_mean_value(record, "avg_duration", "avgDuration"),
            sample_size=int(_first(record, "sample_size", "sampleSize") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        # NaN is not valid JSON
        return {
            "avgViews": None if math.isnan(self.avg_views) else self.avg_views,
            "avgCtr": None if math.isnan(self.avg_ctr) else self.avg_ctr,
            "avgDuration": None if math.isnan(self.avg_duration) else self.avg_duration,
            "sampleSize": self.sample_size,
        }


@dataclass(frozen=True)
class Suggestion:
    type: SuggestionType
    suggestion: str
    priority: Priority
    reason: Optional[str] = None
    scope: SuggestionScope = SuggestionScope.VIDEO
    video_id: Optional[str] = None
    channel_id: Optional[str] = None
    metrics: Mapping[str, Any] = field(default_factory=dict)

    # metrics is a plain dict
    __hash__ = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "suggestion": self.suggestion,
            "reason": self.reason,
            "priority": int(self.priority),
            "priorityLabel": self.priority.label,
            "scope": self.scope.value,
            "videoId": self.video_id,
            "channelId": self.channel_id,
            "metrics": dict(self.metrics),
        }


def parse_timestamp(raw_value):
    """Parse an ISO-ish timestamp. None passes through; garbage raises ValueError."""
    if raw_value is None or isinstance(raw_value, datetime):
        return raw_value
    try:
        return dateparser.parse(str(raw_value))
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"Invalid published_at timestamp: {raw_value!r}") from exc


def parse_duration_seconds(raw_value):
    """
    Video length in seconds from a number or an ISO 8601 duration.
    Example: PT2M30S = 150 seconds
    """
    if raw_value is None:
        return None
    if isinstance(raw_value, bool):
        raise ValueError(f"Invalid duration: {raw_value!r}")
    if isinstance(raw_value, (int, float)):
        if raw_value < 0:
            raise ValueError(f"Duration cannot be negative: {raw_value!r}")
        return int(raw_value)

    match = ISO_DURATION_PATTERN.match(str(raw_value).strip())
    if not match:
        raise ValueError(f"Invalid duration: {raw_value!r}")
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def record_video_id(record):
    return _first(record, *VIDEO_ID_KEYS)


def _first(record, *keys):
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _text(record, *keys):
    value = _first(record, *keys)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{keys[0]} must be a string, got {value!r}")
    return value


def _count(record, *keys):
    value = _first(record, *keys)
    if value is None:
        return None
    try:
        count = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{keys[0]} must be an integer, got {value!r}") from exc
    if count < 0:
        raise ValueError(f"{keys[0]} cannot be negative, got {count}")
    return count


def _ratio(record, *keys):
    value = _first(record, *keys)
    if value is None:
        return None
    try:
        ratio = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{keys[0]} must be a number, got {value!r}") from exc
    if not 0.0 <= ratio <= 1.0:
        raise ValueError(f"{keys[0]} must be between 0 and 1, got {ratio}")
    return ratio


def _mean_value(record, *keys):
    value = _first(record, *keys)
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{keys[0]} must be a number, got {value!r}") from exc

"""
Channel Pattern Analyzers
Channel-wide suggestions drawn from the whole video set:

- Timing: which publish day of the week earns the most views
- Length: which video-length bracket earns the most views

Each analyzer returns at most one suggestion, scoped to the channel.
"""

from __future__ import annotations

from datetime import timezone
from typing import List, Optional, Sequence

import numpy as np

from tools.suggestion_models import Priority, Suggestion, SuggestionScope, SuggestionType, Video

MIN_CHANNEL_VIDEOS = 5
MIN_BUCKET_VIDEOS = 2

# Index matches the bucket key: 0 = Sunday .. 6 = Saturday
DAY_NAMES = ['Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday']

LENGTH_BRACKETS = ('short', 'medium', 'long')
LENGTH_BRACKET_LABELS = {
    'short': '3-5 minute',
    'medium': '8-12 minute',
    'long': '15+ minute',
}
SHORT_MAX_MINUTES = 5
MEDIUM_MAX_MINUTES = 12


def day_of_week(published_at) -> int:
    """Sunday-first day index, evaluated in UTC (naive values are taken as UTC)."""
    if published_at.tzinfo is not None:
        published_at = published_at.astimezone(timezone.utc)
    return (published_at.weekday() + 1) % 7


def length_bracket(duration_seconds) -> str:
    minutes = duration_seconds / 60
    if minutes < SHORT_MAX_MINUTES:
        return 'short'
    if minutes <= MEDIUM_MAX_MINUTES:
        return 'medium'
    return 'long'


def best_bucket(buckets, order):
    """
    Key of the bucket with the strictly highest mean, among buckets holding
    at least MIN_BUCKET_VIDEOS values. Ties keep the earliest key in order.
    """
    best_key = None
    best_mean = None
    for key in order:
        values = buckets.get(key, [])
        if len(values) < MIN_BUCKET_VIDEOS:
            continue
        mean = float(np.mean(values))
        if best_mean is None or mean > best_mean:
            best_key = key
            best_mean = mean
    return best_key, best_mean


def _check_videos(videos):
    for video in videos:
        if not isinstance(video, Video):
            raise TypeError(f"Expected Video records, got {type(video).__name__}")


def analyze_timing(videos: Sequence[Video], channel_id: Optional[str] = None) -> List[Suggestion]:
    """Suggest the publish day whose uploads average the most views."""
    videos = list(videos)
    _check_videos(videos)
    if len(videos) < MIN_CHANNEL_VIDEOS:
        return []

    by_day = {}
    for video in videos:
        if video.published_at is None or video.views is None:
            continue
        by_day.setdefault(day_of_week(video.published_at), []).append(video.views)

    best_day, best_mean = best_bucket(by_day, range(len(DAY_NAMES)))
    if best_day is None:
        return []

    overall_mean = float(np.mean([views for day_views in by_day.values() for views in day_views]))
    day_name = DAY_NAMES[best_day]
    return [Suggestion(
        type=SuggestionType.TIMING,
        suggestion=f'{day_name} is your best upload day - publish on it consistently',
        reason=f'Videos posted on {day_name} average {best_mean:,.0f} views vs {overall_mean:,.0f} overall',
        priority=Priority.MEDIUM,
        scope=SuggestionScope.CHANNEL,
        channel_id=channel_id,
        metrics={
            'dayOfWeek': best_day,
            'dayName': day_name,
            'dayMeanViews': best_mean,
            'overallMeanViews': overall_mean,
            'dayVideoCount': len(by_day[best_day]),
        },
    )]


def analyze_length(videos: Sequence[Video], channel_id: Optional[str] = None) -> List[Suggestion]:
    """Suggest the length bracket whose videos average the most views."""
    videos = list(videos)
    _check_videos(videos)
    if len(videos) < MIN_CHANNEL_VIDEOS:
        return []

    by_bracket = {}
    for video in videos:
        if video.duration_seconds is None or video.views is None:
            continue
        by_bracket.setdefault(length_bracket(video.duration_seconds), []).append(video.views)

    bracket, best_mean = best_bucket(by_bracket, LENGTH_BRACKETS)
    if bracket is None:
        return []

    overall_mean = float(np.mean([views for bracket_views in by_bracket.values() for views in bracket_views]))
    label = LENGTH_BRACKET_LABELS[bracket]
    return [Suggestion(
        type=SuggestionType.LENGTH,
        suggestion=f'Your {label} videos perform best - aim for that length',
        reason=f'These videos average {best_mean:,.0f} views vs {overall_mean:,.0f} overall',
        priority=Priority.LOW,
        scope=SuggestionScope.CHANNEL,
        channel_id=channel_id,
        metrics={
            'bracket': bracket,
            'bracketMeanViews': best_mean,
            'overallMeanViews': overall_mean,
            'bracketVideoCount': len(by_bracket[bracket]),
        },
    )]

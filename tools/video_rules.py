"""
Per-Video Rule Evaluator
Checks one video against the channel baseline and emits suggestions.

Rules, in evaluation order:
1. Title longer than 60 characters
2. Title without a number
3. Title without a power word
4. CTR far below / far above the channel average
5. Retention far below / far above the channel average
6. Missing or auto-generated thumbnail
7. Views far below the channel average
"""

from __future__ import annotations

import re
from typing import List, Optional

from tools.suggestion_models import (
    ChannelAverages,
    Priority,
    Suggestion,
    SuggestionScope,
    SuggestionType,
    Video,
)

RULE_THRESHOLDS = {
    'title_length': {
        'max_chars': 60,
        'why': 'YouTube truncates titles past roughly 60 characters in search results.',
    },
    'ctr': {
        'low_ratio': 0.5,
        'high_ratio': 1.5,
    },
    'retention': {
        'low_ratio': 0.3,
        'high_ratio': 0.6,
    },
    'views': {
        'low_ratio': 0.3,
    },
}

POWER_WORDS = ('how to', 'why', 'secret', 'ultimate', 'complete', 'guide')
DIGIT_PATTERN = re.compile(r"\d")
DEFAULT_THUMBNAIL_MARKER = 'default'


def baseline_ratio(value, baseline) -> Optional[float]:
    """value / baseline, or None when either side cannot support a comparison."""
    if value is None or baseline is None:
        return None
    # NaN fails this comparison too
    if not baseline > 0:
        return None
    return value / baseline


def _video_suggestion(video, suggestion_type, priority, text, reason, **metrics):
    return Suggestion(
        type=suggestion_type,
        suggestion=text,
        reason=reason,
        priority=priority,
        scope=SuggestionScope.VIDEO,
        video_id=video.id,
        metrics=metrics,
    )


def check_title(video: Video) -> List[Suggestion]:
    if video.title is None:
        return []

    suggestions = []
    title = video.title
    max_chars = RULE_THRESHOLDS['title_length']['max_chars']

    if len(title) > max_chars:
        suggestions.append(_video_suggestion(
            video,
            SuggestionType.TITLE,
            Priority.MEDIUM,
            f'Shorten the title to {max_chars} characters or fewer (currently {len(title)})',
            RULE_THRESHOLDS['title_length']['why'],
            titleLength=len(title),
        ))

    if not DIGIT_PATTERN.search(title):
        suggestions.append(_video_suggestion(
            video,
            SuggestionType.TITLE,
            Priority.LOW,
            'Add a number to the title (e.g. "5 Reasons...", "The #1 Way...")',
            'Numbered titles set a concrete expectation and tend to earn more clicks.',
        ))

    lowered = title.lower()
    if not any(word in lowered for word in POWER_WORDS):
        suggestions.append(_video_suggestion(
            video,
            SuggestionType.TITLE,
            Priority.LOW,
            'Work in a hook phrase such as "How to", "Why", "Ultimate Guide" or "Secret"',
            'Curiosity and promise phrases are a reliable click-through lever.',
        ))

    return suggestions


def check_ctr(video: Video, averages: ChannelAverages) -> List[Suggestion]:
    ratio = baseline_ratio(video.ctr, averages.avg_ctr)
    if ratio is None:
        return []

    thresholds = RULE_THRESHOLDS['ctr']
    if ratio < thresholds['low_ratio']:
        return [_video_suggestion(
            video,
            SuggestionType.CTR,
            Priority.URGENT,
            'Low CTR - rework the thumbnail and title',
            f'CTR is {video.ctr * 100:.1f}% against a channel average of {averages.avg_ctr * 100:.1f}%',
            ratio=ratio, ctr=video.ctr, avgCtr=averages.avg_ctr,
        )]
    if ratio > thresholds['high_ratio']:
        return [_video_suggestion(
            video,
            SuggestionType.CTR,
            Priority.INFO,
            'High performer - study this thumbnail/title pairing and reuse it',
            f'CTR is {ratio * 100:.0f}% of the channel average',
            ratio=ratio, ctr=video.ctr, avgCtr=averages.avg_ctr,
        )]
    return []


def check_retention(video: Video, averages: ChannelAverages) -> List[Suggestion]:
    ratio = baseline_ratio(video.avg_view_duration, averages.avg_duration)
    if ratio is None:
        return []

    thresholds = RULE_THRESHOLDS['retention']
    if ratio < thresholds['low_ratio']:
        return [_video_suggestion(
            video,
            SuggestionType.HOOK,
            Priority.HIGH,
            'Viewers leave early - tighten the opening hook',
            f'Retention is {ratio * 100:.0f}% of the channel average '
            f'({video.avg_view_duration * 100:.1f}% vs {averages.avg_duration * 100:.1f}%)',
            ratio=ratio, avgViewDuration=video.avg_view_duration, avgDuration=averages.avg_duration,
        )]
    if ratio > thresholds['high_ratio']:
        return [_video_suggestion(
            video,
            SuggestionType.HOOK,
            Priority.INFO,
            'Strong hook - reuse this opening pattern',
            f'Retention is {ratio * 100:.0f}% of the channel average '
            f'({video.avg_view_duration * 100:.1f}% vs {averages.avg_duration * 100:.1f}%)',
            ratio=ratio, avgViewDuration=video.avg_view_duration, avgDuration=averages.avg_duration,
        )]
    return []


def check_thumbnail(video: Video) -> List[Suggestion]:
    if video.thumbnail_url and DEFAULT_THUMBNAIL_MARKER not in video.thumbnail_url:
        return []
    return [_video_suggestion(
        video,
        SuggestionType.THUMBNAIL,
        Priority.URGENT,
        'Upload a custom thumbnail',
        'Auto-generated thumbnails draw far fewer clicks than designed ones.',
    )]


def check_views(video: Video, averages: ChannelAverages) -> List[Suggestion]:
    ratio = baseline_ratio(video.views, averages.avg_views)
    if ratio is None or ratio >= RULE_THRESHOLDS['views']['low_ratio']:
        return []
    return [_video_suggestion(
        video,
        SuggestionType.ENGAGEMENT,
        Priority.HIGH,
        'Underperforming video - refresh the title/thumbnail or promote it',
        f'{video.views:,} views is {ratio * 100:.0f}% of the channel average of {averages.avg_views:,.0f}',
        ratio=ratio, views=video.views, avgViews=averages.avg_views,
    )]


def evaluate_video(video: Video, averages: ChannelAverages) -> List[Suggestion]:
    """Run every per-video rule; output follows rule order, not priority."""
    if not isinstance(video, Video):
        raise TypeError(f"evaluate_video expects a Video, got {type(video).__name__}")
    if not isinstance(averages, ChannelAverages):
        raise TypeError(f"evaluate_video expects ChannelAverages, got {type(averages).__name__}")

    suggestions = []
    suggestions.extend(check_title(video))
    suggestions.extend(check_ctr(video, averages))
    suggestions.extend(check_retention(video, averages))
    suggestions.extend(check_thumbnail(video))
    suggestions.extend(check_views(video, averages))
    return suggestions

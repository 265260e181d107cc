#!/usr/bin/env python3
"""
Suggestion Generator
Runs the suggestion engine over a channel's videos.

Per channel:
1. Channel averages from videos with complete metrics
2. Per-video rules for every video
3. Best publish day (timing)
4. Best length bracket (length)

Usage:
    python3 -m tools.generate_suggestions path/to/videos.json
"""

from __future__ import annotations

import json
import sys
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import timezone
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from tools.channel_averages import compute_averages
from tools.channel_patterns import analyze_length, analyze_timing
from tools.suggestion_models import (
    ChannelAverages,
    Priority,
    Suggestion,
    SuggestionScope,
    SuggestionType,
    Video,
)
from tools.video_rules import evaluate_video


@dataclass(frozen=True)
class ChannelSuggestions:
    channel_id: Optional[str]
    averages: ChannelAverages
    suggestions: List[Suggestion]
    videos_analyzed: int
    anchor_video_id: Optional[str] = None

    @property
    def video_suggestions(self) -> List[Suggestion]:
        return [s for s in self.suggestions if s.scope == SuggestionScope.VIDEO]

    @property
    def channel_suggestions(self) -> List[Suggestion]:
        return [s for s in self.suggestions if s.scope == SuggestionScope.CHANNEL]


@dataclass(frozen=True)
class BatchResult:
    channels: List[ChannelSuggestions] = field(default_factory=list)

    @property
    def total_videos(self) -> int:
        return sum(result.videos_analyzed for result in self.channels)

    @property
    def total_suggestions(self) -> int:
        return sum(len(result.suggestions) for result in self.channels)


def _utc(published_at):
    if published_at.tzinfo is None:
        return published_at.replace(tzinfo=timezone.utc)
    return published_at.astimezone(timezone.utc)


def most_recent_video_id(videos: Sequence[Video]) -> Optional[str]:
    """Id of the latest published video; the first video when none has a date."""
    dated = [video for video in videos if video.published_at is not None]
    if dated:
        return max(dated, key=lambda video: _utc(video.published_at)).id
    return videos[0].id if videos else None


def sort_by_priority(suggestions):
    """Highest priority first; equal priorities keep their original order."""
    return sorted(suggestions, key=lambda s: -int(s.priority))


def generate_channel_suggestions(videos: Sequence[Video], channel_id: Optional[str] = None) -> ChannelSuggestions:
    videos = list(videos)
    averages = compute_averages(videos)

    suggestions = []
    for video in videos:
        for suggestion in evaluate_video(video, averages):
            if channel_id is not None:
                suggestion = replace(suggestion, channel_id=channel_id)
            suggestions.append(suggestion)

    suggestions.extend(analyze_timing(videos, channel_id=channel_id))
    suggestions.extend(analyze_length(videos, channel_id=channel_id))

    return ChannelSuggestions(
        channel_id=channel_id,
        averages=averages,
        suggestions=suggestions,
        videos_analyzed=len(videos),
        anchor_video_id=most_recent_video_id(videos),
    )


def generate_batch(channels: Mapping[str, Sequence[Video]]) -> BatchResult:
    """One result per channel with videos; totals are derived from the results."""
    results = [
        generate_channel_suggestions(videos, channel_id=channel_id)
        for channel_id, videos in channels.items()
        if videos
    ]
    return BatchResult(channels=results)


class SuggestionGenerator:
    def __init__(self, data):
        """Initialize generator with a raw payload: {"channel": {...}, "videos": [...]}"""
        self.channel = data.get('channel') or {}
        if not isinstance(self.channel, dict):
            raise ValueError(f"channel must be an object, got {type(self.channel).__name__}")
        self.raw_videos = data.get('videos') or []
        self.videos = [Video.from_dict(record) for record in self.raw_videos]

    @property
    def channel_id(self):
        channel_id = self.channel.get('id')
        return str(channel_id) if channel_id is not None else None

    def generate(self) -> ChannelSuggestions:
        return generate_channel_suggestions(self.videos, channel_id=self.channel_id)

    def summarize(self, result: ChannelSuggestions) -> Dict:
        priority_counts = Counter(s.priority for s in result.suggestions)
        type_counts = Counter(s.type for s in result.suggestions)
        videos_with_suggestions = len({s.video_id for s in result.video_suggestions})

        return {
            'videosAnalyzed': result.videos_analyzed,
            'videosWithSuggestions': videos_with_suggestions,
            'totalSuggestions': len(result.suggestions),
            'urgentPriority': priority_counts.get(Priority.URGENT, 0),
            'highPriority': priority_counts.get(Priority.HIGH, 0),
            'mediumPriority': priority_counts.get(Priority.MEDIUM, 0),
            'lowPriority': priority_counts.get(Priority.LOW, 0),
            'infoPriority': priority_counts.get(Priority.INFO, 0),
            'byType': {t.value: type_counts.get(t, 0) for t in SuggestionType},
        }

    def generate_analysis(self):
        """Generate suggestions plus a JSON-ready summary"""
        print("\n💡 Channel Suggestion Analysis")
        print("=" * 50)

        result = self.generate()
        summary = self.summarize(result)

        video_suggestions: Dict[str, List[Dict]] = {}
        for suggestion in result.video_suggestions:
            video_suggestions.setdefault(suggestion.video_id, []).append(suggestion.to_dict())

        print("\n✅ Analysis complete!")
        print(f"🎬 Videos Analyzed: {summary['videosAnalyzed']}")
        print(f"📋 Total Suggestions: {summary['totalSuggestions']}")
        print(f"   - Urgent: {summary['urgentPriority']}")
        print(f"   - High: {summary['highPriority']}")
        print(f"   - Medium: {summary['mediumPriority']}")
        print(f"   - Low: {summary['lowPriority']}")
        print(f"   - Info: {summary['infoPriority']}")
        print(f"📅 Channel Patterns Found: {len(result.channel_suggestions)}")

        return {
            'channelId': result.channel_id,
            'channelAverages': result.averages.to_dict(),
            'anchorVideoId': result.anchor_video_id,
            'allSuggestions': [s.to_dict() for s in sort_by_priority(result.suggestions)],
            'videoSuggestions': video_suggestions,
            'channelSuggestions': [s.to_dict() for s in result.channel_suggestions],
            'summary': summary,
        }


def main():
    """Main execution function"""
    if len(sys.argv) != 2:
        print("❌ Error: Missing data file path")
        print("\nUsage:")
        print("  python3 -m tools.generate_suggestions path/to/videos.json")
        sys.exit(1)

    data_file = sys.argv[1]
    data_path = Path(data_file)

    if not data_path.exists():
        print(f"❌ Error: File not found: {data_file}")
        sys.exit(1)

    try:
        print(f"📂 Loading data from: {data_file}")
        with open(data_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        generator = SuggestionGenerator(data)
        analysis = generator.generate_analysis()

        output_file = data_path.parent / 'suggestions.json'
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(analysis, f, indent=2, ensure_ascii=False)

        print(f"\n📁 Suggestions saved to: {output_file}")
        print("\nNext step:")
        print(f"  python3 -m tools.export_to_excel {data_file} {output_file}")

    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"❌ Error: Invalid video data: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()

"""Serializer helpers for API responses."""

from __future__ import annotations

from tools.generate_suggestions import BatchResult, ChannelSuggestions
from tools.suggestion_models import Suggestion, SuggestionStatus



def suggestion_to_dict(suggestion: Suggestion) -> dict:
    payload = suggestion.to_dict()
    # Stored suggestions start out pending; the engine itself never sets this.
    payload["status"] = SuggestionStatus.PENDING.value
    return payload



def channel_result_to_dict(result: ChannelSuggestions) -> dict:
    return {
        "channel_id": result.channel_id,
        "averages": result.averages.to_dict(),
        "anchor_video_id": result.anchor_video_id,
        "videos_analyzed": result.videos_analyzed,
        "count": len(result.suggestions),
        "items": [suggestion_to_dict(suggestion) for suggestion in result.suggestions],
    }



def batch_result_to_dict(result: BatchResult) -> dict:
    return {
        "channels": [channel_result_to_dict(channel) for channel in result.channels],
        "total_videos": result.total_videos,
        "total_suggestions": result.total_suggestions,
    }

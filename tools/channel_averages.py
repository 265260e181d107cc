"""Channel-level averages used as the baseline for per-video rules."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from tools.suggestion_models import ChannelAverages, Video


def has_complete_metrics(video: Video) -> bool:
    return video.views is not None and video.ctr is not None and video.avg_view_duration is not None


def compute_averages(videos: Iterable[Video]) -> ChannelAverages:
    """
    Mean views, CTR and retention over videos that report all three.

    An empty subset yields NaN means, which every ratio rule treats as
    "no baseline".
    """
    complete = [video for video in videos if has_complete_metrics(video)]
    if not complete:
        return ChannelAverages(avg_views=math.nan, avg_ctr=math.nan, avg_duration=math.nan, sample_size=0)

    return ChannelAverages(
        avg_views=float(np.mean([video.views for video in complete])),
        avg_ctr=float(np.mean([video.ctr for video in complete])),
        avg_duration=float(np.mean([video.avg_view_duration for video in complete])),
        sample_size=len(complete),
    )

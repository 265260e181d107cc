"""Suggestion runner wrapper around the deterministic tool modules."""

from __future__ import annotations

import io
import json
import re
from contextlib import redirect_stdout
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from tools.export_to_excel import ExcelExporter
from tools.generate_markdown_report import MarkdownReportGenerator
from tools.generate_suggestions import SuggestionGenerator
from tools.suggestion_models import ChannelAverages, Video

SAFE_DIR_PATTERN = re.compile(r"[^A-Za-z0-9_-]+")


class PayloadTooLarge(ValueError):
    """Raised when a channel carries more videos than MAX_VIDEOS allows."""


def _emit(logger: Optional[Callable[[str], None]], message: str) -> None:
    if logger:
        logger(message)



def _capture_step(logger: Optional[Callable[[str], None]], step_name: str, fn) -> None:
    _emit(logger, f"\n[{step_name}] starting...")
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        fn()
    output = buffer.getvalue().strip()
    if output:
        _emit(logger, output)
    _emit(logger, f"[{step_name}] complete")



def parse_videos(records, max_videos: int = 0) -> List[Video]:
    if not isinstance(records, list):
        raise ValueError("videos must be a list")
    if max_videos and len(records) > max_videos:
        raise PayloadTooLarge(f"Too many videos: {len(records)} (limit {max_videos})")

    videos = []
    for index, record in enumerate(records):
        try:
            videos.append(Video.from_dict(record))
        except ValueError as exc:
            raise ValueError(f"videos[{index}]: {exc}") from exc
    return videos



def parse_video_payload(payload) -> Tuple[Video, ChannelAverages]:
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    if "video" not in payload:
        raise ValueError("video is required")
    if not isinstance(payload.get("averages"), dict):
        raise ValueError("averages must be an object")
    return Video.from_dict(payload["video"]), ChannelAverages.from_dict(payload["averages"])



def parse_channel_payload(payload, max_videos: int = 0) -> Tuple[Optional[str], List[Video]]:
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    channel_id = payload.get("channel_id", payload.get("channelId"))
    videos = parse_videos(payload.get("videos"), max_videos)
    return (str(channel_id) if channel_id is not None else None), videos



def parse_batch_payload(payload, max_videos: int = 0) -> Dict[str, List[Video]]:
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    channels = payload.get("channels")
    if not isinstance(channels, dict) or not channels:
        raise ValueError("channels must be a non-empty object of channel_id -> videos")

    parsed = {}
    for channel_id, records in channels.items():
        try:
            parsed[str(channel_id)] = parse_videos(records, max_videos)
        except PayloadTooLarge:
            raise
        except ValueError as exc:
            raise ValueError(f"channel {channel_id}: {exc}") from exc
    return parsed



def extract_summary_metrics(analysis: Dict) -> Dict[str, int]:
    summary = analysis.get("summary", {})
    return {
        "total_suggestions": int(summary.get("totalSuggestions", 0)),
        "urgent_priority": int(summary.get("urgentPriority", 0)),
        "high_priority": int(summary.get("highPriority", 0)),
        "medium_priority": int(summary.get("mediumPriority", 0)),
        "low_priority": int(summary.get("lowPriority", 0)),
        "info_priority": int(summary.get("infoPriority", 0)),
        "videos_analyzed": int(summary.get("videosAnalyzed", 0)),
    }



def output_dir_name(raw_data: Dict, fallback: str) -> str:
    channel = raw_data.get("channel") or {}
    name = SAFE_DIR_PATTERN.sub("_", str(channel.get("id") or fallback)).strip("_")
    return name or "channel"



def write_report_artifacts(
    raw_data: Dict,
    analysis: Dict,
    output_dir: Path,
    logger: Optional[Callable[[str], None]] = None,
) -> Dict[str, str]:
    output_dir.mkdir(parents=True, exist_ok=True)

    analysis_path = output_dir / "suggestions.json"
    with analysis_path.open("w", encoding="utf-8") as analysis_file:
        json.dump(analysis, analysis_file, indent=2, ensure_ascii=False)
    _emit(logger, f"Suggestions saved: {analysis_path}")

    excel_path = output_dir / "suggestions_report.xlsx"

    def do_excel_export():
        ExcelExporter(raw_data, analysis).export(excel_path)

    _capture_step(logger, "Export Excel", do_excel_export)

    markdown_path = output_dir / "report.md"

    def do_markdown():
        generator = MarkdownReportGenerator(raw_data, analysis)
        markdown_path.write_text(generator.generate(), encoding="utf-8")

    _capture_step(logger, "Generate Markdown", do_markdown)

    return {
        "analysis_path": str(analysis_path),
        "excel_path": str(excel_path),
        "markdown_path": str(markdown_path),
    }



def run_suggestion_pipeline(
    videos_path: str,
    output_folder: str,
    logger: Optional[Callable[[str], None]] = None,
) -> Dict:
    """Generate suggestions for a videos JSON file and write every report."""
    source = Path(videos_path)
    if not source.exists():
        raise FileNotFoundError(f"Videos file not found: {source}")

    with source.open("r", encoding="utf-8") as raw_file:
        raw_data = json.load(raw_file)
    if not isinstance(raw_data, dict) or not isinstance(raw_data.get("videos"), list):
        raise ValueError('Videos file must be an object with a "videos" list')
    if not isinstance(raw_data.get("channel") or {}, dict):
        raise ValueError('Videos file "channel" must be an object')

    _emit(logger, f"Generating suggestions for: {source}")
    generator = SuggestionGenerator(raw_data)

    analysis_holder: Dict = {}

    def do_analysis():
        analysis_holder["data"] = generator.generate_analysis()

    _capture_step(logger, "Generate Suggestions", do_analysis)
    analysis = analysis_holder["data"]

    output_dir = Path(output_folder) / output_dir_name(raw_data, source.stem)
    paths = write_report_artifacts(raw_data, analysis, output_dir, logger)

    return {
        "channel_id": generator.channel_id or "",
        "channel_name": (raw_data.get("channel") or {}).get("title", ""),
        "output_dir": str(output_dir),
        **paths,
        "summary": extract_summary_metrics(analysis),
    }

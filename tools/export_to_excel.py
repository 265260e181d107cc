#!/usr/bin/env python3
"""
Excel Exporter
Creates a multi-tab Excel workbook from channel suggestions.

Usage:
    python3 -m tools.export_to_excel path/to/videos.json path/to/suggestions.json [output.xlsx]
"""

import json
import sys
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from tools.suggestion_models import Video, record_video_id


TITLE_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
HEADER_FILL = PatternFill(start_color="D9D9D9", end_color="D9D9D9", fill_type="solid")
SECTION_FILL = PatternFill(start_color="EEF3F8", end_color="EEF3F8", fill_type="solid")
URGENT_FILL = PatternFill(start_color="F8D7DA", end_color="F8D7DA", fill_type="solid")

SUGGESTION_HEADERS = ["Priority", "Level", "Type", "Scope", "Video ID", "Video Title", "Suggestion", "Reason"]


def autosize_columns(worksheet, max_width=80):
    """Auto-size columns to content width with a reasonable cap."""
    widths = {}
    for row in worksheet.iter_rows():
        for cell in row:
            value = cell.value
            if value is None:
                continue
            length = len(str(value))
            widths[cell.column] = max(widths.get(cell.column, 0), length)

    for col_idx, width in widths.items():
        worksheet.column_dimensions[get_column_letter(col_idx)].width = min(max(width + 2, 10), max_width)


def style_title_row(worksheet, end_column):
    """Style and merge row 1 as title."""
    worksheet.merge_cells(start_row=1, start_column=1, end_row=1, end_column=end_column)
    cell = worksheet.cell(row=1, column=1)
    cell.fill = TITLE_FILL
    cell.font = Font(bold=True, color="FFFFFF", size=13)
    cell.alignment = Alignment(horizontal="center", vertical="center")


def style_header_row(worksheet, row_idx, end_column):
    for col in range(1, end_column + 1):
        cell = worksheet.cell(row=row_idx, column=col)
        cell.fill = HEADER_FILL
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)


def style_section_row(worksheet, row_idx, end_column):
    for col in range(1, end_column + 1):
        cell = worksheet.cell(row=row_idx, column=col)
        cell.fill = SECTION_FILL
        cell.font = Font(bold=True)


def format_average(value, percent=False):
    if value is None:
        return "N/A"
    if percent:
        return f"{value * 100:.1f}%"
    return f"{value:,.0f}"


class ExcelExporter:
    def __init__(self, raw_data, analysis):
        self.raw_data = raw_data
        self.analysis = analysis
        self.channel = raw_data.get("channel") or {}
        self.videos = raw_data.get("videos") or []
        self.titles = {str(record_video_id(video)): video.get("title") or "" for video in self.videos}

    def _suggestion_row(self, suggestion):
        video_id = suggestion.get("videoId")
        return [
            suggestion.get("priority"),
            suggestion.get("priorityLabel", ""),
            suggestion.get("type", ""),
            suggestion.get("scope", ""),
            video_id or "",
            self.titles.get(video_id, "") if video_id else "(channel-wide)",
            suggestion.get("suggestion", ""),
            suggestion.get("reason") or "",
        ]

    def create_summary_tab(self, workbook):
        ws = workbook.create_sheet("Summary")
        summary = self.analysis.get("summary", {})
        averages = self.analysis.get("channelAverages", {})

        rows = [
            ["CHANNEL SUGGESTIONS - EXECUTIVE SUMMARY"],
            [""],
            ["Channel Information", ""],
            ["Channel Name", self.channel.get("title", "")],
            ["Channel ID", self.analysis.get("channelId") or ""],
            ["Videos Analyzed", summary.get("videosAnalyzed", len(self.videos))],
            ["Average Views", format_average(averages.get("avgViews"))],
            ["Average CTR", format_average(averages.get("avgCtr"), percent=True)],
            ["Average Retention", format_average(averages.get("avgDuration"), percent=True)],
            [""],
            ["Suggestion Counts", ""],
            ["Total Suggestions", summary.get("totalSuggestions", 0)],
            ["Urgent", summary.get("urgentPriority", 0)],
            ["High", summary.get("highPriority", 0)],
            ["Medium", summary.get("mediumPriority", 0)],
            ["Low", summary.get("lowPriority", 0)],
            ["Info", summary.get("infoPriority", 0)],
            [""],
            ["Top 5 Suggestions", ""],
        ]

        for idx, rec in enumerate(self.analysis.get("allSuggestions", [])[:5], 1):
            rows.append([f"{idx}. [{rec.get('priorityLabel', 'N/A')}] {rec.get('type', 'N/A')}", rec.get("suggestion", "")])

        for row in rows:
            ws.append(row)

        style_title_row(ws, 2)
        style_section_row(ws, 3, 2)
        style_section_row(ws, 11, 2)
        style_section_row(ws, 19, 2)
        ws.freeze_panes = "A4"
        autosize_columns(ws)

    def create_all_suggestions_tab(self, workbook):
        ws = workbook.create_sheet("All Suggestions")
        ws.append(["ALL SUGGESTIONS (HIGHEST PRIORITY FIRST)"])
        ws.append(SUGGESTION_HEADERS)

        for suggestion in self.analysis.get("allSuggestions", []):
            ws.append(self._suggestion_row(suggestion))
            if suggestion.get("priority") == 5:
                for cell in ws[ws.max_row]:
                    cell.fill = URGENT_FILL

        style_title_row(ws, len(SUGGESTION_HEADERS))
        style_header_row(ws, 2, len(SUGGESTION_HEADERS))
        ws.freeze_panes = "A3"
        autosize_columns(ws)

    def create_by_video_tab(self, workbook):
        ws = workbook.create_sheet("By Video")
        headers = ["Video ID", "Title", "Views", "CTR", "Retention", "Suggestions", "Top Priority", "Watch URL"]
        ws.append(["SUGGESTIONS BY VIDEO"])
        ws.append(headers)

        by_video = self.analysis.get("videoSuggestions", {})
        # Raw records may carry numeric strings; read metrics from the parsed Video
        for video in (Video.from_dict(record) for record in self.videos):
            suggestions = by_video.get(video.id, [])
            ws.append([
                video.id,
                video.title or "",
                video.views,
                format_average(video.ctr, percent=True),
                format_average(video.avg_view_duration, percent=True),
                len(suggestions),
                max((s.get("priority", 0) for s in suggestions), default=None),
                f"https://youtube.com/watch?v={video.id}",
            ])

        style_title_row(ws, len(headers))
        style_header_row(ws, 2, len(headers))
        ws.freeze_panes = "A3"
        autosize_columns(ws)

    def create_channel_patterns_tab(self, workbook):
        ws = workbook.create_sheet("Channel Patterns")
        headers = ["Type", "Suggestion", "Reason", "Pattern Mean Views", "Overall Mean Views", "Sample Size"]
        ws.append(["CHANNEL-WIDE PATTERNS"])
        ws.append(headers)

        patterns = self.analysis.get("channelSuggestions", [])
        for suggestion in patterns:
            metrics = suggestion.get("metrics", {})
            pattern_mean = metrics.get("dayMeanViews", metrics.get("bracketMeanViews"))
            sample = metrics.get("dayVideoCount", metrics.get("bracketVideoCount"))
            ws.append([
                suggestion.get("type", ""),
                suggestion.get("suggestion", ""),
                suggestion.get("reason") or "",
                round(pattern_mean) if pattern_mean is not None else None,
                round(metrics["overallMeanViews"]) if metrics.get("overallMeanViews") is not None else None,
                sample,
            ])

        if not patterns:
            ws.append(["", "Not enough videos per day or length bracket to call a pattern (5+ videos, 2+ per group)."])

        style_title_row(ws, len(headers))
        style_header_row(ws, 2, len(headers))
        autosize_columns(ws)

    def export(self, output_path):
        workbook = Workbook()
        workbook.remove(workbook.active)

        self.create_summary_tab(workbook)
        self.create_all_suggestions_tab(workbook)
        self.create_by_video_tab(workbook)
        self.create_channel_patterns_tab(workbook)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        workbook.save(output_path)
        return output_path


def main():
    """Main execution function"""
    if len(sys.argv) not in (3, 4):
        print("❌ Error: Missing required files")
        print("\nUsage:")
        print("  python3 -m tools.export_to_excel path/to/videos.json path/to/suggestions.json [output.xlsx]")
        sys.exit(1)

    raw_data_file = sys.argv[1]
    analysis_file = sys.argv[2]
    output_path = Path(sys.argv[3]) if len(sys.argv) == 4 else Path(raw_data_file).parent / "suggestions_report.xlsx"

    try:
        print("📂 Loading data files...")
        with open(raw_data_file, "r", encoding="utf-8") as f:
            raw_data = json.load(f)
        with open(analysis_file, "r", encoding="utf-8") as f:
            analysis = json.load(f)

        print("\n📊 Exporting Excel workbook")
        print("=" * 50)
        saved = ExcelExporter(raw_data, analysis).export(output_path)

        print("\n✅ SUCCESS!")
        print(f"📁 Workbook saved to: {saved}")

    except FileNotFoundError as e:
        print(f"❌ Error: File not found: {e}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"❌ Error: Invalid video data: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

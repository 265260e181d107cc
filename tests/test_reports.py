import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from openpyxl import load_workbook

from tools.export_to_excel import ExcelExporter
from tools.generate_markdown_report import MarkdownReportGenerator
from tools.generate_suggestions import SuggestionGenerator


def _video(video_id, title, published_at, views, ctr, retention, duration, thumbnail="https://img/custom.jpg"):
    return {
        "id": video_id,
        "title": title,
        "published_at": published_at,
        "views": views,
        "likes": views // 20,
        "comments": views // 200,
        "ctr": ctr,
        "avg_view_duration": retention,
        "duration": duration,
        "thumbnail_url": thumbnail,
    }


def _raw_data(videos):
    return {"channel": {"id": "UC_TEST", "title": "Test Channel"}, "videos": videos}


def _mixed_videos():
    return [
        _video("v1", "How to Light 3 Scenes", "2025-01-06T10:00:00Z", 5000, 0.05, 0.45, "PT8M20S"),
        _video("v2", "Why 5 Lenses Matter", "2025-01-13T10:00:00Z", 7000, 0.06, 0.5, "PT10M00S"),
        _video("v3", "studio tour", "2025-01-15T10:00:00Z", 400, 0.01, 0.05, "PT3M10S",
               thumbnail="https://i.ytimg.com/vi/v3/default.jpg"),
        _video("v4", "The Ultimate 2025 Gear Guide", "2025-01-20T10:00:00Z", 9000, 0.07, 0.55, "PT12M30S"),
        _video("v5", "Secret 4 Step Color Grade", "2025-01-22T10:00:00Z", 3000, 0.04, 0.4, "PT4M00S"),
        _video("v6", "Complete 10 Minute Setup", "2025-01-27T10:00:00Z", 6000, 0.05, 0.42, "PT9M00S"),
    ]


def _analysis(raw):
    with redirect_stdout(io.StringIO()):
        return SuggestionGenerator(raw).generate_analysis()


class ReportOutputTests(unittest.TestCase):
    def test_excel_workbook_has_every_sheet(self):
        raw = _raw_data(_mixed_videos())
        analysis = _analysis(raw)

        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "nested" / "suggestions.xlsx"
            ExcelExporter(raw, analysis).export(output_path)
            workbook = load_workbook(output_path)

            self.assertEqual(workbook.sheetnames, ["Summary", "All Suggestions", "By Video", "Channel Patterns"])

            all_tab = workbook["All Suggestions"]
            self.assertEqual(all_tab.cell(row=2, column=1).value, "Priority")
            self.assertEqual(all_tab.max_row - 2, analysis["summary"]["totalSuggestions"])
            self.assertEqual(all_tab.cell(row=3, column=1).value, 5)

            by_video = workbook["By Video"]
            values = [str(cell) for row in by_video.iter_rows(values_only=True) for cell in row if cell is not None]
            self.assertIn("https://youtube.com/watch?v=v3", " ".join(values))

            patterns = workbook["Channel Patterns"]
            pattern_types = [row[0] for row in patterns.iter_rows(min_row=3, values_only=True)]
            self.assertIn("timing", pattern_types)

    def test_markdown_report_sections(self):
        raw = _raw_data(_mixed_videos())
        analysis = _analysis(raw)

        markdown = MarkdownReportGenerator(raw, analysis).generate()

        self.assertIn("# Channel Suggestions Report", markdown)
        self.assertIn("**Channel:** Test Channel", markdown)
        self.assertIn("## Top 5 Suggestions", markdown)
        self.assertIn("## 📅 Channel Patterns", markdown)
        self.assertIn("### studio tour", markdown)
        self.assertIn("https://youtube.com/watch?v=v3", markdown)

    def test_small_channel_reports_are_safe(self):
        raw = _raw_data(_mixed_videos()[:2])
        analysis = _analysis(raw)
        self.assertEqual(analysis["channelSuggestions"], [])

        markdown = MarkdownReportGenerator(raw, analysis).generate()
        self.assertIn("Not enough data yet", markdown)

        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "small.xlsx"
            ExcelExporter(raw, analysis).export(output_path)
            patterns = load_workbook(output_path)["Channel Patterns"]
            self.assertIn("Not enough videos", str(patterns.cell(row=3, column=2).value))

    def test_string_metrics_reach_the_workbook(self):
        raw = _raw_data([{"id": "a", "title": "x", "ctr": "0.05", "avg_view_duration": "0.4", "views": "10"}])
        analysis = _analysis(raw)

        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "strings.xlsx"
            ExcelExporter(raw, analysis).export(output_path)
            by_video = load_workbook(output_path)["By Video"]

            self.assertEqual(
                [cell.value for cell in by_video[3]][:5],
                ["a", "x", 10, "5.0%", "40.0%"],
            )

    def test_channel_without_averages(self):
        raw = _raw_data([{"id": "lonely", "title": "untitled"}])
        analysis = _analysis(raw)

        markdown = MarkdownReportGenerator(raw, analysis).generate()
        self.assertIn("Average Views: N/A", markdown)


if __name__ == "__main__":
    unittest.main()

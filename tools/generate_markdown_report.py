#!/usr/bin/env python3
"""
Markdown Report Generator
Generates a suggestions report in markdown format

Usage:
    python3 -m tools.generate_markdown_report path/to/videos.json path/to/suggestions.json
"""

import sys
import json
from pathlib import Path
from datetime import datetime

from tools.suggestion_models import record_video_id

PRIORITY_ICONS = {5: "🚨", 4: "🔴", 3: "⚠️", 2: "🟡", 1: "✅"}


class MarkdownReportGenerator:
    def __init__(self, raw_data, analysis):
        """Initialize generator with data"""
        self.channel = raw_data.get('channel') or {}
        self.videos = raw_data.get('videos') or []
        self.analysis = analysis

    def generate_header(self):
        date_str = datetime.now().strftime('%B %d, %Y')
        channel_name = self.channel.get('title') or self.analysis.get('channelId') or 'Unnamed channel'

        return f"""# Channel Suggestions Report
**Channel:** {channel_name}
**Date:** {date_str}
**Videos Analyzed:** {len(self.videos)}

---

"""

    def generate_executive_summary(self):
        summary = self.analysis.get("summary", {})
        averages = self.analysis.get("channelAverages", {})

        avg_views = averages.get('avgViews')
        avg_ctr = averages.get('avgCtr')
        avg_duration = averages.get('avgDuration')

        text = f"""## Executive Summary

**Channel Baseline** ({averages.get('sampleSize', 0)} videos with complete metrics):
- Average Views: {f"{avg_views:,.0f}" if avg_views is not None else "N/A"}
- Average CTR: {f"{avg_ctr * 100:.1f}%" if avg_ctr is not None else "N/A"}
- Average Retention: {f"{avg_duration * 100:.1f}%" if avg_duration is not None else "N/A"}

**Suggestions:**
- 🚨 {summary.get('urgentPriority', 0)} Urgent
- 🔴 {summary.get('highPriority', 0)} High
- ⚠️  {summary.get('mediumPriority', 0)} Medium
- 🟡 {summary.get('lowPriority', 0)} Low
- ✅ {summary.get('infoPriority', 0)} Info (things that are working)

---

"""
        return text

    def generate_top_suggestions(self, limit=5):
        top = self.analysis.get("allSuggestions", [])[:limit]
        titles = {str(record_video_id(video)): video.get('title') or '' for video in self.videos}

        text = f"## Top {limit} Suggestions\n\n"
        if not top:
            return text + "No suggestions - every rule passed.\n\n---\n\n"

        for i, rec in enumerate(top, 1):
            icon = PRIORITY_ICONS.get(rec.get('priority'), "•")
            video_id = rec.get('videoId')
            target = f"Video: {titles.get(video_id) or video_id}" if video_id else "Channel-wide"

            text += f"""### {i}. {icon} [{rec.get('priorityLabel', 'N/A')}] {rec.get('type', 'general')}: {rec.get('suggestion', '')}

**Applies to:** {target}

**Why:**
{rec.get('reason') or 'N/A'}

---

"""
        return text

    def generate_channel_patterns(self):
        patterns = self.analysis.get("channelSuggestions", [])
        text = "## 📅 Channel Patterns\n\n"
        if not patterns:
            return text + "Not enough data yet: patterns need 5+ videos and 2+ videos per day or length bracket.\n\n---\n\n"

        for rec in patterns:
            text += f"- **{rec.get('type', '').title()}:** {rec.get('suggestion', '')}  \n  {rec.get('reason') or ''}\n"
        return text + "\n---\n\n"

    def generate_video_sections(self):
        by_video = self.analysis.get("videoSuggestions", {})
        text = "## 🎬 Video-by-Video Suggestions\n\n"

        for video in self.videos:
            video_id = str(record_video_id(video))
            suggestions = by_video.get(video_id, [])
            if not suggestions:
                continue
            text += f"### {video.get('title') or video_id}\n"
            text += f"https://youtube.com/watch?v={video_id}\n\n"
            for rec in sorted(suggestions, key=lambda s: -s.get('priority', 0)):
                icon = PRIORITY_ICONS.get(rec.get('priority'), "•")
                text += f"- {icon} [{rec.get('priorityLabel', '')}] {rec.get('suggestion', '')}"
                if rec.get('reason'):
                    text += f" - {rec['reason']}"
                text += "\n"
            text += "\n"

        return text

    def generate(self):
        """Generate complete markdown report"""
        report = ""
        report += self.generate_header()
        report += self.generate_executive_summary()
        report += self.generate_top_suggestions()
        report += self.generate_channel_patterns()
        report += self.generate_video_sections()
        return report


def main():
    """Main execution function"""
    if len(sys.argv) != 3:
        print("❌ Error: Missing required files")
        print("\nUsage:")
        print("  python3 -m tools.generate_markdown_report path/to/videos.json path/to/suggestions.json")
        sys.exit(1)

    raw_data_file = sys.argv[1]
    analysis_file = sys.argv[2]

    try:
        print("📂 Loading data files...")
        with open(raw_data_file, 'r', encoding='utf-8') as f:
            raw_data = json.load(f)
        with open(analysis_file, 'r', encoding='utf-8') as f:
            analysis = json.load(f)

        print("\n🚀 Generating Markdown Report")
        print("=" * 50)

        generator = MarkdownReportGenerator(raw_data, analysis)
        report = generator.generate()

        output_path = Path(raw_data_file).parent / 'report.md'
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(report)

        print("\n" + "=" * 50)
        print("✅ SUCCESS!")
        print(f"📁 Report saved to: {output_path}")
        print("\n📄 Report Preview:")
        print("=" * 50)
        print(report[:1000] + "\n\n... (truncated for display)\n")

    except FileNotFoundError as e:
        print(f"❌ Error: File not found: {e}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()

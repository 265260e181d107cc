import os
import shutil
import sys

from web.config import AppConfig
from web.services.suggestion_runner import run_suggestion_pipeline


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 main.py \"path/to/videos.json\"")
        sys.exit(1)

    videos_path = sys.argv[1]
    config = AppConfig.from_env()

    # Ensure reports directory exists
    os.makedirs("reports", exist_ok=True)

    print(f"\n🚀 Running suggestion pipeline for {videos_path}...")
    try:
        result = run_suggestion_pipeline(videos_path, config.output_folder, logger=print)
    except FileNotFoundError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too
        print(f"❌ Error: {e}")
        sys.exit(1)

    summary = result["summary"]
    print(f"\n✅ {summary['total_suggestions']} suggestions for {summary['videos_analyzed']} videos")
    print(f"   - Urgent: {summary['urgent_priority']}, High: {summary['high_priority']}, "
          f"Medium: {summary['medium_priority']}, Low: {summary['low_priority']}, Info: {summary['info_priority']}")

    # Copy report to reports directory
    report_name = result["channel_id"] or os.path.splitext(os.path.basename(videos_path))[0]
    target_report = f"reports/{report_name}_report.md"
    try:
        shutil.copy(result["markdown_path"], target_report)
        print(f"\n✨ Done! Your report is ready: {target_report}")
    except OSError as e:
        print(f"⚠️ Could not copy report to {target_report}: {e}")
        print(f"   The report is still available at: {result['markdown_path']}")

    print(f"📊 Workbook: {result['excel_path']}")


if __name__ == "__main__":
    main()

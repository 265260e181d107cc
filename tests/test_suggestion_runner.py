import json
import tempfile
import unittest
from pathlib import Path

from web.services.suggestion_runner import (
    PayloadTooLarge,
    extract_summary_metrics,
    output_dir_name,
    parse_batch_payload,
    parse_channel_payload,
    parse_video_payload,
    run_suggestion_pipeline,
)


def _records(count):
    return [
        {
            "id": f"v{i}",
            "title": f"How to fix {i} things",
            "published_at": f"2025-01-{i + 1:02d}T09:00:00Z",
            "views": 1000 + i * 100,
            "ctr": 0.05,
            "avg_view_duration": 0.4,
            "duration": 600,
            "thumbnail_url": "https://img/custom.jpg",
        }
        for i in range(count)
    ]


class PayloadParsingTests(unittest.TestCase):
    def test_parse_video_payload(self):
        video, averages = parse_video_payload({"video": {"id": "v1", "ctr": 0.02}, "averages": {"avgCtr": 0.06}})
        self.assertEqual(video.id, "v1")
        self.assertEqual(averages.avg_ctr, 0.06)

    def test_parse_video_payload_errors(self):
        for payload in (None, [], {"averages": {}}, {"video": {"id": "v"}}, {"video": {"id": "v"}, "averages": 3}):
            with self.assertRaises(ValueError, msg=repr(payload)):
                parse_video_payload(payload)

    def test_parse_channel_payload(self):
        channel_id, videos = parse_channel_payload({"channel_id": 7, "videos": _records(3)})
        self.assertEqual(channel_id, "7")
        self.assertEqual([v.id for v in videos], ["v0", "v1", "v2"])

    def test_bad_record_error_names_its_index(self):
        records = _records(2) + [{"id": "bad", "views": -3}]
        with self.assertRaises(ValueError) as ctx:
            parse_channel_payload({"videos": records})
        self.assertIn("videos[2]", str(ctx.exception))

    def test_video_limit(self):
        with self.assertRaises(PayloadTooLarge):
            parse_channel_payload({"videos": _records(4)}, max_videos=3)
        with self.assertRaises(PayloadTooLarge):
            parse_batch_payload({"channels": {"a": _records(4)}}, max_videos=3)

    def test_parse_batch_payload(self):
        channels = parse_batch_payload({"channels": {"a": _records(2), "b": []}})
        self.assertEqual(sorted(channels), ["a", "b"])
        self.assertEqual(channels["b"], [])

        for payload in ({}, {"channels": {}}, {"channels": []}, {"channels": {"a": "nope"}}):
            with self.assertRaises(ValueError, msg=repr(payload)):
                parse_batch_payload(payload)


class RunnerTests(unittest.TestCase):
    def test_extract_summary_metrics(self):
        analysis = {
            "summary": {
                "totalSuggestions": 9,
                "urgentPriority": 1,
                "highPriority": 2,
                "mediumPriority": 3,
                "lowPriority": 2,
                "infoPriority": 1,
                "videosAnalyzed": 30,
            },
        }
        metrics = extract_summary_metrics(analysis)
        self.assertEqual(metrics["total_suggestions"], 9)
        self.assertEqual(metrics["urgent_priority"], 1)
        self.assertEqual(metrics["info_priority"], 1)
        self.assertEqual(metrics["videos_analyzed"], 30)

    def test_output_dir_name_is_filesystem_safe(self):
        self.assertEqual(output_dir_name({"channel": {"id": "../UC x"}}, "fallback"), "UC_x")
        self.assertEqual(output_dir_name({}, "videos"), "videos")

    def test_run_pipeline_writes_artifacts(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "videos.json"
            source.write_text(
                json.dumps({"channel": {"id": "UC_RUN", "title": "Runner"}, "videos": _records(6)}),
                encoding="utf-8",
            )
            messages = []

            result = run_suggestion_pipeline(str(source), str(Path(tmpdir) / "out"), logger=messages.append)

            self.assertEqual(result["channel_id"], "UC_RUN")
            self.assertEqual(result["channel_name"], "Runner")
            self.assertEqual(result["summary"]["videos_analyzed"], 6)
            for key in ("analysis_path", "excel_path", "markdown_path"):
                self.assertTrue(Path(result[key]).exists(), key)
            self.assertEqual(Path(result["output_dir"]).name, "UC_RUN")

            saved = json.loads(Path(result["analysis_path"]).read_text(encoding="utf-8"))
            self.assertEqual(saved["summary"]["totalSuggestions"], result["summary"]["total_suggestions"])
            self.assertTrue(any("[Generate Suggestions] complete" in message for message in messages))

    def test_run_pipeline_rejects_bad_files(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(FileNotFoundError):
                run_suggestion_pipeline(str(Path(tmpdir) / "missing.json"), tmpdir)

            wrong_shape = Path(tmpdir) / "wrong.json"
            wrong_shape.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
            with self.assertRaises(ValueError):
                run_suggestion_pipeline(str(wrong_shape), tmpdir)

            bad_channel = Path(tmpdir) / "bad_channel.json"
            bad_channel.write_text(json.dumps({"channel": "abc", "videos": []}), encoding="utf-8")
            with self.assertRaises(ValueError):
                run_suggestion_pipeline(str(bad_channel), tmpdir)


if __name__ == "__main__":
    unittest.main()

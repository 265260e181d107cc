import math
import unittest

from tools.channel_averages import compute_averages, has_complete_metrics
from tools.suggestion_models import Video


class ChannelAveragesTests(unittest.TestCase):
    def test_empty_input_yields_nan(self):
        averages = compute_averages([])
        self.assertTrue(math.isnan(averages.avg_views))
        self.assertTrue(math.isnan(averages.avg_ctr))
        self.assertTrue(math.isnan(averages.avg_duration))
        self.assertEqual(averages.sample_size, 0)

    def test_only_complete_videos_count(self):
        videos = [
            Video(id="a", views=100, ctr=0.02, avg_view_duration=0.4),
            Video(id="b", views=300, ctr=0.06, avg_view_duration=0.2),
            Video(id="no-ctr", views=100000, avg_view_duration=0.9),
            Video(id="no-views", ctr=0.9, avg_view_duration=0.9),
            Video(id="no-retention", views=100000, ctr=0.9),
        ]

        averages = compute_averages(videos)

        self.assertEqual(averages.sample_size, 2)
        self.assertAlmostEqual(averages.avg_views, 200)
        self.assertAlmostEqual(averages.avg_ctr, 0.04)
        self.assertAlmostEqual(averages.avg_duration, 0.3)

    def test_zero_values_are_present_values(self):
        video = Video(id="z", views=0, ctr=0.0, avg_view_duration=0.0)
        self.assertTrue(has_complete_metrics(video))

        averages = compute_averages([video])
        self.assertEqual(averages.sample_size, 1)
        self.assertEqual(averages.avg_views, 0.0)

    def test_nan_averages_serialize_as_null(self):
        payload = compute_averages([]).to_dict()
        self.assertEqual(payload, {"avgViews": None, "avgCtr": None, "avgDuration": None, "sampleSize": 0})


if __name__ == "__main__":
    unittest.main()

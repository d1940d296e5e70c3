import unittest
from datetime import datetime, timedelta

import pytz

from _test_support import reset_database  # noqa: F401
from clustertasks.time_utils import elapsed_ms, now_utc


class TimeUtilsTests(unittest.TestCase):
    def test_now_utc_is_timezone_aware(self):
        self.assertEqual(now_utc().tzinfo, pytz.UTC)

    def test_elapsed_ms_localizes_naive_start(self):
        finished = pytz.UTC.localize(datetime(2026, 1, 2, 3, 4, 6))
        self.assertEqual(elapsed_ms(datetime(2026, 1, 2, 3, 4, 5), finished), 1000)

    def test_elapsed_ms_never_negative(self):
        started = now_utc() + timedelta(seconds=5)
        self.assertEqual(elapsed_ms(started, now_utc()), 0)

    def test_elapsed_ms_none_passthrough(self):
        self.assertIsNone(elapsed_ms(None))


if __name__ == "__main__":
    unittest.main()

import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from gdstorage.util.time import now_ns, parse_rfc3339


class TestUtilTime(unittest.TestCase):
    def test_now_ns_uses_time_ns(self) -> None:
        with patch("time.time_ns", return_value=123):
            self.assertEqual(now_ns(), 123)

    def test_parse_rfc3339_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56Z")
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_fractional_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56.123000Z")
        self.assertEqual(
            dt, datetime(2025, 1, 1, 12, 34, 56, 123000, tzinfo=timezone.utc)
        )

    def test_parse_rfc3339_offset_converts_to_utc(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56+09:00")
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt, datetime(2025, 1, 1, 3, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_rejects_garbage_and_naive(self) -> None:
        for value in ("", "yesterday", "2025-01-01T12:34:56"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_rfc3339(value)


if __name__ == "__main__":
    unittest.main()

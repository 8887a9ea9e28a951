import unittest
from datetime import time

from railfeed.core.errors import TimeFormatError
from railfeed.jobs.consume.utils.time import parse_time_of_day, seconds_since_midnight


class ParseTimeOfDayTests(unittest.TestCase):
    def test_five_chars_is_hours_minutes(self):
        self.assertEqual(parse_time_of_day("09:05"), time(9, 5))
        self.assertEqual(parse_time_of_day("23:59"), time(23, 59))

    def test_seconds_layout(self):
        self.assertEqual(parse_time_of_day("09:30:30"), time(9, 30, 30))
        self.assertEqual(parse_time_of_day("00:00:00"), time(0, 0, 0))

    def test_invalid_values_raise(self):
        for value in ["9:5", "9:05", "0930", "09:60", "25:00", "09:30:", "09:30:5", "ab:cd", " 09:30"]:
            with self.subTest(value=value):
                with self.assertRaises(TimeFormatError):
                    parse_time_of_day(value)

    def test_empty_string_is_not_accepted(self):
        with self.assertRaises(TimeFormatError):
            parse_time_of_day("")

    def test_time_format_error_is_value_error(self):
        with self.assertRaises(ValueError):
            parse_time_of_day("later")

    def test_seconds_since_midnight(self):
        self.assertEqual(seconds_since_midnight(time(0, 0)), 0)
        self.assertEqual(seconds_since_midnight(time(1, 2, 3)), 3723)


if __name__ == "__main__":
    unittest.main()

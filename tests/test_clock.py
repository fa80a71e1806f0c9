import datetime as dt
import unittest

from unari.clock import Clock, format_date, shift_date


def fixed_clock(moment: dt.datetime) -> Clock:
    return Clock(now=lambda tz: moment.astimezone(tz))


class TestShiftDate(unittest.TestCase):
    def test_end_of_month(self):
        self.assertEqual(shift_date(dt.date(2026, 10, 31), 1), dt.date(2026, 11, 1))
        self.assertEqual(shift_date(dt.date(2026, 3, 1), -1), dt.date(2026, 2, 28))

    def test_end_of_year(self):
        self.assertEqual(shift_date(dt.date(2026, 12, 31), 1), dt.date(2027, 1, 1))
        self.assertEqual(shift_date(dt.date(2027, 1, 1), -1), dt.date(2026, 12, 31))

    def test_leap_day(self):
        self.assertEqual(shift_date(dt.date(2028, 2, 28), 1), dt.date(2028, 2, 29))

    def test_daylight_saving_transitions_advance_one_calendar_day(self):
        # Europe/Helsinki switches on the last Sundays of March and October.
        self.assertEqual(shift_date(dt.date(2026, 3, 28), 1), dt.date(2026, 3, 29))
        self.assertEqual(shift_date(dt.date(2026, 3, 29), 1), dt.date(2026, 3, 30))
        self.assertEqual(shift_date(dt.date(2026, 10, 25), 1), dt.date(2026, 10, 26))


class TestClock(unittest.TestCase):
    def test_today_uses_helsinki_time(self):
        # 22:30 UTC is already the next day in Helsinki (UTC+3 in summer).
        clock = fixed_clock(dt.datetime(2026, 7, 1, 22, 30, tzinfo=dt.timezone.utc))
        self.assertEqual(clock.today(), dt.date(2026, 7, 2))

    def test_today_in_winter_offset(self):
        clock = fixed_clock(dt.datetime(2026, 12, 31, 21, 59, tzinfo=dt.timezone.utc))
        self.assertEqual(clock.today(), dt.date(2026, 12, 31))
        clock = fixed_clock(dt.datetime(2026, 12, 31, 22, 0, tzinfo=dt.timezone.utc))
        self.assertEqual(clock.today(), dt.date(2027, 1, 1))

    def test_format_date(self):
        self.assertEqual(format_date(dt.date(2026, 10, 18)), "Su 18.10.2026")
        self.assertEqual(format_date(dt.date(2026, 10, 19)), "Ma 19.10.2026")


if __name__ == "__main__":
    unittest.main()

# tests/test_timeutil.py

from datetime import date, datetime, timezone

from orderdesk.utils.timeutil import bst_date, today_bst, tomorrow_bst


def test_bst_date_crosses_midnight():
    assert bst_date(datetime(2026, 1, 1, 17, 59, tzinfo=timezone.utc)) == date(2026, 1, 1)
    assert bst_date(datetime(2026, 1, 1, 18, 0, tzinfo=timezone.utc)) == date(2026, 1, 2)


def test_naive_timestamps_are_utc():
    assert bst_date(datetime(2026, 1, 1, 18, 0)) == date(2026, 1, 2)


def test_today_and_tomorrow():
    now = datetime(2026, 12, 31, 19, 0, tzinfo=timezone.utc)
    assert today_bst(now) == date(2027, 1, 1)
    assert tomorrow_bst(now) == date(2027, 1, 2)

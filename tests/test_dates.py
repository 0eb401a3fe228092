"""Tests for the date helpers."""

from __future__ import annotations

import os
import time
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from tasktrek.core.dates import (
    days_before,
    short_date_label,
    start_of_day,
    start_of_week,
    to_datetime,
)
from tasktrek.dashboard.services import build_task_chart
from tasktrek.task.models import Task


class DatesTestCase(unittest.TestCase):
    def test_start_of_week_is_previous_sunday(self) -> None:
        wednesday = datetime(2026, 10, 14, 15, 30).astimezone()
        week_start = start_of_week(wednesday)
        self.assertEqual(week_start.date().isoformat(), "2026-10-11")
        self.assertEqual((week_start.hour, week_start.minute), (0, 0))

    def test_start_of_week_on_sunday_is_same_day(self) -> None:
        sunday = datetime(2026, 10, 18, 9, 0).astimezone()
        self.assertEqual(start_of_week(sunday).date().isoformat(), "2026-10-18")

    def test_start_of_week_on_saturday(self) -> None:
        saturday = datetime(2026, 10, 17, 23, 59).astimezone()
        self.assertEqual(start_of_week(saturday).date().isoformat(), "2026-10-11")

    def test_start_of_day(self) -> None:
        moment = datetime(2026, 10, 14, 15, 30, 12, 5).astimezone()
        self.assertEqual(
            start_of_day(moment), datetime(2026, 10, 14).astimezone()
        )

    def test_to_datetime_accepts_aware_datetime(self) -> None:
        value = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)
        result = to_datetime(value)
        self.assertIsNotNone(result)
        self.assertEqual(result, value)
        self.assertIsNotNone(result.tzinfo)

    def test_to_datetime_treats_naive_as_local(self) -> None:
        naive = datetime(2026, 10, 14, 12, 0)
        self.assertEqual(to_datetime(naive), naive.astimezone())

    def test_to_datetime_parses_iso_strings(self) -> None:
        result = to_datetime("2026-10-14T12:00:00Z")
        self.assertEqual(result, datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc))

    def test_to_datetime_parses_epoch_millis(self) -> None:
        expected = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)
        millis = int(expected.timestamp() * 1000)
        self.assertEqual(to_datetime(millis), expected)

    def test_to_datetime_rejects_garbage(self) -> None:
        self.assertIsNone(to_datetime(None))
        self.assertIsNone(to_datetime("not a date"))
        self.assertIsNone(to_datetime(True))
        self.assertIsNone(to_datetime({"seconds": 1}))

    def test_short_date_label(self) -> None:
        self.assertEqual(short_date_label(datetime(2026, 10, 8)), "Oct 8")


@unittest.skipUnless(hasattr(time, "tzset"), "needs time.tzset")
class DaylightSavingTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.addCleanup(time.tzset)
        patcher = patch.dict(os.environ, {"TZ": "America/New_York"})
        patcher.start()
        self.addCleanup(patcher.stop)
        time.tzset()

    def test_week_start_after_fall_back_is_local_midnight(self) -> None:
        # Clocks went back at 02:00 on Sunday 2026-11-01
        tuesday = datetime(2026, 11, 3, 12, 0).astimezone()
        week_start = start_of_week(tuesday)
        self.assertEqual(week_start, datetime(2026, 11, 1).astimezone())
        self.assertEqual((week_start.hour, week_start.minute), (0, 0))
        self.assertEqual(week_start.utcoffset(), timedelta(hours=-4))

    def test_week_start_after_spring_forward_is_local_midnight(self) -> None:
        # Clocks went forward at 02:00 on Sunday 2026-03-08
        tuesday = datetime(2026, 3, 10, 12, 0).astimezone()
        week_start = start_of_week(tuesday)
        self.assertEqual(week_start, datetime(2026, 3, 8).astimezone())
        self.assertEqual(week_start.utcoffset(), timedelta(hours=-5))

    def test_days_before_crosses_the_change(self) -> None:
        today = start_of_day(datetime(2026, 11, 3, 12, 0).astimezone())
        start = days_before(today, 6)
        self.assertEqual(start, datetime(2026, 10, 28).astimezone())
        self.assertEqual(start.hour, 0)

    def test_week_chart_counts_task_just_after_midnight(self) -> None:
        now = datetime(2026, 11, 3, 12, 0).astimezone()
        task = Task(
            id="t1", created_at=datetime(2026, 10, 28, 0, 30).astimezone()
        )
        chart, _ = build_task_chart([task], now, "week")
        created = chart["datasets"][1]["data"]
        self.assertEqual(created, [1, 0, 0, 0, 0, 0, 0])
        self.assertEqual(chart["labels"][0], "Oct 28")

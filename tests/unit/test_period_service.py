"""Unit tests for period_service module."""

from datetime import UTC, date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from pawplan.models.service_models import TimeOfDay
from pawplan.services.period_service import (
    bucket_of,
    day_key,
    day_window,
    feed_title,
    group_activity_feed,
    iter_days,
    local_date,
    resolve_timezone,
    task_sort_key,
    task_time_of_day,
    time_of_day_for_hour,
    to_local,
)


PLUS_TEN = timezone(timedelta(hours=10))
NEW_YORK = ZoneInfo("America/New_York")


@pytest.mark.unit
class TestDayKeys:
    """Tests for household-local day keys."""

    def test_late_evening_stays_on_local_day(self):
        # 23:50 at +10:00 is 13:50 UTC the same day
        completed_at = datetime(2026, 3, 10, 13, 50, tzinfo=UTC)

        bucket = bucket_of(completed_at, PLUS_TEN)

        assert bucket.day_key == "2026-03-10"
        assert bucket.time_of_day == TimeOfDay.EVENING

    def test_early_local_morning_is_previous_utc_day(self):
        # 00:30 on 2026-03-11 at +10:00 is still 2026-03-10 in UTC
        completed_at = datetime(2026, 3, 10, 14, 30, tzinfo=UTC)

        assert day_key(completed_at, PLUS_TEN) == "2026-03-11"
        assert day_key(completed_at, UTC) == "2026-03-10"

    def test_west_of_utc(self):
        # 23:50 EDT on 2026-07-01 is 03:50 UTC on 2026-07-02
        completed_at = datetime(2026, 7, 2, 3, 50, tzinfo=UTC)

        bucket = bucket_of(completed_at, NEW_YORK)

        assert bucket.day_key == "2026-07-01"
        assert bucket.time_of_day == TimeOfDay.EVENING

    def test_naive_timestamps_are_utc(self):
        naive = datetime(2026, 3, 10, 20, 0)

        assert to_local(naive, PLUS_TEN) == datetime(2026, 3, 11, 6, 0, tzinfo=PLUS_TEN)
        assert local_date(naive, PLUS_TEN) == date(2026, 3, 11)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("hour", "expected"),
    [
        (0, TimeOfDay.EVENING),
        (4, TimeOfDay.EVENING),
        (5, TimeOfDay.MORNING),
        (11, TimeOfDay.MORNING),
        (12, TimeOfDay.AFTERNOON),
        (16, TimeOfDay.AFTERNOON),
        (17, TimeOfDay.EVENING),
        (23, TimeOfDay.EVENING),
    ],
)
def test_time_of_day_boundaries(hour, expected):
    assert time_of_day_for_hour(hour) == expected


@pytest.mark.unit
class TestTaskBuckets:
    """Tests for scheduled-time bucketing of tasks."""

    def test_scheduled_time_overrides_completion_hour(self):
        completed_at = datetime(2026, 3, 10, 19, 0, tzinfo=UTC)

        bucket = bucket_of(completed_at, UTC, scheduled_time="08:00")

        assert bucket.time_of_day == TimeOfDay.MORNING
        assert bucket.day_key == "2026-03-10"

    def test_unreadable_scheduled_time_uses_completion_hour(self):
        completed_at = datetime(2026, 3, 10, 13, 0, tzinfo=UTC)

        assert bucket_of(completed_at, UTC, scheduled_time="lunch").time_of_day == TimeOfDay.AFTERNOON

    def test_task_time_of_day(self, task_factory):
        assert task_time_of_day(task_factory(recurrence_rule={"time": "07:30"})) == TimeOfDay.MORNING
        assert task_time_of_day(task_factory(recurrence_rule={"time": "13:00"})) == TimeOfDay.AFTERNOON
        assert task_time_of_day(task_factory(recurrence_rule={"time": "24:15"})) == TimeOfDay.EVENING
        assert task_time_of_day(task_factory(recurrence_rule={})) == TimeOfDay.EVENING

    def test_sort_key_puts_untimed_tasks_last(self, task_factory):
        tasks = [
            task_factory(id="c", title="Brush", recurrence_rule={}),
            task_factory(id="b", title="Walk", recurrence_rule={"time": "18:00"}),
            task_factory(id="a", title="Breakfast", recurrence_rule={"time": "08:00"}),
        ]

        assert [task.id for task in sorted(tasks, key=task_sort_key)] == ["a", "b", "c"]


@pytest.mark.unit
class TestDayWindow:
    """Tests for day_window and iter_days."""

    def test_regular_day_is_24_hours(self):
        start, end = day_window(date(2026, 3, 10), PLUS_TEN)

        assert start == datetime(2026, 3, 9, 14, 0, tzinfo=UTC)
        assert end - start == timedelta(hours=24)

    def test_spring_forward_day_is_23_hours(self):
        start, end = day_window(date(2026, 3, 8), NEW_YORK)

        assert end.astimezone(UTC) - start.astimezone(UTC) == timedelta(hours=23)

    def test_fall_back_day_is_25_hours(self):
        start, end = day_window(date(2026, 11, 1), NEW_YORK)

        assert end.astimezone(UTC) - start.astimezone(UTC) == timedelta(hours=25)

    def test_iter_days_is_inclusive(self):
        assert list(iter_days(date(2026, 2, 27), date(2026, 3, 1))) == [
            date(2026, 2, 27),
            date(2026, 2, 28),
            date(2026, 3, 1),
        ]
        assert list(iter_days(date(2026, 3, 2), date(2026, 3, 1))) == []


@pytest.mark.unit
class TestResolveTimezone:
    """Tests for resolve_timezone function."""

    def test_known_zone(self):
        assert str(resolve_timezone("Australia/Sydney")) == "Australia/Sydney"

    @pytest.mark.parametrize("name", [None, "", "Mars/Olympus_Mons"])
    def test_unknown_or_missing_falls_back_to_default(self, name):
        assert str(resolve_timezone(name)) == "UTC"

    def test_unknown_zone_is_logged_with_error_code(self, caplog):
        with caplog.at_level("WARNING", logger="pawplan.services.period_service"):
            resolve_timezone("Mars/Olympus_Mons")

        assert "ERR_INVALID_TIMEZONE" in caplog.text


@pytest.mark.unit
class TestActivityFeed:
    """Tests for feed titles and grouping."""

    def test_titles(self):
        today = date(2026, 3, 10)

        assert feed_title(today, today) == "Today"
        assert feed_title(date(2026, 3, 9), today) == "Yesterday"
        assert feed_title(date(2026, 3, 5), today) == "Thursday, Mar 5"

    def test_groups_newest_first_by_local_day(self, log_factory):
        now = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)
        older = log_factory(pet_id="rex", completed_at=datetime(2026, 3, 8, 9, 0, tzinfo=UTC))
        yesterday = log_factory(pet_id="rex", completed_at=datetime(2026, 3, 9, 9, 0, tzinfo=UTC))
        early = log_factory(pet_id="rex", completed_at=datetime(2026, 3, 10, 6, 0, tzinfo=UTC))
        later = log_factory(pet_id="milo", completed_at=datetime(2026, 3, 10, 8, 0, tzinfo=UTC))

        groups = group_activity_feed([older, early, yesterday, later], now=now, tz=UTC)

        assert [group.title for group in groups] == ["Today", "Yesterday", "Sunday, Mar 8"]
        assert groups[0].logs == [later, early]
        assert groups[0].day_key == "2026-03-10"

    def test_empty_feed(self):
        assert group_activity_feed([], now=datetime(2026, 3, 10, tzinfo=UTC), tz=UTC) == []


@pytest.mark.unit
def test_scheduled_time_accepts_time_objects():
    assert bucket_of(datetime(2026, 3, 10, 2, tzinfo=UTC), UTC, scheduled_time=time(12, 0)).time_of_day == (
        TimeOfDay.AFTERNOON
    )

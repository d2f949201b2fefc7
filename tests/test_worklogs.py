from datetime import date, datetime

import pytest
import pytz

from jira_app.analytics.aggregations.worklogs import (
    build_report,
    build_timesheet,
    bucket_daily,
    filter_entries,
    period_bounds,
    summarize_by_issue,
    week_bounds,
)
from jira_app.core.models import WorklogEntry

TZ = pytz.timezone("America/Guatemala")
# Wednesday
NOW = TZ.localize(datetime(2024, 9, 4, 15, 0))
ME = "acc-me"


def _entry(key, when, seconds, author=ME, wid=None):
    return WorklogEntry(
        id=wid or f"{key}-{when:%d%H%M}",
        issue_key=key,
        summary=f"{key} summary",
        time_spent_seconds=seconds,
        started=TZ.localize(when),
        author_account_id=author,
    )


def _entries():
    return [
        _entry("OBS-1", datetime(2024, 9, 2, 9, 0), 4 * 3600),
        _entry("OBS-2", datetime(2024, 9, 2, 14, 0), 4 * 3600),
        _entry("OBS-1", datetime(2024, 9, 4, 8, 0), 3 * 3600),
        _entry("OBS-3", datetime(2024, 9, 4, 10, 0), 3600, author="someone-else"),
        # previous week
        _entry("OBS-4", datetime(2024, 8, 30, 10, 0), 2 * 3600),
        # earlier this month, before the week
        _entry("OBS-5", datetime(2024, 9, 1, 10, 0), 1800),
    ]


def test_week_bounds_monday_to_sunday():
    start, end = week_bounds(NOW, TZ)
    assert start.date() == date(2024, 9, 2)
    assert end.date() == date(2024, 9, 8)
    assert (start.hour, start.minute) == (0, 0)
    assert (end.hour, end.minute, end.second) == (23, 59, 59)


def test_week_bounds_on_sunday_stays_in_week():
    sunday = TZ.localize(datetime(2024, 9, 8, 22, 0))
    start, _ = week_bounds(sunday, TZ)
    assert start.date() == date(2024, 9, 2)


def test_week_bounds_converts_aware_now():
    # 03:00 UTC Monday is still Sunday evening in Guatemala
    utc_now = pytz.UTC.localize(datetime(2024, 9, 9, 3, 0))
    start, end = week_bounds(utc_now, TZ)
    assert start.date() == date(2024, 9, 2)
    assert end.date() == date(2024, 9, 8)


def test_period_bounds_month_and_all():
    start, end = period_bounds("month", NOW, TZ)
    assert start.date() == date(2024, 9, 1)
    assert end.date() == date(2024, 9, 30)

    start, end = period_bounds("all", NOW, TZ)
    assert start.date() == date(2023, 9, 5)
    assert end.date() == date(2024, 9, 4)


def test_period_bounds_unknown_period():
    with pytest.raises(ValueError):
        period_bounds("year", NOW, TZ)


def test_filter_entries_by_author_and_window():
    start, end = week_bounds(NOW, TZ)
    mine = filter_entries(_entries(), ME, start, end)
    assert [e.issue_key for e in mine] == ["OBS-1", "OBS-2", "OBS-1"]
    anyone = filter_entries(_entries(), None, start, end)
    assert len(anyone) == 4


def test_bucket_daily_half_goal():
    entries = [_entry("OBS-1", datetime(2024, 9, 3, 9, 0), 4 * 3600)]
    days = bucket_daily(entries, date(2024, 9, 2))
    assert len(days) == 7
    tuesday = days[1]
    assert tuesday.day_name == "Tuesday"
    assert tuesday.total_hours == 4.0
    assert tuesday.progress == 50
    assert days[0].progress == 0
    assert days[6].day_name == "Sunday"


def test_bucket_daily_orders_entries_by_start():
    entries = [
        _entry("OBS-2", datetime(2024, 9, 2, 14, 0), 600),
        _entry("OBS-1", datetime(2024, 9, 2, 9, 0), 600),
    ]
    monday = bucket_daily(entries, date(2024, 9, 2))[0]
    assert [e.issue_key for e in monday.worklogs] == ["OBS-1", "OBS-2"]


def test_summarize_by_issue_drops_empty_totals():
    entries = _entries()[:3] + [_entry("OBS-9", datetime(2024, 9, 3, 9, 0), 0)]
    issues = summarize_by_issue(entries)
    assert [i.issue_key for i in issues] == ["OBS-1", "OBS-2"]
    assert issues[0].total_seconds == 7 * 3600
    assert len(issues[0].worklogs) == 2


def test_build_timesheet():
    sheet = build_timesheet(_entries(), ME, NOW, TZ)
    assert sheet.week_start == date(2024, 9, 2)
    assert sheet.total_seconds == 11 * 3600
    assert sheet.weekly_goal_hours == 40
    assert sheet.weekly_progress == 28
    monday = sheet.days[0]
    assert monday.total_seconds == 8 * 3600
    assert monday.progress == 100

    payload = sheet.to_dict()
    assert payload["weekStart"] == "2024-09-02"
    assert len(payload["dailyData"]) == 7
    assert payload["dailyData"][0]["dayName"] == "Monday"
    assert payload["dailyData"][0]["worklogs"][0]["issueKey"] == "OBS-1"


def test_build_report_periods():
    week = build_report(_entries(), ME, "week", NOW, TZ)
    assert week.total_seconds == 11 * 3600
    assert [i.issue_key for i in week.issues] == ["OBS-1", "OBS-2"]

    month = build_report(_entries(), ME, "month", NOW, TZ)
    assert month.total_seconds == 11 * 3600 + 1800

    everything = build_report(_entries(), ME, "all", NOW, TZ)
    assert everything.total_seconds == 13 * 3600 + 1800
    payload = everything.to_dict()
    assert payload["period"] == "all"
    assert payload["totalHours"] == 13.5
    assert {i["issueKey"] for i in payload["worklogsByIssue"]} == {"OBS-1", "OBS-2", "OBS-4", "OBS-5"}


def test_bucket_totals_match_bucket_entries():
    entries = _entries()[:3] + [_entry("OBS-2", datetime(2024, 9, 4, 17, 0), 1800)]
    for day in bucket_daily(entries, date(2024, 9, 2)):
        assert day.total_seconds == sum(e.time_spent_seconds for e in day.worklogs)
    assert bucket_daily(entries, date(2024, 9, 2))[2].total_seconds == 3 * 3600 + 1800

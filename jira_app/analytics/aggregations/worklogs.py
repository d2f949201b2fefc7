"""Worklog aggregation: period windows, daily buckets, and per-issue totals.

All functions are pure; the service layer fetches raw worklogs, maps them
into :class:`WorklogEntry` objects (timestamps already converted to the
dashboard timezone) and hands them over here.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

import pytz

from jira_app.analytics.metrics.progress import progress_percent
from jira_app.core.config import (
    ALL_PERIOD_DAYS,
    DAILY_GOAL_HOURS,
    DAY_NAMES,
    TIMEZONE,
    WEEKLY_GOAL_HOURS,
    WORKLOG_PERIODS,
)
from jira_app.core.duration import seconds_to_hours
from jira_app.core.models import (
    DailyBucket,
    IssueWorklogSummary,
    WeeklyTimesheet,
    WorklogEntry,
    WorklogReport,
)


def resolve_tz(tz=None) -> pytz.BaseTzInfo:
    if tz is None:
        return pytz.timezone(TIMEZONE)
    if isinstance(tz, str):
        return pytz.timezone(tz)
    return tz


def local_now(now: datetime | None = None, tz=None) -> datetime:
    """``now`` expressed in ``tz`` (naive values are taken as already local)."""
    zone = resolve_tz(tz)
    if now is None:
        return datetime.now(zone)
    if now.tzinfo is None:
        return zone.localize(now)
    return now.astimezone(zone)


def start_of_day(day: date, tz) -> datetime:
    return resolve_tz(tz).localize(datetime.combine(day, time.min))


def end_of_day(day: date, tz) -> datetime:
    return resolve_tz(tz).localize(datetime.combine(day, time.max))


def week_bounds(now: datetime | None = None, tz=None) -> tuple[datetime, datetime]:
    """Monday 00:00 through Sunday 23:59:59.999999 of the week containing ``now``."""
    zone = resolve_tz(tz)
    current = local_now(now, zone)
    monday = current.date() - timedelta(days=current.weekday())
    return start_of_day(monday, zone), end_of_day(monday + timedelta(days=6), zone)


def period_bounds(period: str, now: datetime | None = None, tz=None) -> tuple[datetime, datetime]:
    """Window for a report period.

    - ``week``: the current Monday-Sunday week
    - ``month``: the current calendar month
    - ``all``: the trailing 365 days up to the end of today
    """
    zone = resolve_tz(tz)
    current = local_now(now, zone)
    if period == "week":
        return week_bounds(current, zone)
    if period == "month":
        first = current.date().replace(day=1)
        last_day = calendar.monthrange(first.year, first.month)[1]
        return start_of_day(first, zone), end_of_day(first.replace(day=last_day), zone)
    if period == "all":
        return current - timedelta(days=ALL_PERIOD_DAYS), end_of_day(current.date(), zone)
    raise ValueError(f"Unknown period {period!r}; expected one of {', '.join(WORKLOG_PERIODS)}")


def filter_entries(
    entries: Iterable[WorklogEntry],
    account_id: str | None,
    start: datetime,
    end: datetime,
) -> list[WorklogEntry]:
    """Entries authored by ``account_id`` (any author when None) within ``[start, end]``."""
    out: list[WorklogEntry] = []
    for entry in entries:
        if account_id is not None and entry.author_account_id != account_id:
            continue
        if start <= entry.started <= end:
            out.append(entry)
    return out


def bucket_daily(
    entries: Iterable[WorklogEntry],
    week_start: date,
    *,
    goal_hours: int = DAILY_GOAL_HOURS,
) -> list[DailyBucket]:
    """Seven buckets (Monday..Sunday) keyed by the entries' local calendar date.

    Entries falling outside the week are ignored.
    """
    days = [week_start + timedelta(days=i) for i in range(7)]
    grouped: dict[date, list[WorklogEntry]] = {d: [] for d in days}
    for entry in entries:
        day = entry.started.date()
        if day in grouped:
            grouped[day].append(entry)

    buckets: list[DailyBucket] = []
    for day in days:
        seconds = sum(e.time_spent_seconds for e in grouped[day])
        buckets.append(
            DailyBucket(
                date=day,
                day_name=DAY_NAMES[day.weekday()],
                total_seconds=seconds,
                total_hours=seconds_to_hours(seconds),
                goal_hours=goal_hours,
                progress=progress_percent(seconds, goal_hours),
                worklogs=sorted(grouped[day], key=lambda e: e.started),
            )
        )
    return buckets


def summarize_by_issue(entries: Iterable[WorklogEntry]) -> list[IssueWorklogSummary]:
    """Per-issue totals in first-seen order; issues without logged time are dropped."""
    by_issue: dict[str, IssueWorklogSummary] = {}
    for entry in entries:
        summary = by_issue.get(entry.issue_key)
        if summary is None:
            summary = IssueWorklogSummary(issue_key=entry.issue_key, summary=entry.summary, total_seconds=0)
            by_issue[entry.issue_key] = summary
        summary.total_seconds += entry.time_spent_seconds
        summary.worklogs.append(entry)
    return [s for s in by_issue.values() if s.total_seconds > 0]


def build_timesheet(
    entries: Iterable[WorklogEntry],
    account_id: str | None,
    now: datetime | None = None,
    tz=None,
) -> WeeklyTimesheet:
    zone = resolve_tz(tz)
    start, end = week_bounds(now, zone)
    mine = filter_entries(entries, account_id, start, end)
    days = bucket_daily(mine, start.date())
    total = sum(d.total_seconds for d in days)
    return WeeklyTimesheet(
        week_start=start.date(),
        week_end=end.date(),
        days=days,
        total_seconds=total,
        total_hours=seconds_to_hours(total),
        weekly_goal_hours=WEEKLY_GOAL_HOURS,
        weekly_progress=progress_percent(total, WEEKLY_GOAL_HOURS),
    )


def build_report(
    entries: Iterable[WorklogEntry],
    account_id: str | None,
    period: str,
    now: datetime | None = None,
    tz=None,
) -> WorklogReport:
    zone = resolve_tz(tz)
    start, end = period_bounds(period, now, zone)
    issues = summarize_by_issue(filter_entries(entries, account_id, start, end))
    total = sum(i.total_seconds for i in issues)
    return WorklogReport(
        period=period,
        start=start,
        end=end,
        total_seconds=total,
        total_hours=seconds_to_hours(total),
        issues=issues,
    )

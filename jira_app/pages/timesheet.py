"""Weekly Timesheet page - hours logged per day of the current week against the goals."""

from __future__ import annotations

import streamlit as st

from jira_app.analytics.aggregations.worklogs import local_now
from jira_app.analytics.metrics.progress import deficit_seconds
from jira_app.app import register_page
from jira_app.core.duration import format_duration
from jira_app.core.jira_client import JiraRequestError
from jira_app.core.models import DailyBucket, WeeklyTimesheet
from jira_app.core.service import IssueService
from jira_app.visual.charts import daily_hours_chart
from jira_app.visual.column_metadata import apply_column_metadata
from jira_app.visual.progress import ProgressReporter, goal_bar
from jira_app.visual.tables import prepare_ticket_table, worklog_entries_frame

PAGE_KEY = "timesheet"
CARDS_PER_ROW = 4


def _short_date(day) -> str:
    return f"{day.day}/{day.month}"


def _render_day(service: IssueService, day: DailyBucket, today) -> None:
    is_today = day.date == today
    past = day.date < today
    with st.container(border=True):
        title = f"**{day.day_name}** {_short_date(day.date)}"
        if is_today:
            title += "  `TODAY`"
        st.markdown(title)
        st.markdown(f"### {day.total_hours}h / {day.goal_hours}h")
        goal_bar("Progress", day.progress)
        if past and day.progress < 100:
            st.caption(f"Missing {format_duration(deficit_seconds(day.total_seconds, day.goal_hours))}")
        if day.worklogs:
            noun = "entry" if len(day.worklogs) == 1 else "entries"
            with st.expander(f"{len(day.worklogs)} {noun}"):
                prepared, cols, cfg = prepare_ticket_table(
                    worklog_entries_frame(day.worklogs), service.server, set_name="worklog"
                )
                st.dataframe(
                    prepared[cols],
                    hide_index=True,
                    column_config=apply_column_metadata(cols, cfg),
                )


def render_timesheet(service: IssueService, sheet: WeeklyTimesheet) -> None:
    st.subheader(f"Week: {_short_date(sheet.week_start)} - {_short_date(sheet.week_end)}")
    st.metric("Total", f"{sheet.total_hours}h / {sheet.weekly_goal_hours}h")
    goal_bar("Weekly goal", sheet.weekly_progress)

    chart = daily_hours_chart(sheet.days)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)

    today = local_now(tz=service.tz).date()
    for start in range(0, len(sheet.days), CARDS_PER_ROW):
        row = sheet.days[start : start + CARDS_PER_ROW]
        for slot, day in zip(st.columns(CARDS_PER_ROW), row, strict=False):
            with slot:
                _render_day(service, day, today)


@register_page("Weekly Timesheet")
def timesheet_page():
    st.title("Weekly Timesheet")
    st.caption("Hours you logged this week (Monday-Sunday) against 8h/day and 40h/week.")
    service: IssueService | None = st.session_state.get("issue_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    state_key = f"{PAGE_KEY}_data"
    if st.button("↻ Refresh") or state_key not in st.session_state:
        reporter = ProgressReporter("Loading this week's worklogs")
        try:
            st.session_state[state_key] = service.weekly_timesheet(progress=reporter.callback)
            reporter.finish()
        except JiraRequestError as exc:
            st.session_state.pop(state_key, None)
            reporter.error(f"Failed to fetch daily worklogs: {exc.user_message}")

    sheet: WeeklyTimesheet | None = st.session_state.get(state_key)
    if sheet is None:
        st.info("No data available.")
        return
    render_timesheet(service, sheet)

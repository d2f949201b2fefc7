"""Worklog Summary page - time logged per issue for the week, the month, or the last year."""

from __future__ import annotations

import streamlit as st

from jira_app.app import register_page
from jira_app.core.duration import format_duration
from jira_app.core.jira_client import JiraRequestError
from jira_app.core.models import WorklogReport
from jira_app.core.service import IssueService
from jira_app.visual.charts import issue_hours_chart
from jira_app.visual.column_metadata import apply_column_metadata
from jira_app.visual.progress import ProgressReporter
from jira_app.visual.tables import issue_totals_frame, prepare_ticket_table, worklog_entries_frame

PAGE_KEY = "worklog_summary"

PERIOD_LABELS = {
    "week": "This week (Mon-Sun)",
    "month": "This month",
    "all": "Last year",
}


def render_report(service: IssueService, report: WorklogReport) -> None:
    c1, c2 = st.columns(2)
    c1.metric(PERIOD_LABELS.get(report.period, report.period), f"{report.total_hours:.2f} hours")
    c2.metric("Logged", format_duration(report.total_seconds))
    if not report.issues:
        st.info("No time logged in this period.")
        return

    chart = issue_hours_chart(report.issues)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)

    prepared, cols, cfg = prepare_ticket_table(issue_totals_frame(report.issues), service.server, set_name="issue_totals")
    st.dataframe(prepared[cols], hide_index=True, width="stretch", column_config=apply_column_metadata(cols, cfg))

    with st.expander("Show entries"):
        for item in report.issues:
            st.markdown(f"**{item.issue_key}** {item.summary or ''} · {format_duration(item.total_seconds)}")
            entries = worklog_entries_frame(item.worklogs)[["started", "time_spent"]]
            st.dataframe(entries, hide_index=True, column_config=apply_column_metadata(entries.columns))


@register_page("Worklog Summary")
def worklog_summary_page():
    st.title("Logged Time")
    service: IssueService | None = st.session_state.get("issue_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    period = st.radio(
        "Period",
        list(PERIOD_LABELS),
        format_func=lambda p: {"week": "Week", "month": "Month", "all": "All"}[p],
        horizontal=True,
    )
    cache: dict[str, WorklogReport] = st.session_state.setdefault(f"{PAGE_KEY}_reports", {})
    if st.button("↻ Refresh"):
        cache.pop(period, None)
    if period not in cache:
        reporter = ProgressReporter(f"Loading worklogs: {PERIOD_LABELS[period].lower()}")
        try:
            cache[period] = service.worklog_report(period, progress=reporter.callback)
            reporter.finish()
        except JiraRequestError as exc:
            reporter.error(f"Failed to fetch worklogs: {exc.user_message}")
            return
    render_report(service, cache[period])

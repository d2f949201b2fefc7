"""Chart builders (Altair) for logged time."""

from __future__ import annotations

from collections.abc import Sequence

import altair as alt
import pandas as pd

from jira_app.analytics.metrics.progress import DANGER, SUCCESS, WARNING, progress_level
from jira_app.core.models import DailyBucket, IssueWorklogSummary

LEVEL_COLORS = {
    SUCCESS: "#2ca02c",
    WARNING: "#ff7f0e",
    DANGER: "#d62728",
}


def daily_hours_chart(days: Sequence[DailyBucket]):
    """Bars of hours per day, colored by goal progress, with the daily goal as a rule."""
    if not days:
        return None
    chart_df = pd.DataFrame(
        {
            "day": [f"{d.day_name[:3]} {d.date.day}/{d.date.month}" for d in days],
            "hours": [d.total_hours for d in days],
            "progress": [d.progress for d in days],
            "level": [progress_level(d.progress) for d in days],
            "entries": [len(d.worklogs) for d in days],
        }
    )
    order = list(chart_df["day"])
    bars = (
        alt.Chart(chart_df)
        .mark_bar()
        .encode(
            x=alt.X("day:N", title="Day", sort=order),
            y=alt.Y("hours:Q", title="Hours Logged"),
            color=alt.Color(
                "level:N",
                scale=alt.Scale(domain=list(LEVEL_COLORS), range=list(LEVEL_COLORS.values())),
                legend=None,
            ),
            tooltip=[
                alt.Tooltip("day:N", title="Day"),
                alt.Tooltip("hours:Q", title="Hours", format=".2f"),
                alt.Tooltip("progress:Q", title="Progress %"),
                alt.Tooltip("entries:Q", title="Entries"),
            ],
        )
    )
    goal = alt.Chart(pd.DataFrame({"goal": [days[0].goal_hours]})).mark_rule(color="#555", strokeDash=[4, 4]).encode(
        y="goal:Q"
    )
    return (bars + goal).properties(height=260)


def issue_hours_chart(issues: Sequence[IssueWorklogSummary], top_n: int = 15):
    """Horizontal bars of hours per issue, largest first."""
    if not issues:
        return None
    chart_df = pd.DataFrame(
        {
            "key": [i.issue_key for i in issues],
            "summary": [i.summary or "" for i in issues],
            "hours": [round(i.total_seconds / 3600, 2) for i in issues],
        }
    )
    chart_df = chart_df.sort_values("hours", ascending=False).head(top_n)
    return (
        alt.Chart(chart_df)
        .mark_bar(color="#1f77b4")
        .encode(
            x=alt.X("hours:Q", title="Hours"),
            y=alt.Y("key:N", title="Issue", sort="-x"),
            tooltip=[
                alt.Tooltip("key:N", title="Issue"),
                alt.Tooltip("summary:N", title="Summary"),
                alt.Tooltip("hours:Q", title="Hours", format=".2f"),
            ],
        )
        .properties(height=max(120, 24 * len(chart_df)))
    )

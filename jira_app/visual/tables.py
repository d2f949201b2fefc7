"""Reusable table builders for Streamlit rendering."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd
import streamlit as st

from jira_app.core.column_config import get_columns
from jira_app.core.duration import format_duration, seconds_to_hours
from jira_app.core.models import IssueWorklogSummary, WorklogEntry


def add_ticket_link(df: pd.DataFrame, server: str, key_col: str = "key", label: str = "Ticket"):
    if df.empty or key_col not in df.columns:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/browse/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="medium",
        )
    }
    return out, cfg


def prepare_ticket_table(
    df: pd.DataFrame,
    server: str,
    *,
    set_name: str = "issue_list",
) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    """Linked table plus the display columns of ``set_name`` present in it."""
    if df.empty:
        return df, [], {}

    table, cfg = add_ticket_link(df, server)
    canonical = get_columns(set_name) or []
    display_cols: list[str] = [col for col in canonical if col in table.columns]

    if "Ticket" in table.columns and "Ticket" not in display_cols:
        display_cols.insert(0, "Ticket")

    if not display_cols:
        display_cols = [col for col in table.columns if col != "key"]

    return table, display_cols, cfg


def worklog_entries_frame(entries: Iterable[WorklogEntry]) -> pd.DataFrame:
    rows = [
        {
            "key": e.issue_key,
            "summary": e.summary,
            "started": e.started.strftime("%d/%m/%Y %H:%M"),
            "time_spent": format_duration(e.time_spent_seconds),
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=["key", "summary", "started", "time_spent"])


def issue_totals_frame(issues: Iterable[IssueWorklogSummary]) -> pd.DataFrame:
    rows = [
        {
            "key": i.issue_key,
            "summary": i.summary,
            "entries": len(i.worklogs),
            "time_spent": format_duration(i.total_seconds),
            "hours": seconds_to_hours(i.total_seconds),
        }
        for i in issues
    ]
    return pd.DataFrame(rows, columns=["key", "summary", "entries", "time_spent", "hours"])

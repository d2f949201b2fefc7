"""Human labels, hover help and number formats for dashboard table columns."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import streamlit as st

# raw column -> (label, help, number format or None for text)
COLUMN_METADATA: dict[str, tuple[str, str, str | None]] = {
    "summary": ("Summary", "Ticket title.", None),
    "status": ("Status", "Workflow status the ticket is in.", None),
    "priority": ("Priority", "Ticket priority.", None),
    "assignee": ("Assignee", "Person the ticket is assigned to.", None),
    "reporter": ("Reporter", "Person who opened the ticket.", None),
    "issuetype": ("Type", "Issue type (Task, Bug, Subtask, ...).", None),
    "labels": ("Labels", "Labels on the ticket, alphabetical.", None),
    "created": ("Created", "When the ticket was opened.", None),
    "updated": ("Updated", "Last change on the ticket.", None),
    "started": ("Started", "Start of the logged work, local time.", None),
    "time_spent": ("Time Spent", "Logged time as hours and minutes.", None),
    "entries": ("Entries", "Worklog entries in the period.", "%d"),
    "hours": ("Hours", "Logged time in decimal hours.", "%.2f"),
}


def _column(label: str, help_text: str, number_format: str | None):
    if number_format:
        return st.column_config.NumberColumn(label, help=help_text, format=number_format)
    return st.column_config.Column(label, help=help_text)


def apply_column_metadata(
    columns: Iterable[str],
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """``column_config`` for ``st.dataframe``; entries already in ``existing`` win."""
    config: dict[str, Any] = dict(existing or {})
    for col in columns:
        if col not in config and col in COLUMN_METADATA:
            config[col] = _column(*COLUMN_METADATA[col])
    return config

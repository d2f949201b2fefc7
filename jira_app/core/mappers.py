"""Mapping raw Jira JSON into ProjectModel, IssueModel, and WorklogEntry instances."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

import pandas as pd
import pytz

from .models import IssueModel, ProjectModel, WorklogEntry


def parse_dt(val, tz=None) -> datetime | None:
    """Parse a Jira timestamp into an aware datetime (UTC unless ``tz`` given)."""
    if not val:
        return None
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    if tz is not None:
        ts = ts.tz_convert(tz)
    return ts.to_pydatetime()


def _name(node: Any, attr: str = "name") -> str | None:
    if isinstance(node, dict):
        value = node.get(attr)
        return str(value) if value is not None else None
    return None


def map_project(raw: dict[str, Any]) -> ProjectModel:
    return ProjectModel(
        id=str(raw.get("id") or ""),
        key=str(raw.get("key") or ""),
        name=str(raw.get("name") or raw.get("key") or ""),
    )


def map_issue(raw: dict[str, Any]) -> IssueModel:
    fields = raw.get("fields") or {}
    status = fields.get("status") or {}
    category = (status.get("statusCategory") or {}).get("key") or "new"
    assignee = fields.get("assignee") or {}
    avatars = assignee.get("avatarUrls") or {}
    priority = fields.get("priority") or {}
    issuetype = fields.get("issuetype") or {}
    project = fields.get("project") or {}
    return IssueModel(
        id=str(raw["id"]) if raw.get("id") is not None else None,
        key=raw.get("key"),
        summary=fields.get("summary"),
        status=_name(status),
        status_category=category,
        priority=_name(priority),
        priority_icon=_name(priority, "iconUrl"),
        assignee=_name(assignee, "displayName"),
        assignee_account_id=_name(assignee, "accountId"),
        assignee_avatar=avatars.get("24x24"),
        reporter=_name(fields.get("reporter"), "displayName"),
        created=parse_dt(fields.get("created")),
        updated=parse_dt(fields.get("updated")),
        issuetype=_name(issuetype),
        issuetype_icon=_name(issuetype, "iconUrl"),
        project_key=_name(project, "key"),
        project_name=_name(project),
        labels=list(fields.get("labels", []) or []),
    )


def map_worklog(
    raw: dict[str, Any],
    issue_key: str,
    summary: str | None,
    tz=pytz.UTC,
) -> WorklogEntry | None:
    """Map one raw worklog; returns None when the start timestamp is unusable."""
    started = parse_dt(raw.get("started"), tz)
    if started is None:
        return None
    author = raw.get("author") or {}
    return WorklogEntry(
        id=str(raw["id"]) if raw.get("id") is not None else None,
        issue_key=issue_key,
        summary=summary,
        time_spent_seconds=int(raw.get("timeSpentSeconds") or 0),
        started=started,
        author_account_id=author.get("accountId"),
        comment=raw.get("comment"),
    )


def _format_labels(val) -> str:
    if not val:
        return ""
    unique = {v for v in val if v}
    return ", ".join(sorted(unique, key=lambda s: s.lower()))


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    rows = []
    for i in issues:
        rows.append(
            {
                "key": i.key,
                "summary": i.summary,
                "status": i.status,
                "status_category": i.status_category,
                "priority": i.priority or "None",
                "assignee": i.assignee or "Unassigned",
                "reporter": i.reporter or "Unknown",
                "issuetype": i.issuetype,
                "project": i.project_key,
                "labels": _format_labels(i.labels),
                "created": i.created,
                "updated": i.updated,
            }
        )
    return pd.DataFrame(rows)


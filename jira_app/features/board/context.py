"""Pure helpers to build Kanban board context for testing (no Streamlit)."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from jira_app.core.mappers import map_issue, map_project
from jira_app.core.models import BoardColumn, IssueModel, ProjectModel
from jira_app.core.status import category_color, category_rank

MAX_CARD_LABELS = 2
_ORDER_BY_RE = re.compile(r"\s*ORDER BY.*$", re.IGNORECASE | re.DOTALL)


@dataclass(slots=True)
class BoardContext:
    """Context data for the Kanban Board page."""

    jql: str
    columns: list[BoardColumn] = field(default_factory=list)
    total: int = 0


def build_columns(issues: Iterable[IssueModel], theme: str = "light") -> list[BoardColumn]:
    """One column per status name, ordered To Do -> In Progress -> Done.

    Columns appear in first-seen order within a category. A column takes the
    category of the first issue seen with that status.
    """
    by_status: dict[str, BoardColumn] = {}
    for issue in issues:
        name = issue.status or "Unknown"
        column = by_status.get(name)
        if column is None:
            column = BoardColumn(
                name=name,
                category=issue.status_category,
                color=category_color(issue.status_category, theme),
            )
            by_status[name] = column
        column.issues.append(issue)
    return sorted(by_status.values(), key=lambda c: category_rank(c.category))


def build_board_context(raw_search: dict[str, Any] | None, jql: str, theme: str = "light") -> BoardContext:
    raw_issues = (raw_search or {}).get("issues") or []
    issues = [map_issue(r) for r in raw_issues]
    return BoardContext(jql=jql, columns=build_columns(issues, theme), total=len(issues))


def card_labels(issue: IssueModel) -> list[str]:
    return list(issue.labels[:MAX_CARD_LABELS])


def strip_order_by(jql: str) -> str:
    return _ORDER_BY_RE.sub("", jql or "").strip()


def scoped_jql(jql: str, project_key: str | None) -> str:
    """Restrict a query to one project, keeping the user's clauses."""
    if not project_key:
        return jql
    clauses = strip_order_by(jql)
    if not clauses:
        return f'project = "{project_key}" ORDER BY updated DESC'
    return f'project = "{project_key}" AND ({clauses}) ORDER BY updated DESC'


def sort_projects(
    projects: Iterable[ProjectModel | dict[str, Any]],
    starred: Sequence[str],
    search: str = "",
) -> list[ProjectModel]:
    """Filter by name/key substring (case-insensitive); starred projects first."""
    needle = (search or "").strip().lower()
    models = [p if isinstance(p, ProjectModel) else map_project(p) for p in projects]
    filtered = [p for p in models if needle in p.name.lower() or needle in p.key.lower()]
    starred_set = set(starred)
    return [p for p in filtered if p.key in starred_set] + [p for p in filtered if p.key not in starred_set]

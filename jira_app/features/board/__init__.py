"""Kanban Board feature module: status columns, project selection, JQL scoping."""

from jira_app.features.board.context import (
    BoardContext,
    build_board_context,
    build_columns,
    card_labels,
    scoped_jql,
    sort_projects,
    strip_order_by,
)

__all__ = [
    "BoardContext",
    "build_board_context",
    "build_columns",
    "card_labels",
    "scoped_jql",
    "sort_projects",
    "strip_order_by",
]

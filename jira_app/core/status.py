"""Status category ordering and board colors.

Jira groups every workflow status into one of three categories, exposed as
``fields.status.statusCategory.key``:

- ``new``: not started (To Do, Open, Backlog, ...)
- ``indeterminate``: in flight (In Progress, Review, ...)
- ``done``: finished (Done, Closed, ...)

The board orders its columns by these categories rather than by status name,
since status names are configurable per project.
"""

from __future__ import annotations

from collections.abc import Sequence

DEFAULT_CATEGORY = "new"
CATEGORY_ORDER: Sequence[str] = ("new", "indeterminate", "done")

STATUS_COLORS: dict[str, dict[str, str]] = {
    "light": {
        "new": "#dfe1e6",
        "indeterminate": "#deebff",
        "done": "#e3fcef",
    },
    "dark": {
        "new": "#3b4252",
        "indeterminate": "#1d3557",
        "done": "#1b4332",
    },
}

THEMES: Sequence[str] = ("light", "dark")


def normalize_category(value: str | None) -> str:
    """Lowercase category key, falling back to ``new`` for missing values."""
    if not value:
        return DEFAULT_CATEGORY
    text = str(value).strip().lower()
    return text or DEFAULT_CATEGORY


def category_rank(value: str | None) -> int:
    """Sort rank for a category; unknown categories sort after ``done``."""
    category = normalize_category(value)
    try:
        return CATEGORY_ORDER.index(category)
    except ValueError:
        return len(CATEGORY_ORDER)


def category_color(value: str | None, theme: str = "light") -> str:
    palette = STATUS_COLORS.get(theme, STATUS_COLORS["light"])
    return palette.get(normalize_category(value), palette[DEFAULT_CATEGORY])

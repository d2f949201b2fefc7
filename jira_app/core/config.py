"""Central configuration, constants, and shared field definitions."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_API_PREFIX = "/rest/api/3"
TIMEZONE = "America/Guatemala"
DEFAULT_PORT = 3001


class ConfigError(RuntimeError):
    """Raised when required connection settings are missing."""


@dataclass(slots=True)
class JiraSettings:
    server: str | None = None
    email: str | None = None
    token: str | None = None
    timezone: str = TIMEZONE
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @property
    def is_complete(self) -> bool:
        return bool(self.server and self.email and self.token)

    def require(self) -> JiraSettings:
        missing = [
            name
            for name, value in (
                ("JIRA_BASE_URL", self.server),
                ("JIRA_EMAIL", self.email),
                ("JIRA_API_TOKEN", self.token),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing Jira settings: {', '.join(missing)}")
        return self


def load_settings(environ: Mapping[str, str] | None = None) -> JiraSettings:
    """Build connection settings from environment variables.

    ``JIRA_SERVER`` and ``JIRA_TOKEN`` are accepted as aliases so the same
    variables work for the dashboard secrets and the API process.
    """
    env = os.environ if environ is None else environ
    port_raw = env.get("PORT") or ""
    try:
        port = int(port_raw) if port_raw else DEFAULT_PORT
    except ValueError as exc:
        raise ConfigError(f"PORT must be an integer, got {port_raw!r}") from exc
    server = env.get("JIRA_BASE_URL") or env.get("JIRA_SERVER")
    return JiraSettings(
        server=server.rstrip("/") if server else None,
        email=env.get("JIRA_EMAIL"),
        token=env.get("JIRA_API_TOKEN") or env.get("JIRA_TOKEN"),
        timezone=env.get("JIRA_TIMEZONE") or TIMEZONE,
        port=port,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )


# =============================================================================
# Jira Custom Field IDs
# =============================================================================
FIELD_IDS = {
    "story_points": "customfield_10016",
}

# Used when the parent project exposes no sub-task issue type
DEFAULT_SUBTASK_TYPE_ID = "10003"
SUBTASK_TYPE_NAME = "Subtask"

# =============================================================================
# Field lists requested from Jira
# =============================================================================
BOARD_FIELDS: Sequence[str] = (
    "summary",
    "status",
    "priority",
    "assignee",
    "reporter",
    "created",
    "updated",
    "issuetype",
    "project",
    "labels",
)

DETAIL_FIELDS: Sequence[str] = (
    "summary",
    "description",
    "status",
    "priority",
    "assignee",
    "reporter",
    "created",
    "updated",
    "issuetype",
    "project",
    "labels",
    "comment",
    "timetracking",
    "timeoriginalestimate",
    "timeestimate",
    "timespent",
    FIELD_IDS["story_points"],
    "subtasks",
)

WORKLOG_SEARCH_FIELDS: Sequence[str] = ("summary", "worklog")

# =============================================================================
# Search defaults
# =============================================================================
DEFAULT_SEARCH_JQL = "order by created DESC"
DEFAULT_SEARCH_LIMIT = 50
BOARD_SEARCH_LIMIT = 100
WORKLOG_SEARCH_LIMIT = 1000
DEFAULT_BOARD_JQL = "assignee = currentUser() ORDER BY updated DESC"

PRESET_FILTERS: Sequence[tuple[str, str]] = (
    ("My Issues", "assignee = currentUser() ORDER BY updated DESC"),
    ("My Open Issues", "assignee = currentUser() AND resolution = Unresolved ORDER BY updated DESC"),
    ("Recently Updated", "updated >= -7d ORDER BY updated DESC"),
    ("Created This Week", "created >= -7d ORDER BY created DESC"),
)

# =============================================================================
# Worklog goals
# =============================================================================
HOURS_PER_DAY = 8
DAYS_PER_WEEK = 5
DAILY_GOAL_HOURS = 8
WEEKLY_GOAL_HOURS = 40
ALL_PERIOD_DAYS = 365
WORKLOG_PERIODS: Sequence[str] = ("week", "month", "all")

DAY_NAMES: Sequence[str] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# =============================================================================
# Table columns
# =============================================================================
ISSUE_LIST_COLUMNS: Sequence[str] = (
    "Ticket",
    "summary",
    "status",
    "priority",
    "assignee",
    "issuetype",
    "labels",
    "updated",
    "created",
    "reporter",
)

WORKLOG_COLUMNS: Sequence[str] = (
    "Ticket",
    "summary",
    "started",
    "time_spent",
)

ISSUE_TOTAL_COLUMNS: Sequence[str] = (
    "Ticket",
    "summary",
    "entries",
    "time_spent",
    "hours",
)

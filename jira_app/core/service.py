"""IssueService: the operations behind every API route and dashboard page.

Each method forwards to Jira through :class:`JiraAPI`, shaping the request
(field lists, ADF bodies) and the response. Nothing is cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import Any

import pytz

from jira_app.analytics.aggregations.worklogs import (
    build_report,
    build_timesheet,
    local_now,
    period_bounds,
    week_bounds,
)

from .adf import daily_report_doc, paragraph_doc
from .config import (
    BOARD_FIELDS,
    DEFAULT_SEARCH_JQL,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_SUBTASK_TYPE_ID,
    DETAIL_FIELDS,
    FIELD_IDS,
    SUBTASK_TYPE_NAME,
    TIMEZONE,
    WORKLOG_SEARCH_FIELDS,
    WORKLOG_SEARCH_LIMIT,
)
from .jira_client import JiraAPI, JiraRequestError
from .mappers import map_issue, map_project, map_worklog
from .models import IssueModel, ProjectModel, WeeklyTimesheet, WorklogEntry, WorklogReport

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]


def worklog_jql(start_day: date) -> str:
    return f'worklogAuthor = currentUser() AND worklogDate >= "{start_day.isoformat()}" ORDER BY updated DESC'


def resolve_subtask_type(issue_types: Sequence[dict[str, Any]]) -> str:
    """Id of the project's sub-task issue type, or the default id when none matches."""
    for issue_type in issue_types or []:
        if issue_type.get("name") == SUBTASK_TYPE_NAME or issue_type.get("subtask") is True:
            return str(issue_type.get("id"))
    return DEFAULT_SUBTASK_TYPE_ID


class IssueService:
    def __init__(self, api: JiraAPI, timezone: str = TIMEZONE):
        self.api = api
        self._tz = pytz.timezone(timezone)

    @property
    def tz(self) -> pytz.BaseTzInfo:
        return self._tz

    @property
    def server(self) -> str:
        return getattr(self.api, "server", "")

    def browse_url(self, issue_key: str) -> str:
        return f"{self.server.rstrip('/')}/browse/{issue_key}"

    # ------------------ Connection ------------------
    def health(self) -> dict[str, Any]:
        me = self.api.myself()
        return {"status": "ok", "message": "Connected to Jira", "user": me.get("displayName")}

    # ------------------ Projects & Issues ------------------
    def list_projects(self) -> list[dict[str, Any]]:
        return self.api.projects()

    def project_models(self) -> list[ProjectModel]:
        return [map_project(p) for p in self.list_projects()]

    def list_statuses(self) -> list[dict[str, Any]]:
        return self.api.statuses()

    def search_issues(self, jql: str | None = None, max_results: int | None = None) -> dict[str, Any]:
        return self.api.search(
            jql or DEFAULT_SEARCH_JQL,
            fields=list(BOARD_FIELDS),
            max_results=max_results or DEFAULT_SEARCH_LIMIT,
        )

    def issue_models(self, raw_search: dict[str, Any]) -> list[IssueModel]:
        return [map_issue(r) for r in (raw_search or {}).get("issues") or []]

    def get_issue(self, issue_key: str) -> dict[str, Any]:
        return self.api.issue(issue_key, fields=list(DETAIL_FIELDS), expand=["renderedFields"])

    def update_issue(self, issue_key: str, payload: dict[str, Any]) -> dict[str, Any]:
        fields = payload.get("fields") if isinstance(payload, dict) else None
        changed = sorted(fields) if isinstance(fields, dict) else []
        data = self.api.update_issue(issue_key, payload)
        logger.info("Updated %s fields: %s", issue_key, changed)
        return {"success": True, "data": data}

    def set_story_points(self, issue_key: str, value: float | None) -> dict[str, Any]:
        return self.update_issue(issue_key, {"fields": {FIELD_IDS["story_points"]: value}})

    def set_original_estimate(self, issue_key: str, estimate: str) -> dict[str, Any]:
        text = (estimate or "").strip()
        if not text:
            raise ValueError("Original estimate is required")
        return self.update_issue(issue_key, {"fields": {"timetracking": {"originalEstimate": text}}})

    # ------------------ Workflow ------------------
    def get_transitions(self, issue_key: str) -> dict[str, Any]:
        return self.api.transitions(issue_key)

    def transition_issue(self, issue_key: str, transition_id: str) -> dict[str, Any]:
        if not transition_id:
            raise ValueError("transitionId is required")
        data = self.api.transition_issue(issue_key, str(transition_id))
        return {"success": True, "data": data}

    # ------------------ Comments & Worklogs ------------------
    def add_comment(self, issue_key: str, body: str) -> dict[str, Any]:
        text = (body or "").strip()
        if not text:
            raise ValueError("Comment body is required")
        data = self.api.add_comment(issue_key, paragraph_doc(text))
        return {"success": True, "data": data}

    def log_work(self, issue_key: str, seconds: int, comment: str | None = None) -> dict[str, Any]:
        if not seconds or int(seconds) <= 0:
            raise ValueError("timeSpentSeconds must be a positive number of seconds")
        payload: dict[str, Any] = {"timeSpentSeconds": int(seconds)}
        if comment:
            payload["comment"] = paragraph_doc(comment)
        data = self.api.add_worklog(issue_key, payload)
        logger.info("Logged %ss on %s", int(seconds), issue_key)
        return {"success": True, "data": data}

    # ------------------ Subtasks ------------------
    def list_subtasks(self, issue_key: str) -> list[dict[str, Any]]:
        raw = self.api.issue(issue_key, fields=["subtasks"])
        return (raw.get("fields") or {}).get("subtasks") or []

    def create_subtask(
        self,
        parent_key: str,
        summary: str,
        project_name: str | None = None,
        *,
        today: date | None = None,
    ) -> dict[str, Any]:
        """Create a subtask and seed it with the daily report comment.

        The issue type is looked up among the parent project's issue types;
        failing to post the template comment does not undo the creation.
        """
        title = (summary or "").strip()
        if not title:
            raise ValueError("Subtask summary is required")
        parent = self.api.issue(parent_key, fields=["project", "issuetype"])
        project = (parent.get("fields") or {}).get("project") or {}
        project_key = project.get("key")
        subtask_type_id = resolve_subtask_type(self.api.project_issue_types(project_key))
        created = self.api.create_issue(
            {
                "project": {"key": project_key},
                "parent": {"key": parent_key},
                "summary": title,
                "issuetype": {"id": subtask_type_id},
            }
        )
        subtask_key = (created or {}).get("key")
        report_day = today or local_now(tz=self._tz).date()
        try:
            self.api.add_comment(
                subtask_key,
                daily_report_doc(report_day, project_name or project.get("name") or project_key, title),
            )
        except JiraRequestError as exc:
            logger.warning("Failed to add report template to %s: %s", subtask_key, exc)
        logger.info("Created subtask %s under %s", subtask_key, parent_key)
        return {"success": True, "data": created}

    # ------------------ Worklog Reports ------------------
    def worklog_report(
        self,
        period: str = "week",
        *,
        now: datetime | None = None,
        progress: ProgressCallback | None = None,
    ) -> WorklogReport:
        start, _ = period_bounds(period, now, self._tz)
        account_id, entries = self._my_worklogs(start.date(), progress=progress)
        return build_report(entries, account_id, period, now, self._tz)

    def weekly_timesheet(
        self,
        *,
        now: datetime | None = None,
        progress: ProgressCallback | None = None,
    ) -> WeeklyTimesheet:
        start, _ = week_bounds(now, self._tz)
        account_id, entries = self._my_worklogs(start.date(), progress=progress)
        return build_timesheet(entries, account_id, now, self._tz)

    # ------------------ Internal Helpers ------------------
    def _my_worklogs(
        self,
        start_day: date,
        *,
        progress: ProgressCallback | None = None,
    ) -> tuple[str | None, list[WorklogEntry]]:
        """Current user's account id plus every worklog on issues they logged to since ``start_day``.

        Entries are not filtered here; author and window filtering happen in
        the aggregation step. An issue whose worklogs cannot be fetched is
        skipped with a warning.
        """
        account_id = self.api.myself().get("accountId")
        if progress:
            progress("Searching issues with logged work", None, None)
        found = self.api.search(
            worklog_jql(start_day),
            fields=list(WORKLOG_SEARCH_FIELDS),
            max_results=WORKLOG_SEARCH_LIMIT,
        )
        issues = found.get("issues") or []
        entries: list[WorklogEntry] = []
        for idx, issue in enumerate(issues, start=1):
            key = issue.get("key")
            summary = (issue.get("fields") or {}).get("summary")
            try:
                raw_worklogs = self.api.issue_worklogs(key)
            except JiraRequestError as exc:
                logger.warning("Failed to fetch worklogs for %s: %s", key, exc)
                continue
            finally:
                if progress:
                    progress("Loading worklogs", idx, len(issues))
            for raw in raw_worklogs:
                entry = map_worklog(raw, key, summary, self._tz)
                if entry is not None:
                    entries.append(entry)
        logger.debug("Collected %s worklog entries from %s issues", len(entries), len(issues))
        return account_id, entries

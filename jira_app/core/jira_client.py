"""Jira API client wrapper (REST v3 over the jira library's authenticated session)."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

import requests
from jira import JIRA, JIRAError

from .config import JIRA_API_PREFIX

logger = logging.getLogger(__name__)


class JiraRequestError(RuntimeError):
    """A call to the Jira REST API failed.

    ``details`` holds the decoded upstream error payload when Jira returned
    one (usually ``{"errorMessages": [...], "errors": {...}}``).
    """

    def __init__(self, message: str, *, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details

    @property
    def user_message(self) -> str:
        """Upstream error messages when present, otherwise the wrapper message."""
        if isinstance(self.details, dict):
            messages = [str(m) for m in self.details.get("errorMessages") or [] if m]
            errors = self.details.get("errors") or {}
            if isinstance(errors, dict):
                messages.extend(f"{field}: {msg}" for field, msg in errors.items())
            if messages:
                return ", ".join(messages)
        return str(self)


def _decode_details(response) -> Any:
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:500] or None


class JiraAPI:
    def __init__(self, server: str, email: str, token: str):
        self.server = server.rstrip("/")
        # Retries stay off: a failed upstream call surfaces to the caller as-is.
        self.client = JIRA(
            basic_auth=(email, token),
            options={"server": self.server, "rest_api_version": "3"},
            get_server_info=False,
            max_retries=0,
        )

    def _url(self, path: str) -> str:
        return f"{self.server}{JIRA_API_PREFIX}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        payload: Any = None,
    ) -> Any:
        """Issue a REST call and return the decoded JSON body (None when empty)."""
        session = getattr(self.client, "_session", None)
        if session is None:
            raise JiraRequestError("JIRA session unavailable")
        url = self._url(path)
        kwargs: dict[str, Any] = {}
        if params:
            kwargs["params"] = params
        if payload is not None:
            kwargs["data"] = json.dumps(payload)
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = session.request(method, url, **kwargs)
        except JIRAError as exc:
            raise JiraRequestError(
                f"{method} {path} failed {exc.status_code}: {(exc.text or '')[:200]}",
                status_code=exc.status_code,
                details=_decode_details(exc.response),
            ) from exc
        except requests.RequestException as exc:
            raise JiraRequestError(f"{method} {path} failed: {exc}") from exc
        if resp.status_code >= 400:
            raise JiraRequestError(
                f"{method} {path} failed {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
                details=_decode_details(resp),
            )
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise JiraRequestError(
                f"{method} {path} returned a non-JSON body: {resp.text[:200]}",
                status_code=resp.status_code,
                details=_decode_details(resp),
            ) from exc

    # ------------------ Read Endpoints ------------------
    def myself(self) -> dict[str, Any]:
        return self.request("GET", "/myself")

    def projects(self) -> list[dict[str, Any]]:
        return self.request("GET", "/project") or []

    def statuses(self) -> list[dict[str, Any]]:
        return self.request("GET", "/status") or []

    def project_issue_types(self, project_key: str) -> list[dict[str, Any]]:
        """Issue types (with their statuses) configured for a project."""
        return self.request("GET", f"/project/{project_key}/statuses") or []

    def search(
        self,
        jql: str,
        *,
        fields: Sequence[str] | None = None,
        max_results: int = 50,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"jql": jql, "maxResults": int(max_results)}
        if fields:
            params["fields"] = ",".join(fields)
        return self.request("GET", "/search/jql", params=params) or {"issues": []}

    def issue(
        self,
        issue_key: str,
        *,
        fields: Sequence[str] | None = None,
        expand: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if fields:
            params["fields"] = ",".join(fields)
        if expand:
            params["expand"] = ",".join(expand)
        return self.request("GET", f"/issue/{issue_key}", params=params)

    def transitions(self, issue_key: str) -> dict[str, Any]:
        return self.request("GET", f"/issue/{issue_key}/transitions") or {"transitions": []}

    def issue_worklogs(self, issue_key: str) -> list[dict[str, Any]]:
        data = self.request("GET", f"/issue/{issue_key}/worklog") or {}
        return data.get("worklogs") or []

    # ------------------ Write Endpoints ------------------
    def update_issue(self, issue_key: str, payload: dict[str, Any]) -> Any:
        return self.request("PUT", f"/issue/{issue_key}", payload=payload)

    def transition_issue(self, issue_key: str, transition_id: str) -> Any:
        return self.request(
            "POST",
            f"/issue/{issue_key}/transitions",
            payload={"transition": {"id": str(transition_id)}},
        )

    def add_comment(self, issue_key: str, body: dict[str, Any]) -> Any:
        return self.request("POST", f"/issue/{issue_key}/comment", payload={"body": body})

    def add_worklog(self, issue_key: str, payload: dict[str, Any]) -> Any:
        return self.request("POST", f"/issue/{issue_key}/worklog", payload=payload)

    def create_issue(self, fields: dict[str, Any]) -> dict[str, Any]:
        return self.request("POST", "/issue", payload={"fields": fields})

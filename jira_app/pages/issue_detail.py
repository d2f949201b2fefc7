"""Issue Detail page - fields, time tracking, subtasks, and comments of one ticket."""

from __future__ import annotations

import logging
from typing import Any

import streamlit as st

from jira_app.app import register_page
from jira_app.core.adf import render_text
from jira_app.core.config import FIELD_IDS
from jira_app.core.duration import format_time, parse_duration
from jira_app.core.jira_client import JiraRequestError
from jira_app.core.mappers import parse_dt
from jira_app.core.service import IssueService

logger = logging.getLogger(__name__)

PAGE_KEY = "issue_detail"


def _cache() -> dict[str, dict[str, Any]]:
    """Loaded issue details keyed by issue key."""
    return st.session_state.setdefault(f"{PAGE_KEY}_data", {})


def _load(service: IssueService, issue_key: str) -> dict[str, Any] | None:
    try:
        detail = service.get_issue(issue_key)
    except JiraRequestError as exc:
        _cache().pop(issue_key, None)
        st.error(f"Failed to fetch issue {issue_key}: {exc.user_message}")
        return None
    _cache()[issue_key] = detail
    return detail


def _run(action, success: str) -> bool:
    """Execute a mutation, reporting the outcome; True when it went through."""
    try:
        action()
    except ValueError as exc:
        st.warning(str(exc))
        return False
    except JiraRequestError as exc:
        st.error(exc.user_message)
        return False
    st.toast(success)
    return True


def _render_meta(fields: dict[str, Any]) -> None:
    status = fields.get("status") or {}
    priority = fields.get("priority") or {}
    assignee = fields.get("assignee") or {}
    c1, c2, c3 = st.columns(3)
    c1.metric("Status", status.get("name") or "-")
    c2.metric("Priority", priority.get("name") or "-")
    c3.metric("Assignee", assignee.get("displayName") or "Unassigned")


def _render_story_points(service: IssueService, key: str, fields: dict[str, Any]) -> bool:
    st.subheader("Story Points")
    current = fields.get(FIELD_IDS["story_points"])
    with st.form(f"{PAGE_KEY}_points"):
        raw = st.text_input("Story points", value="" if current is None else str(current), placeholder="e.g., 3")
        if st.form_submit_button("Save"):
            try:
                value = float(raw) if raw.strip() else None
            except ValueError:
                st.warning("Story points must be a number.")
                return False
            return _run(lambda: service.set_story_points(key, value), "Story points updated")
    return False


def _render_time_tracking(service: IssueService, key: str, fields: dict[str, Any]) -> bool:
    st.subheader("Time Tracking")
    tracking = fields.get("timetracking") or {}
    c1, c2, c3 = st.columns(3)
    c1.metric("Original Estimate", tracking.get("originalEstimate") or format_time(fields.get("timeoriginalestimate")))
    c2.metric("Time Spent", tracking.get("timeSpent") or format_time(fields.get("timespent")))
    c3.metric("Remaining", tracking.get("remainingEstimate") or format_time(fields.get("timeestimate")))

    changed = False
    left, right = st.columns(2)
    with left.form(f"{PAGE_KEY}_estimate"):
        estimate = st.text_input(
            "Original estimate",
            value=tracking.get("originalEstimate") or "",
            placeholder="e.g., 2h 30m",
        )
        if st.form_submit_button("Save estimate"):
            changed = _run(lambda: service.set_original_estimate(key, estimate), "Estimate updated")
    with right.form(f"{PAGE_KEY}_log_time", clear_on_submit=True):
        spent = st.text_input("Log time", placeholder="e.g., 1h 30m")
        note = st.text_input("Work description (optional)")
        if st.form_submit_button("Log"):
            seconds = parse_duration(spent)
            if not seconds:
                st.warning("Invalid time format. Use format like: 1h 30m")
            else:
                changed = _run(lambda: service.log_work(key, seconds, note.strip() or None), "Time logged")
    return changed


def _render_subtasks(service: IssueService, key: str, fields: dict[str, Any]) -> bool:
    subtasks = fields.get("subtasks") or []
    st.subheader(f"Subtasks ({len(subtasks)})")
    changed = False
    with st.form(f"{PAGE_KEY}_subtask", clear_on_submit=True):
        summary = st.text_input("New subtask", placeholder="Subtask name...")
        if st.form_submit_button("Create"):
            project_name = (fields.get("project") or {}).get("name")
            changed = _run(lambda: service.create_subtask(key, summary, project_name), "Subtask created")
    for sub in subtasks:
        sub_fields = sub.get("fields") or {}
        status = (sub_fields.get("status") or {}).get("name") or "-"
        st.markdown(f"[{sub.get('key')}]({service.browse_url(sub.get('key'))}) {sub_fields.get('summary') or ''} · `{status}`")
    return changed


def _render_comments(service: IssueService, key: str, fields: dict[str, Any]) -> bool:
    block = fields.get("comment") or {}
    comments = block.get("comments") or []
    st.subheader(f"Comments ({block.get('total') or 0})")
    changed = False
    with st.form(f"{PAGE_KEY}_comment", clear_on_submit=True):
        body = st.text_area("Add a comment...", height=100)
        if st.form_submit_button("Add Comment"):
            changed = _run(lambda: service.add_comment(key, body), "Comment added")
    for comment in comments:
        author = (comment.get("author") or {}).get("displayName") or "Unknown"
        created = parse_dt(comment.get("created"))
        when = created.strftime("%d/%m/%Y") if created else ""
        with st.container(border=True):
            st.caption(f"{author} · {when}")
            st.write(render_text(comment.get("body"), empty=""))
    return changed


@register_page("Issue Detail")
def issue_detail_page():
    service: IssueService | None = st.session_state.get("issue_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return
    issue_key = st.text_input("Issue key", value=st.session_state.get("selected_issue") or "").strip().upper()
    if not issue_key:
        st.info("Open an issue from the board or enter its key.")
        return
    st.session_state["selected_issue"] = issue_key
    detail = _cache().get(issue_key) or _load(service, issue_key)
    if not detail:
        return

    fields = detail.get("fields") or {}
    issuetype = (fields.get("issuetype") or {}).get("name") or ""
    st.title(f"{issuetype} {detail.get('key')}".strip())
    st.markdown(f"[Open in Jira]({service.browse_url(detail.get('key'))})")
    st.header(fields.get("summary") or "")
    _render_meta(fields)

    st.subheader("Description")
    st.write(render_text(fields.get("description")))

    changed = _render_story_points(service, issue_key, fields)
    changed = _render_time_tracking(service, issue_key, fields) or changed
    changed = _render_subtasks(service, issue_key, fields) or changed
    changed = _render_comments(service, issue_key, fields) or changed

    if changed:
        # Board contents may have changed too
        st.session_state.pop("board_search", None)
        _load(service, issue_key)
        st.rerun()

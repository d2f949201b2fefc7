"""Kanban Board page - JQL driven issue board with project filter and status moves."""

from __future__ import annotations

import logging

import streamlit as st

from jira_app.app import register_page
from jira_app.core.config import BOARD_SEARCH_LIMIT, DEFAULT_BOARD_JQL, PRESET_FILTERS
from jira_app.core.jira_client import JiraRequestError
from jira_app.core.mappers import issues_to_dataframe
from jira_app.core.models import IssueModel, ProjectModel
from jira_app.core.preferences import PreferenceStore
from jira_app.core.service import IssueService
from jira_app.features.board import build_board_context, card_labels, scoped_jql, sort_projects
from jira_app.visual.column_metadata import apply_column_metadata
from jira_app.visual.tables import prepare_ticket_table

logger = logging.getLogger(__name__)

PAGE_KEY = "board"
ALL_PROJECTS = ""


def _state(name: str, default=None):
    return st.session_state.setdefault(f"{PAGE_KEY}_{name}", default)


def _set_state(name: str, value) -> None:
    st.session_state[f"{PAGE_KEY}_{name}"] = value


def _load_projects(service: IssueService, *, force: bool = False) -> list[ProjectModel]:
    projects = _state("projects")
    if projects is None or force:
        try:
            projects = service.project_models()
        except JiraRequestError as exc:
            logger.error("Failed to fetch projects: %s", exc)
            projects = []
        _set_state("projects", projects)
    return projects


def fetch_issues(service: IssueService) -> None:
    jql = scoped_jql(_state("jql", DEFAULT_BOARD_JQL), _state("project", ALL_PROJECTS))
    _set_state("error", None)
    try:
        result = service.search_issues(jql, BOARD_SEARCH_LIMIT)
    except JiraRequestError as exc:
        _set_state("error", exc.user_message)
        result = {"issues": []}
    _set_state("search", result)
    _set_state("transitions", {})


def _render_project_selector(service: IssueService, prefs: PreferenceStore) -> None:
    projects = _load_projects(service)
    starred = prefs.starred_projects()
    left, mid, right = st.columns([2, 3, 1])
    search = left.text_input("Search projects", placeholder="Name or key")
    visible = sort_projects(projects, starred, search)
    options = [ALL_PROJECTS] + [p.key for p in visible]
    names = {p.key: p.name for p in projects}
    current = _state("project", ALL_PROJECTS)
    if current not in options:
        options.insert(1, current)

    def _label(key: str) -> str:
        if key == ALL_PROJECTS:
            return "All Projects"
        star = "★" if key in starred else "☆"
        return f"{star} {names.get(key, key)} ({key})"

    selected = mid.selectbox("Project", options, index=options.index(current), format_func=_label)
    if selected != current:
        _set_state("project", selected)
        fetch_issues(service)
    if selected != ALL_PROJECTS:
        is_starred = selected in starred
        right.write("")
        if right.button("Unstar" if is_starred else "Star", help="Starred projects are listed first"):
            prefs.toggle_star(selected)
            st.rerun()


def _render_filters(service: IssueService) -> None:
    st.caption("Quick Filters")
    cols = st.columns(len(PRESET_FILTERS))
    for col, (label, jql) in zip(cols, PRESET_FILTERS, strict=True):
        kind = "primary" if _state("jql", DEFAULT_BOARD_JQL) == jql else "secondary"
        if col.button(label, type=kind, key=f"{PAGE_KEY}_preset_{label}"):
            _set_state("jql", jql)
            fetch_issues(service)
            st.rerun()

    with st.form(f"{PAGE_KEY}_jql_form"):
        jql = st.text_input("JQL", value=_state("jql", DEFAULT_BOARD_JQL), placeholder="Enter JQL query...")
        if st.form_submit_button("Search", type="primary"):
            _set_state("jql", jql.strip() or DEFAULT_BOARD_JQL)
            fetch_issues(service)


def _render_status_control(service: IssueService, issue: IssueModel) -> None:
    if not st.toggle(f"→ {issue.status}", key=f"{PAGE_KEY}_move_{issue.key}"):
        return
    cache: dict = _state("transitions", {})
    if issue.key not in cache:
        try:
            cache[issue.key] = service.get_transitions(issue.key).get("transitions") or []
        except JiraRequestError as exc:
            logger.error("Failed to fetch transitions for %s: %s", issue.key, exc)
            cache[issue.key] = []
    transitions = cache[issue.key]
    if not transitions:
        st.caption("No transitions available.")
        return
    by_id = {str(t.get("id")): t.get("name") or str(t.get("id")) for t in transitions}
    choice = st.selectbox(
        "Move to...",
        list(by_id),
        format_func=by_id.get,
        key=f"{PAGE_KEY}_transition_{issue.key}",
    )
    if st.button("Move", key=f"{PAGE_KEY}_apply_{issue.key}"):
        try:
            service.transition_issue(issue.key, choice)
        except JiraRequestError as exc:
            st.error(exc.user_message)
            return
        fetch_issues(service)
        st.rerun()


def _render_card(service: IssueService, issue: IssueModel) -> None:
    with st.container(border=True):
        header = f"**{issue.key}**"
        if issue.issuetype:
            header += f" · {issue.issuetype}"
        if issue.priority:
            header += f" · {issue.priority}"
        st.markdown(header)
        st.write(issue.summary or "")
        labels = card_labels(issue)
        footer = " ".join(f"`{label}`" for label in labels)
        st.caption(f"{footer}  👤 {issue.assignee or 'Unassigned'}")
        if st.button("Open", key=f"{PAGE_KEY}_open_{issue.key}"):
            # drop any cached detail for this issue
            st.session_state.get("issue_detail_data", {}).pop(issue.key, None)
            st.session_state["selected_issue"] = issue.key
            st.session_state["nav_page"] = "Issue Detail"
            st.rerun()
        _render_status_control(service, issue)


def _render_board(service: IssueService, theme: str) -> None:
    ctx = build_board_context(_state("search"), _state("jql", DEFAULT_BOARD_JQL), theme)
    if ctx.total == 0:
        st.info("No issues found")
        return
    for column, slot in zip(ctx.columns, st.columns(len(ctx.columns)), strict=True):
        with slot:
            st.markdown(
                f"<div style='background:{column.color};padding:6px 10px;border-radius:4px'>"
                f"<b>{column.name}</b> <span style='float:right'>{len(column.issues)}</span></div>",
                unsafe_allow_html=True,
            )
            for issue in column.issues:
                _render_card(service, issue)


def _render_table(service: IssueService) -> None:
    df = issues_to_dataframe(service.issue_models(_state("search")))
    if df.empty:
        st.info("No issues found")
        return
    prepared, display_cols, cfg = prepare_ticket_table(df, service.server)
    st.dataframe(
        prepared[display_cols],
        hide_index=True,
        width="stretch",
        column_config=apply_column_metadata(display_cols, cfg),
    )


@register_page("Kanban Board")
def board_page():
    st.title("Jira Tickets")
    service: IssueService | None = st.session_state.get("issue_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return
    prefs = PreferenceStore()

    _render_project_selector(service, prefs)
    _render_filters(service)
    if _state("search") is None:
        fetch_issues(service)

    top_left, top_right = st.columns([4, 1])
    view = top_left.radio("View", ["Board", "Table"], horizontal=True, label_visibility="collapsed")
    if top_right.button("↻ Refresh"):
        _load_projects(service, force=True)
        fetch_issues(service)

    if _state("error"):
        st.error(_state("error"))

    st.markdown("---")
    if view == "Board":
        _render_board(service, prefs.theme())
    else:
        _render_table(service)

"""Application entry point: page registry, router, and theme toggle."""

from __future__ import annotations

import streamlit as st

from jira_app.core.preferences import PreferenceStore

PAGES = {}

PREFERRED_ORDER = [
    "Kanban Board",
    "Issue Detail",
    "Weekly Timesheet",
    "Worklog Summary",
    "Setup / Connection",
]


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def ordered_pages(labels) -> list[str]:
    ordered = [name for name in PREFERRED_ORDER if name in labels]
    trailing = sorted(name for name in labels if name not in PREFERRED_ORDER)
    return ordered + trailing


def _theme_toggle() -> None:
    prefs = PreferenceStore()
    theme = prefs.theme()
    label = "☾ Dark" if theme == "light" else "☀ Light"
    if st.sidebar.button(label, help=f"Switch to {'dark' if theme == 'light' else 'light'} board colors"):
        prefs.toggle_theme()
        st.rerun()


def main():
    st.sidebar.title("Jira Tickets")
    pages = ordered_pages(PAGES.keys())
    if not pages:
        st.write("No pages registered yet.")
        return
    _theme_toggle()
    if "Setup / Connection" in pages and "issue_service" not in st.session_state:
        default = pages.index("Setup / Connection")
    elif st.session_state.get("nav_page") in pages:
        default = pages.index(st.session_state["nav_page"])
    else:
        default = 0
    page = st.sidebar.selectbox("Page", pages, index=default)
    st.session_state["nav_page"] = page
    PAGES[page]()


if __name__ == "__main__":
    main()

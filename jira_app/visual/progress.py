"""Loading banner + progress bar for long worklog fetches, plus goal progress bars."""

from __future__ import annotations

import streamlit as st

from jira_app.analytics.metrics.progress import DANGER, SUCCESS, display_progress, progress_level

LEVEL_ICONS = {SUCCESS: "🟢", DANGER: "🔴"}


def fetch_fraction(current: int | None, total: int | None) -> float:
    if not total or total <= 0 or current is None:
        return 0.0
    return min(max(current / total, 0.0), 1.0)


class ProgressReporter:
    """Renders a status banner and progress bar; ``callback`` matches IssueService progress callbacks."""

    def __init__(self, title: str):
        self._placeholder = st.empty()
        self._container = self._placeholder.container()
        self._container.info(title)
        self._message = self._container.empty()
        self._bar = self._container.progress(0.0)
        self._done = False

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        if self._done:
            return
        self._message.write(message if not total else f"{message} ({current or 0}/{total})")
        self._bar.progress(fetch_fraction(current, total))

    def finish(self) -> None:
        """Remove the banner once data is on screen."""
        if not self._done:
            self._placeholder.empty()
            self._done = True

    def error(self, message: str) -> None:
        if not self._done:
            self._container.error(message)
            self._done = True


def goal_bar(label: str, percent: int) -> None:
    """Progress bar clamped to 100% with the real percentage in its caption."""
    icon = LEVEL_ICONS.get(progress_level(percent), "🟠")
    st.progress(display_progress(percent) / 100, text=f"{icon} {label}: {percent}%")

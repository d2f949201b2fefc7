"""Dashboard preferences (starred projects, theme) persisted as a small JSON file."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from .status import THEMES

logger = logging.getLogger(__name__)

STARRED_KEY = "starredProjects"
THEME_KEY = "theme"
DEFAULT_THEME = "light"


def default_preferences_path() -> Path:
    override = os.environ.get("JIRA_TICKETS_PREFS")
    if override:
        return Path(override)
    return Path.home() / ".jira_tickets" / "preferences.json"


class PreferenceStore:
    """Read/modify/write store; the last write wins, there is no locking."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else default_preferences_path()

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    # ------------------ Starred projects ------------------
    def starred_projects(self) -> list[str]:
        value = self._load().get(STARRED_KEY) or []
        return [str(k) for k in value if k] if isinstance(value, list) else []

    def toggle_star(self, project_key: str) -> list[str]:
        data = self._load()
        starred = [k for k in data.get(STARRED_KEY) or [] if k]
        if project_key in starred:
            starred = [k for k in starred if k != project_key]
        else:
            starred.append(project_key)
        data[STARRED_KEY] = starred
        self._save(data)
        return starred

    # ------------------ Theme ------------------
    def theme(self) -> str:
        value = self._load().get(THEME_KEY)
        return value if value in THEMES else DEFAULT_THEME

    def set_theme(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme {theme!r}; expected one of {', '.join(THEMES)}")
        data = self._load()
        data[THEME_KEY] = theme
        self._save(data)
        return theme

    def toggle_theme(self) -> str:
        return self.set_theme("dark" if self.theme() == "light" else "light")

"""Progress of logged time against the daily and weekly goals."""

from __future__ import annotations

import math

from jira_app.core.config import DAILY_GOAL_HOURS

SUCCESS = "success"
WARNING = "warning"
DANGER = "danger"


def progress_percent(seconds: int | float, goal_hours: int | float) -> int:
    """Whole-number percentage of ``goal_hours`` covered by ``seconds``.

    Not clamped: overtime reports values above 100.
    """
    if not goal_hours:
        return 0
    ratio = (seconds or 0) / (goal_hours * 3600) * 100
    return int(math.floor(ratio + 0.5))


def display_progress(percent: int | float) -> int:
    """Clamp a percentage into ``[0, 100]`` for progress bars."""
    return int(min(max(percent or 0, 0), 100))


def progress_level(percent: int | float) -> str:
    if percent >= 100:
        return SUCCESS
    if percent >= 75:
        return WARNING
    return DANGER


def deficit_seconds(total_seconds: int, goal_hours: int | float = DAILY_GOAL_HOURS) -> int:
    """Seconds still missing to reach the goal (0 once reached)."""
    return max(int(goal_hours * 3600) - int(total_seconds or 0), 0)

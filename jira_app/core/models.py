"""Domain data models for Jira projects, issues, worklogs, and timesheets."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass(slots=True)
class ProjectModel:
    id: str
    key: str
    name: str


@dataclass(slots=True)
class IssueModel:
    id: str | None
    key: str
    summary: str | None
    status: str | None
    status_category: str
    priority: str | None
    priority_icon: str | None
    assignee: str | None
    assignee_account_id: str | None
    assignee_avatar: str | None
    reporter: str | None
    created: datetime | None
    updated: datetime | None
    issuetype: str | None
    issuetype_icon: str | None
    project_key: str | None
    project_name: str | None
    labels: list[str] = field(default_factory=list)


@dataclass(slots=True)
class WorklogEntry:
    id: str | None
    issue_key: str
    summary: str | None
    time_spent_seconds: int
    started: datetime
    author_account_id: str | None = None
    comment: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "issueKey": self.issue_key,
            "summary": self.summary,
            "timeSpentSeconds": self.time_spent_seconds,
            "started": self.started.isoformat(),
            "comment": self.comment,
        }


@dataclass(slots=True)
class DailyBucket:
    date: date
    day_name: str
    total_seconds: int
    total_hours: float
    goal_hours: int
    progress: int
    worklogs: list[WorklogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "dayName": self.day_name,
            "totalSeconds": self.total_seconds,
            "totalHours": self.total_hours,
            "goalHours": self.goal_hours,
            "progress": self.progress,
            "worklogs": [
                {
                    "issueKey": w.issue_key,
                    "summary": w.summary,
                    "timeSpentSeconds": w.time_spent_seconds,
                    "started": w.started.isoformat(),
                }
                for w in self.worklogs
            ],
        }


@dataclass(slots=True)
class WeeklyTimesheet:
    week_start: date
    week_end: date
    days: list[DailyBucket]
    total_seconds: int
    total_hours: float
    weekly_goal_hours: int
    weekly_progress: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "weekStart": self.week_start.isoformat(),
            "weekEnd": self.week_end.isoformat(),
            "dailyData": [d.to_dict() for d in self.days],
            "totalSeconds": self.total_seconds,
            "totalHours": self.total_hours,
            "weeklyGoalHours": self.weekly_goal_hours,
            "weeklyProgress": self.weekly_progress,
        }


@dataclass(slots=True)
class IssueWorklogSummary:
    issue_key: str
    summary: str | None
    total_seconds: int
    worklogs: list[WorklogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "issueKey": self.issue_key,
            "summary": self.summary,
            "totalSeconds": self.total_seconds,
            "worklogs": [
                {
                    "id": w.id,
                    "timeSpentSeconds": w.time_spent_seconds,
                    "started": w.started.isoformat(),
                    "comment": w.comment,
                }
                for w in self.worklogs
            ],
        }


@dataclass(slots=True)
class WorklogReport:
    period: str
    start: datetime
    end: datetime
    total_seconds: int
    total_hours: float
    issues: list[IssueWorklogSummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "totalSeconds": self.total_seconds,
            "totalHours": self.total_hours,
            "worklogsByIssue": [i.to_dict() for i in self.issues],
        }


@dataclass(slots=True)
class BoardColumn:
    name: str
    category: str
    color: str
    issues: list[IssueModel] = field(default_factory=list)

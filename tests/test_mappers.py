import pytz

from jira_app.core.mappers import (
    issues_to_dataframe,
    map_issue,
    map_project,
    map_worklog,
    parse_dt,
)


def _raw_issue():
    return {
        "id": "10001",
        "key": "OBS-1",
        "fields": {
            "summary": "Fix the dome",
            "status": {"name": "In Progress", "statusCategory": {"key": "indeterminate"}},
            "priority": {"name": "High", "iconUrl": "https://x/high.svg"},
            "assignee": {
                "displayName": "Alice",
                "accountId": "acc-1",
                "avatarUrls": {"24x24": "https://x/a.png"},
            },
            "reporter": {"displayName": "Bob"},
            "created": "2024-09-01T10:00:00.000+0000",
            "updated": "2024-09-02T10:00:00.000+0000",
            "issuetype": {"name": "Task", "iconUrl": "https://x/task.svg"},
            "project": {"key": "OBS", "name": "Observatory"},
            "labels": ["ops", "Dome", "ops"],
        },
    }


def test_parse_dt():
    assert parse_dt(None) is None
    assert parse_dt("not a date") is None
    ts = parse_dt("2024-09-01T10:00:00.000+0000")
    assert ts.tzinfo is not None
    assert ts.hour == 10
    local = parse_dt("2024-09-01T10:00:00.000+0000", pytz.timezone("America/Guatemala"))
    assert local.hour == 4


def test_map_issue_fields():
    issue = map_issue(_raw_issue())
    assert issue.key == "OBS-1"
    assert issue.status == "In Progress"
    assert issue.status_category == "indeterminate"
    assert issue.priority == "High"
    assert issue.assignee == "Alice"
    assert issue.assignee_account_id == "acc-1"
    assert issue.assignee_avatar == "https://x/a.png"
    assert issue.project_key == "OBS"
    assert issue.created.day == 1


def test_map_issue_sparse():
    issue = map_issue({"key": "OBS-2", "fields": {}})
    assert issue.id is None
    assert issue.status is None
    assert issue.status_category == "new"
    assert issue.assignee is None
    assert issue.labels == []


def test_map_project_falls_back_to_key():
    project = map_project({"id": 7, "key": "OBS"})
    assert project.id == "7"
    assert project.name == "OBS"


def test_map_worklog():
    raw = {
        "id": 55,
        "started": "2024-09-02T09:00:00.000-0600",
        "timeSpentSeconds": 3600,
        "author": {"accountId": "acc-1"},
    }
    entry = map_worklog(raw, "OBS-1", "Fix the dome", pytz.timezone("America/Guatemala"))
    assert entry.id == "55"
    assert entry.started.hour == 9
    assert entry.time_spent_seconds == 3600
    assert entry.author_account_id == "acc-1"
    assert map_worklog({"timeSpentSeconds": 60}, "OBS-1", None) is None


def test_issues_to_dataframe_defaults():
    df = issues_to_dataframe([map_issue(_raw_issue()), map_issue({"key": "OBS-2", "fields": {}})])
    assert list(df["labels"]) == ["Dome, ops", ""]
    assert df.loc[1, "assignee"] == "Unassigned"
    assert df.loc[1, "reporter"] == "Unknown"
    assert df.loc[1, "priority"] == "None"


from jira_app.core.mappers import map_issue
from jira_app.core.models import ProjectModel
from jira_app.core.status import STATUS_COLORS, category_color, category_rank, normalize_category
from jira_app.features.board import (
    build_board_context,
    card_labels,
    scoped_jql,
    sort_projects,
    strip_order_by,
)


def _raw(key, status, category, labels=None):
    return {
        "id": key.split("-")[1],
        "key": key,
        "fields": {
            "summary": f"Issue {key}",
            "status": {"name": status, "statusCategory": {"key": category}},
            "labels": labels or [],
        },
    }


def test_category_helpers():
    assert normalize_category(None) == "new"
    assert normalize_category(" Done ") == "done"
    assert category_rank("new") < category_rank("indeterminate") < category_rank("done")
    assert category_rank("custom") > category_rank("done")
    assert category_color("done", "dark") == STATUS_COLORS["dark"]["done"]
    assert category_color("weird", "unknown-theme") == STATUS_COLORS["light"]["new"]


def test_board_columns_ordered_by_category():
    raw = {
        "issues": [
            _raw("OBS-1", "Done", "done"),
            _raw("OBS-2", "In Review", "indeterminate"),
            _raw("OBS-3", "To Do", "new"),
            _raw("OBS-4", "In Progress", "indeterminate"),
            _raw("OBS-5", "Done", "done"),
        ]
    }
    ctx = build_board_context(raw, "assignee = currentUser()")
    assert ctx.total == 5
    assert [c.name for c in ctx.columns] == ["To Do", "In Review", "In Progress", "Done"]
    done = ctx.columns[-1]
    assert [i.key for i in done.issues] == ["OBS-1", "OBS-5"]
    assert done.color == STATUS_COLORS["light"]["done"]


def test_board_missing_category_defaults_to_new():
    raw = {"issues": [{"key": "OBS-9", "fields": {"status": {"name": "Backlog"}}}]}
    ctx = build_board_context(raw, "")
    assert ctx.columns[0].category == "new"


def test_board_empty_search():
    ctx = build_board_context(None, "x")
    assert ctx.total == 0
    assert ctx.columns == []


def test_card_labels_first_two():
    issue = map_issue(_raw("OBS-1", "To Do", "new", labels=["a", "b", "c"]))
    assert card_labels(issue) == ["a", "b"]


def test_scoped_jql():
    assert scoped_jql("status = Open ORDER BY created DESC", None) == "status = Open ORDER BY created DESC"
    assert (
        scoped_jql("assignee = currentUser() order by updated DESC", "OBS")
        == 'project = "OBS" AND (assignee = currentUser()) ORDER BY updated DESC'
    )
    assert scoped_jql("ORDER BY updated DESC", "OBS") == 'project = "OBS" ORDER BY updated DESC'
    assert strip_order_by("a = b ORDER BY x") == "a = b"


def test_sort_projects_starred_first_and_search():
    projects = [
        ProjectModel(id="1", key="ABC", name="Alpha"),
        ProjectModel(id="2", key="OBS", name="Observatory"),
        {"id": "3", "key": "ZED", "name": "Zed Alpha"},
    ]
    ordered = sort_projects(projects, ["ZED"])
    assert [p.key for p in ordered] == ["ZED", "ABC", "OBS"]
    assert [p.key for p in sort_projects(projects, [], "alpha")] == ["ABC", "ZED"]
    assert [p.key for p in sort_projects(projects, [], "obs")] == ["OBS"]

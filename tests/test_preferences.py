import json

import pytest

from jira_app.core.preferences import PreferenceStore, default_preferences_path


def test_defaults_without_file(tmp_path):
    store = PreferenceStore(tmp_path / "prefs.json")
    assert store.starred_projects() == []
    assert store.theme() == "light"


def test_toggle_star_persists(tmp_path):
    path = tmp_path / "nested" / "prefs.json"
    store = PreferenceStore(path)
    assert store.toggle_star("OBS") == ["OBS"]
    assert store.toggle_star("ABC") == ["OBS", "ABC"]
    assert PreferenceStore(path).starred_projects() == ["OBS", "ABC"]
    assert store.toggle_star("OBS") == ["ABC"]
    assert json.loads(path.read_text())["starredProjects"] == ["ABC"]


def test_theme_toggle_and_validation(tmp_path):
    store = PreferenceStore(tmp_path / "prefs.json")
    assert store.toggle_theme() == "dark"
    assert store.theme() == "dark"
    assert store.toggle_theme() == "light"
    with pytest.raises(ValueError):
        store.set_theme("solarized")


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json")
    store = PreferenceStore(path)
    assert store.starred_projects() == []
    store.toggle_star("OBS")
    assert store.starred_projects() == ["OBS"]


def test_default_path_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("JIRA_TICKETS_PREFS", str(tmp_path / "p.json"))
    assert default_preferences_path() == tmp_path / "p.json"

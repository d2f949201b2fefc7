import json

import pytest
import requests

from jira_app.core.jira_client import JiraAPI, JiraRequestError


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else (json.dumps(body) if body is not None else "")
        self.content = self.text.encode()

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.exc:
            raise self.exc
        return self.response


class FakeClient:
    def __init__(self, session):
        self._session = session


class DummyAPI(JiraAPI):
    def __init__(self, session):
        self.server = "https://example.atlassian.net"
        self.client = FakeClient(session)


def test_search_builds_request():
    session = FakeSession(FakeResponse(body={"issues": [{"key": "OBS-1"}]}))
    api = DummyAPI(session)
    out = api.search("project = OBS", fields=["summary", "status"], max_results=10)
    assert out["issues"][0]["key"] == "OBS-1"
    method, url, kwargs = session.calls[0]
    assert method == "GET"
    assert url == "https://example.atlassian.net/rest/api/3/search/jql"
    assert kwargs["params"] == {"jql": "project = OBS", "maxResults": 10, "fields": "summary,status"}


def test_write_endpoints_send_json_payload():
    session = FakeSession(FakeResponse(status_code=204))
    api = DummyAPI(session)
    assert api.transition_issue("OBS-1", 31) is None
    _, url, kwargs = session.calls[0]
    assert url.endswith("/issue/OBS-1/transitions")
    assert json.loads(kwargs["data"]) == {"transition": {"id": "31"}}


def test_error_status_raises_with_details():
    body = {"errorMessages": ["Issue does not exist"], "errors": {"summary": "required"}}
    api = DummyAPI(FakeSession(FakeResponse(status_code=404, body=body)))
    with pytest.raises(JiraRequestError) as info:
        api.issue("OBS-404")
    err = info.value
    assert err.status_code == 404
    assert err.details == body
    assert err.user_message == "Issue does not exist, summary: required"


def test_error_with_non_json_body():
    api = DummyAPI(FakeSession(FakeResponse(status_code=502, text="Bad gateway")))
    with pytest.raises(JiraRequestError) as info:
        api.projects()
    assert info.value.details == "Bad gateway"
    assert "502" in info.value.user_message


def test_network_error_wrapped():
    api = DummyAPI(FakeSession(exc=requests.ConnectionError("boom")))
    with pytest.raises(JiraRequestError, match="boom"):
        api.myself()


def test_issue_worklogs_unwraps_list():
    api = DummyAPI(FakeSession(FakeResponse(body={"worklogs": [{"id": "1"}], "total": 1})))
    assert api.issue_worklogs("OBS-1") == [{"id": "1"}]


def test_non_json_success_body_is_upstream_error():
    api = DummyAPI(FakeSession(FakeResponse(status_code=200, text="<html>maintenance</html>")))
    with pytest.raises(JiraRequestError) as info:
        api.projects()
    assert info.value.status_code == 200
    assert info.value.details == "<html>maintenance</html>"

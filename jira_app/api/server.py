"""HTTP forwarding API (Flask) over IssueService.

Usage:
  python -m jira_app.api.server

Reads JIRA_BASE_URL, JIRA_EMAIL and JIRA_API_TOKEN from the environment (a
``.env`` file in the working directory is loaded first). Every upstream
failure becomes ``500 {"error": ..., "details": ...}``; invalid input
becomes ``400 {"error": ...}``.
"""

from __future__ import annotations

import functools
import logging

from dotenv import load_dotenv
from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from jira_app.core.config import (
    DEFAULT_SEARCH_JQL,
    DEFAULT_SEARCH_LIMIT,
    JiraSettings,
    load_settings,
)
from jira_app.core.duration import parse_duration
from jira_app.core.jira_client import JiraAPI, JiraRequestError
from jira_app.core.service import IssueService

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


def _service() -> IssueService:
    return current_app.extensions["issue_service"]


def forwards(failure_message: str):
    """Map upstream and input errors of a route to the uniform JSON error shape."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except JiraRequestError as exc:
                logger.error("%s: %s", failure_message, exc.details or exc)
                return jsonify({"error": failure_message, "details": exc.details}), 500
            except ValueError as exc:
                return jsonify({"error": str(exc)}), 400

        return wrapper

    return decorator


def _body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


@api_bp.route("/health")
def health():
    try:
        return jsonify(_service().health())
    except JiraRequestError as exc:
        logger.error("Health check error: %s", exc.details or exc)
        return (
            jsonify(
                {
                    "status": "error",
                    "message": "Failed to connect to Jira",
                    "details": exc.details or str(exc),
                }
            ),
            500,
        )


@api_bp.route("/projects")
@forwards("Failed to fetch projects")
def projects():
    return jsonify(_service().list_projects())


@api_bp.route("/statuses")
@forwards("Failed to fetch statuses")
def statuses():
    return jsonify(_service().list_statuses())


@api_bp.route("/issues")
@forwards("Failed to fetch issues")
def search_issues():
    jql = request.args.get("jql") or DEFAULT_SEARCH_JQL
    max_results = request.args.get("maxResults", default=DEFAULT_SEARCH_LIMIT, type=int)
    return jsonify(_service().search_issues(jql, max_results))


@api_bp.route("/issues/<issue_key>")
@forwards("Failed to fetch issue")
def get_issue(issue_key: str):
    return jsonify(_service().get_issue(issue_key))


@api_bp.route("/issues/<issue_key>", methods=["PUT"])
@forwards("Failed to update issue")
def update_issue(issue_key: str):
    return jsonify(_service().update_issue(issue_key, _body()))


@api_bp.route("/issues/<issue_key>/transitions")
@forwards("Failed to fetch transitions")
def get_transitions(issue_key: str):
    return jsonify(_service().get_transitions(issue_key))


@api_bp.route("/issues/<issue_key>/transitions", methods=["POST"])
@forwards("Failed to transition issue")
def transition_issue(issue_key: str):
    return jsonify(_service().transition_issue(issue_key, _body().get("transitionId")))


@api_bp.route("/issues/<issue_key>/comment", methods=["POST"])
@forwards("Failed to add comment")
def add_comment(issue_key: str):
    return jsonify(_service().add_comment(issue_key, _body().get("body") or ""))


@api_bp.route("/issues/<issue_key>/worklog", methods=["POST"])
@forwards("Failed to add worklog")
def add_worklog(issue_key: str):
    body = _body()
    seconds = body.get("timeSpentSeconds")
    if seconds is None and body.get("timeSpent"):
        seconds = parse_duration(body["timeSpent"])
        if seconds is None:
            raise ValueError("Invalid time format. Use format like: 1h 30m")
    try:
        seconds = int(seconds or 0)
    except (TypeError, ValueError) as exc:
        raise ValueError("timeSpentSeconds must be an integer") from exc
    return jsonify(_service().log_work(issue_key, seconds, body.get("comment")))


@api_bp.route("/issues/<issue_key>/subtasks")
@forwards("Failed to fetch subtasks")
def list_subtasks(issue_key: str):
    return jsonify(_service().list_subtasks(issue_key))


@api_bp.route("/issues/<issue_key>/subtasks", methods=["POST"])
@forwards("Failed to create subtask")
def create_subtask(issue_key: str):
    body = _body()
    return jsonify(_service().create_subtask(issue_key, body.get("summary") or "", body.get("projectName")))


@api_bp.route("/worklogs")
@forwards("Failed to fetch worklogs")
def worklogs():
    period = request.args.get("period", "week")
    return jsonify(_service().worklog_report(period).to_dict())


@api_bp.route("/worklogs/daily")
@forwards("Failed to fetch daily worklogs")
def daily_worklogs():
    return jsonify(_service().weekly_timesheet().to_dict())


def create_app(service: IssueService | None = None, settings: JiraSettings | None = None) -> Flask:
    """Build the API app; a ready ``service`` (e.g. backed by a fake client) skips settings."""
    app = Flask(__name__)
    CORS(app)
    if service is None:
        settings = (settings or load_settings()).require()
        service = IssueService(JiraAPI(settings.server, settings.email, settings.token), settings.timezone)
    app.extensions["issue_service"] = service
    app.register_blueprint(api_bp)
    return app


def main() -> None:
    load_dotenv()
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings=settings)
    logger.info("Server running on http://localhost:%s", settings.port)
    app.run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()

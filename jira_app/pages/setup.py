"""Connection setup page: collect Jira credentials and initialize IssueService."""

from __future__ import annotations

import pytz
import streamlit as st

from jira_app.app import register_page
from jira_app.core.config import TIMEZONE, load_settings
from jira_app.core.jira_client import JiraAPI, JiraRequestError
from jira_app.core.service import IssueService


def secret_settings() -> dict[str, str | None]:
    """Credentials from Streamlit secrets ([jira] section or top level), then environment."""
    env = load_settings()
    try:
        jira_secrets = st.secrets.get("jira", {})
        top = st.secrets
        server = jira_secrets.get("JIRA_BASE_URL") or jira_secrets.get("JIRA_SERVER") or top.get("JIRA_SERVER")
        email = jira_secrets.get("JIRA_EMAIL") or top.get("JIRA_EMAIL")
        token = (
            jira_secrets.get("JIRA_API_TOKEN")
            or top.get("JIRA_API_TOKEN")
            or jira_secrets.get("JIRA_TOKEN")
            or top.get("JIRA_TOKEN")
        )
        timezone = jira_secrets.get("JIRA_TIMEZONE") or top.get("JIRA_TIMEZONE")
    except FileNotFoundError:
        # No secrets.toml at all
        server = email = token = timezone = None
    return {
        "server": server or env.server,
        "email": email or env.email,
        "token": token or env.token,
        "timezone": timezone or env.timezone,
    }


def connect(server: str, email: str, token: str, timezone: str = TIMEZONE) -> IssueService:
    """Build the service and verify the credentials against /myself."""
    service = IssueService(JiraAPI(server, email, token), timezone)
    status = service.health()
    st.session_state["jira_server"] = server.rstrip("/")
    st.session_state["jira_email"] = email
    st.session_state["jira_user"] = status.get("user")
    st.session_state["issue_service"] = service
    return service


@register_page("Setup / Connection")
def setup_page():
    st.title("Jira Connection Setup")
    st.caption("Enter credentials (use secrets manager in production).")

    defaults = secret_settings()
    server = st.text_input(
        "Jira Server URL",
        value=st.session_state.get("jira_server") or defaults["server"] or "",
    )
    email = st.text_input(
        "Email / Username",
        value=st.session_state.get("jira_email") or defaults["email"] or "",
    )
    token = st.text_input(
        "API Token",
        type="password",
        value=defaults["token"] or "",
    )
    timezone = st.text_input("Timezone", value=defaults["timezone"] or TIMEZONE)
    init_btn = st.button("Initialize Connection", type="primary")

    if init_btn:
        if not (server and email and token):
            st.error("All fields required.")
            return
        try:
            connect(server, email, token, timezone)
            st.success(f"Connected to Jira as {st.session_state.get('jira_user')}.")
        except JiraRequestError as exc:
            st.session_state.pop("issue_service", None)
            st.error(f"Failed to connect to Jira: {exc.user_message}")
        except pytz.UnknownTimeZoneError:
            st.error(f"Unknown timezone: {timezone}")

    if "issue_service" in st.session_state:
        st.info("IssueService ready.")

"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``jira_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import pytz
import streamlit as st
from dotenv import load_dotenv

from jira_app.app import main
from jira_app.core.config import load_settings
from jira_app.core.jira_client import JiraRequestError
from jira_app.pages.setup import connect, secret_settings

st.set_page_config(layout="wide", page_title="Jira Tickets")
load_dotenv()
logging.basicConfig(level=load_settings().log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def _auto_init_issue_service():
    """Initialize Jira service from Streamlit secrets or the environment if available."""
    if "issue_service" in st.session_state:
        return

    creds = secret_settings()
    if creds["server"] and creds["email"] and creds["token"]:
        st.sidebar.info("Credentials found, attempting to connect to Jira...")
        try:
            connect(creds["server"], creds["email"], creds["token"], creds["timezone"])
            st.sidebar.success("Jira connection successful!")
        except (JiraRequestError, pytz.UnknownTimeZoneError) as e:
            st.sidebar.error(f"Jira connection failed: {e}")
            # Clear any partial state to ensure user is directed to setup
            st.session_state.pop("issue_service", None)
    else:
        st.sidebar.warning("Jira credentials not found. Please use the Setup page.")


_auto_init_issue_service()

PAGES_DIR = Path(__file__).parent / "jira_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"jira_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except ImportError as e:  # pragma: no cover
        logger.error("Failed importing page %s: %s", mod_name, e)

if __name__ == "__main__":
    main()

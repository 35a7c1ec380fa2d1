"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_report.py

Automatically imports every module in ``jira_activity/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from jira_activity.app import main
from jira_activity.core.errors import JiraActivityError
from jira_activity.core.settings import settings_from_secrets
from jira_activity.plugin import JiraActivityPlugin

logger = logging.getLogger(__name__)

st.set_page_config(layout="wide")


def _auto_init_plugin():
    """Initialize the activity plugin from Streamlit secrets if available."""
    if "activity_plugin" in st.session_state:
        return

    settings = settings_from_secrets(st.secrets)
    if not settings.get("jira.url") or not settings.get("jira.username"):
        st.sidebar.warning("Jira secrets not found. Please use the Setup page.")
        return

    st.sidebar.info("Secrets found, attempting to connect to Jira...")
    plugin = JiraActivityPlugin()
    try:
        plugin.initialize(settings)
    except JiraActivityError as exc:
        logger.error("Jira auto-initialization failed: %s", exc)
        st.sidebar.error(f"Jira connection failed: {exc}")
        return
    st.session_state["activity_plugin"] = plugin
    st.sidebar.success("Jira connection successful!")


_auto_init_plugin()

PAGES_DIR = Path(__file__).parent / "jira_activity" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"jira_activity.pages.{py.stem}"
    try:
        import_module(mod_name)
    except ImportError as e:  # pragma: no cover - defensive
        logger.error("Failed importing page %s: %s", mod_name, e)

if __name__ == "__main__":
    main()

"""Connection setup page: collect Jira settings and initialize the plugin."""

from __future__ import annotations

import logging

import streamlit as st

from jira_activity.app import SETUP_PAGE, register_page
from jira_activity.core.errors import JiraActivityError
from jira_activity.core.formatters import ReportFormat
from jira_activity.core.settings import settings_from_secrets
from jira_activity.plugin import JiraActivityPlugin

logger = logging.getLogger(__name__)


@register_page(SETUP_PAGE)
def setup_page():
    st.title("Jira Connection Setup")
    st.caption("Enter credentials (use secrets manager in production).")

    # Pre-fill from secrets if available (user can override)
    secret_settings = settings_from_secrets(st.secrets)
    formats = [f.value for f in ReportFormat]
    default_format = secret_settings.get("jira.format") or ReportFormat.JSON.value

    server = st.text_input("Jira Server URL", value=secret_settings.get("jira.url", ""))
    email = st.text_input("Email / Username", value=secret_settings.get("jira.username", ""))
    token = st.text_input("API Token", type="password", value=secret_settings.get("jira.token", ""))
    project = st.text_input("Project Key", value=secret_settings.get("jira.project", ""))
    report_format = st.selectbox(
        "Default Report Format",
        formats,
        index=formats.index(default_format) if default_format in formats else formats.index("json"),
    )
    with st.expander("Query options"):
        status_filter = st.text_input("Status filter", value="!= Closed")
        assignee_only = st.checkbox("Only issues assigned to me", value=True)
        open_sprints = st.checkbox("Only issues in open sprints", value=True)
        max_results = st.number_input("Max results", min_value=1, max_value=1000, value=100)

    if st.button("Initialize Connection", type="primary"):
        settings = {
            "jira.url": server,
            "jira.username": email,
            "jira.token": token,
            "jira.project": project,
            "jira.format": report_format,
            "jira.query.status_filter": status_filter,
            "jira.query.assignee_current_user": assignee_only,
            "jira.query.in_open_sprints": open_sprints,
            "jira.query.max_results": int(max_results),
        }
        plugin = JiraActivityPlugin()
        try:
            plugin.initialize(settings)
        except JiraActivityError as exc:
            logger.error("Jira setup failed: %s", exc)
            st.error(f"Failed to initialize Jira client: {exc}")
            return
        st.session_state["activity_plugin"] = plugin
        st.success("Connection initialized.")

    if "activity_plugin" in st.session_state:
        st.info("Activity report ready.")

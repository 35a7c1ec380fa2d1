"""Activity report page: pick a window and format, render, and download."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta

import pytz
import streamlit as st

from jira_activity.app import register_page
from jira_activity.core.errors import JiraActivityError
from jira_activity.core.formatters import FILE_EXTENSIONS, ReportFormat, resolve_format
from jira_activity.core.models import TimeRange
from jira_activity.plugin import JiraActivityPlugin

logger = logging.getLogger(__name__)


def window_from_dates(start: date, end: date, tz=pytz.UTC) -> TimeRange:
    """Inclusive date pickers -> half-open window ending at the next midnight."""
    start_dt = tz.localize(datetime.combine(start, time.min))
    end_dt = tz.localize(datetime.combine(end + timedelta(days=1), time.min))
    return TimeRange(start=start_dt, end=end_dt)


def download_name(project: str, window: TimeRange, fmt: ReportFormat) -> str:
    day = window.start.strftime("%Y%m%d")
    return f"jira-activity-{project or 'report'}-{day}.{FILE_EXTENSIONS[fmt]}"


def _preview(content: str, fmt: ReportFormat) -> None:
    if fmt is ReportFormat.MARKDOWN:
        st.markdown(content)
    elif fmt is ReportFormat.HTML:
        st.html(content)
    else:
        st.code(content, language=fmt.value)


@register_page("Activity Report")
def report_page():
    st.title("Jira Activity Report")
    plugin: JiraActivityPlugin | None = st.session_state.get("activity_plugin")
    if plugin is None:
        st.warning("Initialize connection on Setup page first.")
        return

    today = date.today()
    col1, col2, col3 = st.columns(3)
    start = col1.date_input("From", value=today - timedelta(days=1))
    end = col2.date_input("To (inclusive)", value=today)
    formats = [f.value for f in ReportFormat]
    fmt = resolve_format(col3.selectbox("Format", formats, index=formats.index(plugin.report_format.value)))

    if st.button("Generate Report", type="primary"):
        if start > end:
            st.error("Start date must not be after end date.")
            return
        window = window_from_dates(start, end)
        try:
            with st.status("Fetching Jira activity", expanded=False) as status:
                report = plugin.get_activity_report(
                    window, progress=lambda message, current, total: status.write(message)
                )
                status.update(label=f"Found {len(report.issues)} issue(s)", state="complete")
            st.session_state["activity_output"] = (window, fmt, plugin.format_report(report, fmt))
        except JiraActivityError as exc:
            logger.error("Activity report failed: %s", exc)
            st.error(f"Failed to build activity report: {exc}")
            return

    stored = st.session_state.get("activity_output")
    if stored is None:
        return
    window, out_fmt, formatted = stored
    _preview(formatted.content, out_fmt)
    project = plugin.config.project if plugin.config else ""
    st.download_button(
        "Download",
        data=formatted.content.encode("utf-8"),
        file_name=download_name(project, window, out_fmt),
        mime=formatted.content_type,
    )

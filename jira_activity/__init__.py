"""Jira activity report: fetch a user's in-window comments and changes and render them."""

from jira_activity.core.errors import ConfigurationError, JiraActivityError, ReportFormatError, TrackerError
from jira_activity.core.formatters import FormattedContent, ReportFormat, format_report, resolve_format
from jira_activity.core.models import ActivityReport, Change, Comment, Issue, QueryOptions, TimeRange, User
from jira_activity.core.service import ActivityService
from jira_activity.plugin import JiraActivityPlugin, StandupContext

__all__ = [
    "ActivityReport",
    "ActivityService",
    "Change",
    "Comment",
    "ConfigurationError",
    "FormattedContent",
    "Issue",
    "JiraActivityError",
    "JiraActivityPlugin",
    "QueryOptions",
    "ReportFormat",
    "ReportFormatError",
    "StandupContext",
    "TimeRange",
    "TrackerError",
    "User",
    "format_report",
    "resolve_format",
]

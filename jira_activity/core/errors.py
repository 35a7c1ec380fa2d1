"""Exception types raised by the activity report pipeline."""

from __future__ import annotations


class JiraActivityError(RuntimeError):
    """Base class for every error raised by this package."""


class ConfigurationError(JiraActivityError):
    """A required setting is missing or the plugin was used before initialization."""


class TrackerError(JiraActivityError):
    """Jira client construction, authentication, or network failure."""


class ReportFormatError(JiraActivityError):
    """A structured formatter (XML/JSON) failed to serialize the report."""

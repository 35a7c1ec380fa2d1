"""Central configuration: defaults, tuning knobs, and declared setting keys."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Jira Query Defaults
# =============================================================================
# Placeholders: project key, window start, window end (in that order).
DEFAULT_JQL_TEMPLATE = 'project = %s AND updatedDate >= "%s" AND updatedDate < "%s"'
DEFAULT_STATUS_FILTER = "!= Closed"
DEFAULT_MAX_RESULTS = 100
DEFAULT_FIELDS: Sequence[str] = ("summary", "description", "status", "changelog", "comment")

# Both spellings mean "exclude closed issues"; "!Closed" is not valid JQL.
NOT_CLOSED_SHORTHANDS: frozenset[str] = frozenset({"!Closed", "!= Closed"})

# =============================================================================
# Timestamp Layouts
# =============================================================================
JIRA_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"  # e.g. 2024-09-10T10:00:00.000+0000
QUERY_TIME_FORMAT = "%Y-%m-%d %H:%M"

# =============================================================================
# Report Output
# =============================================================================
DEFAULT_REPORT_FORMAT = "json"
REPORT_TITLE = "Jira Activity Report"
NO_ACTIVITY_MESSAGE = "No activity found for the specified time range."

# =============================================================================
# Parallel extraction tuning
# =============================================================================
# Below this many items, extraction stays sequential (and ordered).
ACTIVITY_MIN_PARALLEL = 5
# None -> os.cpu_count()
ACTIVITY_MAX_WORKERS: int | None = None

# =============================================================================
# Host Settings
# =============================================================================
PLUGIN_NAME = "jira-activity"
TOKEN_ENV_VAR = "JIRA_API_TOKEN"


@dataclass(frozen=True, slots=True)
class ConfigKey:
    key: str
    name: str
    description: str
    required: bool = False
    env_var: str | None = None


CONFIG_KEYS: Sequence[ConfigKey] = (
    ConfigKey("jira.username", "Jira Username", "The username for the Jira user", required=True),
    ConfigKey(
        "jira.token",
        "Jira API Token",
        "The API token for the Jira user",
        required=True,
        env_var=TOKEN_ENV_VAR,
    ),
    ConfigKey("jira.url", "Jira URL", "The URL for the Jira instance", required=True),
    ConfigKey("jira.project", "Jira Project", "The project to generate the report for", required=True),
    ConfigKey(
        "jira.format",
        "Report Format",
        "The format for the activity report (xml, json, markdown, or html)",
    ),
    ConfigKey(
        "jira.query.jql_template",
        "JQL Template",
        "The JQL template for querying issues (use %s placeholders for project, start date, and end date)",
    ),
    ConfigKey(
        "jira.query.assignee_current_user",
        "Filter by Current User",
        "Whether to include only issues assigned to the current user (true/false)",
    ),
    ConfigKey(
        "jira.query.status_filter",
        "Status Filter",
        "Filter issues by status using JQL syntax (e.g., '!= Closed' to exclude closed issues)",
    ),
    ConfigKey(
        "jira.query.in_open_sprints",
        "In Open Sprints",
        "Whether to include only issues in open sprints (true/false)",
    ),
    ConfigKey(
        "jira.query.max_results",
        "Max Results",
        "Maximum number of issues to fetch",
    ),
    ConfigKey(
        "jira.query.fields",
        "Fields",
        "Comma-separated list of issue fields to request",
    ),
)

REQUIRED_KEYS: Sequence[str] = tuple(k.key for k in CONFIG_KEYS if k.required)

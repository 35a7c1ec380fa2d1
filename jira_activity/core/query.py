"""Build the JQL search string for an activity report."""

from __future__ import annotations

from .config import NOT_CLOSED_SHORTHANDS
from .models import QueryOptions


def status_clause(status_filter: str) -> str:
    if status_filter in NOT_CLOSED_SHORTHANDS:
        return "status != Closed"
    # The filter carries its own operator, e.g. "= In Progress".
    return f"status {status_filter}"


def build_jql(options: QueryOptions, from_time: str, to_time: str) -> str:
    """Fill the template and AND together the optional conditions.

    Order is fixed: template, assignee, status, open sprints. The user-supplied
    pieces are not validated; Jira reports malformed JQL when the search runs.
    """
    conditions = [options.jql_template % (options.project, from_time, to_time)]
    if options.assignee_current_user:
        conditions.append("assignee = currentUser()")
    if options.status_filter:
        conditions.append(status_clause(options.status_filter))
    if options.in_open_sprints:
        conditions.append("sprint IN openSprints()")
    return " AND ".join(conditions)

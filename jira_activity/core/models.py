"""Domain data models for a user's Jira activity report."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

import pytz

from .config import DEFAULT_FIELDS, DEFAULT_JQL_TEMPLATE, DEFAULT_MAX_RESULTS, DEFAULT_STATUS_FILTER


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value


@dataclass(frozen=True, slots=True)
class TimeRange:
    """Activity window, start-inclusive and end-exclusive."""

    start: datetime
    end: datetime

    def __post_init__(self):
        # Naive bounds are read as UTC so comparisons with parsed Jira timestamps work.
        object.__setattr__(self, "start", _as_aware(self.start))
        object.__setattr__(self, "end", _as_aware(self.end))

    @classmethod
    def between(cls, start: datetime, end: datetime) -> TimeRange:
        """Build a window, treating naive datetimes as UTC."""
        return cls(start=_as_aware(start), end=_as_aware(end))

    def is_in_range(self, ts: datetime) -> bool:
        return self.start <= ts < self.end


@dataclass(frozen=True, slots=True)
class User:
    account_id: str
    display_name: str
    email: str


@dataclass(frozen=True, slots=True)
class Comment:
    timestamp: datetime
    author: str
    content: str


@dataclass(frozen=True, slots=True)
class Change:
    timestamp: datetime
    author: str
    field: str
    from_value: str
    to_value: str


@dataclass(frozen=True, slots=True)
class Issue:
    key: str
    summary: str
    status: str
    comments: list[Comment] = field(default_factory=list)
    changes: list[Change] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ActivityReport:
    time_range: TimeRange
    user: User
    issues: list[Issue] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """Knobs used to build the JQL search for a report.

    ``jql_template`` takes three ``%s`` placeholders filled with the project key,
    the window start and the window end, in that order.
    """

    jql_template: str = DEFAULT_JQL_TEMPLATE
    assignee_current_user: bool = True
    project: str = ""
    status_filter: str = DEFAULT_STATUS_FILTER
    in_open_sprints: bool = True
    max_results: int = DEFAULT_MAX_RESULTS
    fields: Sequence[str] = DEFAULT_FIELDS
    expand_changelog: bool = True

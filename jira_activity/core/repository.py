"""Repository boundary between the activity service and Jira."""

from __future__ import annotations

import logging
from typing import Protocol

from .config import QUERY_TIME_FORMAT
from .errors import TrackerError
from .extract import extract_issues
from .jira_client import JiraAPI
from .models import Issue, QueryOptions, TimeRange, User
from .query import build_jql

logger = logging.getLogger(__name__)


class JiraRepository(Protocol):
    def get_user(self) -> User: ...

    def get_issues(self, time_range: TimeRange, actor_id: str) -> list[Issue]: ...


class JiraAPIRepository:
    """JiraRepository backed by the Jira REST API."""

    def __init__(self, api: JiraAPI, options: QueryOptions):
        self.api = api
        self.options = options

    def get_user(self) -> User:
        try:
            raw = self.api.myself()
        except TrackerError as exc:
            raise TrackerError(f"failed to get user from Jira: {exc}") from exc
        return User(
            account_id=raw.get("accountId") or "",
            display_name=raw.get("displayName") or "",
            email=raw.get("emailAddress") or "",
        )

    def build_query(self, time_range: TimeRange) -> str:
        return build_jql(
            self.options,
            time_range.start.strftime(QUERY_TIME_FORMAT),
            time_range.end.strftime(QUERY_TIME_FORMAT),
        )

    def get_issues(self, time_range: TimeRange, actor_id: str) -> list[Issue]:
        """Search issues updated in the window and keep only in-window activity."""
        jql = self.build_query(time_range)
        logger.debug("Searching issues with JQL: %s", jql)
        try:
            raw_issues = self.api.search(
                jql,
                fields=list(self.options.fields),
                expand=["changelog"] if self.options.expand_changelog else None,
                max_results=self.options.max_results,
            )
        except TrackerError as exc:
            raise TrackerError(f"failed to search issues in Jira: {exc}") from exc
        return extract_issues(raw_issues, time_range, actor_id)

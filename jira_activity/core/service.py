"""ActivityService: resolves the user, fetches issues, assembles the report."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .errors import TrackerError
from .models import ActivityReport, TimeRange
from .repository import JiraRepository

ProgressCallback = Callable[[str, int | None, int | None], None]

logger = logging.getLogger(__name__)


class ActivityService:
    def __init__(self, repository: JiraRepository):
        self.repository = repository

    def get_activity_report(
        self,
        time_range: TimeRange,
        *,
        progress: ProgressCallback | None = None,
    ) -> ActivityReport:
        """Build the activity report for ``time_range``.

        Any repository failure aborts the whole call; no partial report is
        returned.
        """
        if progress:
            progress("Resolving current Jira user", 0, 2)
        try:
            user = self.repository.get_user()
        except TrackerError as exc:
            raise TrackerError(f"failed to get user: {exc}") from exc

        if progress:
            progress(f"Fetching issues for {user.display_name or user.account_id}", 1, 2)
        try:
            issues = self.repository.get_issues(time_range, user.account_id)
        except TrackerError as exc:
            raise TrackerError(f"failed to get issues: {exc}") from exc

        logger.info("Activity report assembled with %s issue(s)", len(issues))
        if progress:
            progress(f"Found {len(issues)} issue(s)", 2, 2)
        return ActivityReport(time_range=time_range, user=user, issues=list(issues))

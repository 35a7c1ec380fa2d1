"""Host plugin: turns host settings into a ready-to-use activity report pipeline."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from jira import JIRAError
from requests import RequestException

from jira_activity.core.config import CONFIG_KEYS, PLUGIN_NAME, ConfigKey
from jira_activity.core.errors import ConfigurationError, JiraActivityError, TrackerError
from jira_activity.core.formatters import FormattedContent, ReportFormat, format_report, resolve_format
from jira_activity.core.jira_client import JiraAPI
from jira_activity.core.models import ActivityReport, TimeRange
from jira_activity.core.repository import JiraAPIRepository
from jira_activity.core.service import ActivityService, ProgressCallback
from jira_activity.core.settings import JiraConfig, load_config

logger = logging.getLogger(__name__)

ApiFactory = Callable[[str, str, str], JiraAPI]


@dataclass(frozen=True, slots=True)
class StandupContext:
    plugin_name: str
    content: str
    content_type: str


class JiraActivityPlugin:
    def __init__(self, api_factory: ApiFactory = JiraAPI):
        self._api_factory = api_factory
        self.config: JiraConfig | None = None
        self.service: ActivityService | None = None
        self.report_format: ReportFormat = resolve_format(None)

    @property
    def name(self) -> str:
        return PLUGIN_NAME

    def manifest(self) -> Sequence[ConfigKey]:
        return CONFIG_KEYS

    def initialize(self, settings: Mapping[str, Any], environ: Mapping[str, str] | None = None) -> None:
        config = load_config(settings, environ)
        try:
            api = self._api_factory(config.url, config.username, config.token)
        except (JIRAError, RequestException, TrackerError) as exc:
            raise TrackerError(f"failed to create Jira client: {exc}") from exc
        self.config = config
        self.service = ActivityService(JiraAPIRepository(api, config.query_options))
        self.report_format = resolve_format(config.report_format)
        logger.info("Initialized %s for project %s (format=%s)", self.name, config.project, self.report_format.value)

    def shutdown(self) -> None:
        self.service = None
        self.config = None

    def _require_service(self) -> ActivityService:
        if self.service is None:
            raise ConfigurationError(f"{self.name} used before initialize()")
        return self.service

    def get_activity_report(
        self,
        time_range: TimeRange,
        *,
        progress: ProgressCallback | None = None,
    ) -> ActivityReport:
        return self._require_service().get_activity_report(time_range, progress=progress)

    def format_report(
        self,
        report: ActivityReport,
        fmt: str | ReportFormat | None = None,
    ) -> FormattedContent:
        return format_report(report, fmt or self.report_format)

    def get_standup_context(self, time_range: TimeRange) -> StandupContext:
        try:
            report = self.get_activity_report(time_range)
        except JiraActivityError as exc:
            raise type(exc)(f"failed to get activity report: {exc}") from exc
        try:
            formatted = self.format_report(report)
        except JiraActivityError as exc:
            raise type(exc)(f"failed to format activity report: {exc}") from exc
        return StandupContext(
            plugin_name=self.name,
            content=formatted.content,
            content_type=formatted.content_type,
        )

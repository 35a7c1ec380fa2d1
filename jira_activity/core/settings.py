"""Parse host settings (flat ``jira.*`` keys, YAML files, Streamlit secrets) into JiraConfig."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .config import DEFAULT_REPORT_FORMAT, REQUIRED_KEYS, TOKEN_ENV_VAR
from .errors import ConfigurationError
from .models import QueryOptions


@dataclass(frozen=True, slots=True)
class JiraConfig:
    username: str
    token: str
    url: str
    project: str
    report_format: str = DEFAULT_REPORT_FORMAT
    query_options: QueryOptions = field(default_factory=QueryOptions)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    text = _text(value)
    if not text:
        return default
    return text.lower() == "true"


def _parse_positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(_text(value))
    except ValueError:
        return default
    return number if number > 0 else default


def parse_fields(value: Any) -> tuple[str, ...]:
    """Split a comma-separated field list, trimming each entry."""
    if isinstance(value, (list, tuple)):
        parts = [_text(v) for v in value]
    else:
        parts = [p.strip() for p in _text(value).split(",")]
    return tuple(p for p in parts if p)


def load_config(settings: Mapping[str, Any], environ: Mapping[str, str] | None = None) -> JiraConfig:
    """Build a JiraConfig from flat host settings.

    The API token is read from ``JIRA_API_TOKEN`` when set, falling back to
    ``jira.token``. Missing required keys raise ``ConfigurationError``.
    """
    env = os.environ if environ is None else environ
    values = {key: _text(settings.get(key)) for key in REQUIRED_KEYS}
    env_token = _text(env.get(TOKEN_ENV_VAR))
    if env_token:
        values["jira.token"] = env_token
    for key in REQUIRED_KEYS:
        if not values[key]:
            raise ConfigurationError(f"missing required setting: {key}")

    defaults = QueryOptions()
    fields = parse_fields(settings.get("jira.query.fields"))
    options = QueryOptions(
        jql_template=_text(settings.get("jira.query.jql_template")) or defaults.jql_template,
        assignee_current_user=_parse_bool(
            settings.get("jira.query.assignee_current_user"), defaults.assignee_current_user
        ),
        project=values["jira.project"],
        status_filter=_text(settings.get("jira.query.status_filter")) or defaults.status_filter,
        in_open_sprints=_parse_bool(settings.get("jira.query.in_open_sprints"), defaults.in_open_sprints),
        max_results=_parse_positive_int(settings.get("jira.query.max_results"), defaults.max_results),
        fields=fields or defaults.fields,
        expand_changelog=defaults.expand_changelog,
    )
    return JiraConfig(
        username=values["jira.username"],
        token=values["jira.token"],
        url=values["jira.url"],
        project=values["jira.project"],
        report_format=_text(settings.get("jira.format")) or DEFAULT_REPORT_FORMAT,
        query_options=options,
    )


def flatten_settings(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dotted keys (``jira: {url: x}`` -> ``jira.url``)."""
    out: dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            out.update(flatten_settings(value, dotted))
        else:
            out[dotted] = value
    return out


def load_settings_file(path: str | Path) -> dict[str, Any]:
    yaml_path = Path(path)
    if not yaml_path.exists():
        raise ConfigurationError(f"settings file not found: {yaml_path}")
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid settings file {yaml_path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"settings file {yaml_path} must contain a mapping")
    return flatten_settings(data)


def settings_from_secrets(secrets: Mapping[str, Any]) -> dict[str, Any]:
    """Map Streamlit secrets (``[jira]`` section or top level) onto flat settings keys."""
    section = secrets.get("jira", {}) or {}

    def pick(*names: str):
        for name in names:
            value = section.get(name) or secrets.get(name)
            if value:
                return value
        return None

    settings = {
        "jira.url": pick("JIRA_SERVER", "JIRA_URL"),
        "jira.username": pick("JIRA_EMAIL", "JIRA_USERNAME"),
        "jira.token": pick("JIRA_API_TOKEN", "JIRA_TOKEN"),
        "jira.project": pick("JIRA_PROJECT"),
        "jira.format": pick("JIRA_FORMAT"),
    }
    return {k: v for k, v in settings.items() if v is not None}

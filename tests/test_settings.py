import pytest

from jira_activity.core.config import CONFIG_KEYS, REQUIRED_KEYS
from jira_activity.core.errors import ConfigurationError
from jira_activity.core.settings import (
    flatten_settings,
    load_config,
    load_settings_file,
    parse_fields,
    settings_from_secrets,
)

BASE = {
    "jira.username": "me@example.com",
    "jira.token": "settings-token",
    "jira.url": "https://example.atlassian.net",
    "jira.project": "TEST",
}


def test_defaults_applied():
    cfg = load_config(BASE, environ={})
    assert cfg.token == "settings-token"
    assert cfg.report_format == "json"
    assert cfg.query_options.project == "TEST"
    assert cfg.query_options.max_results == 100
    assert cfg.query_options.status_filter == "!= Closed"


def test_env_token_takes_precedence():
    cfg = load_config(BASE, environ={"JIRA_API_TOKEN": "env-token"})
    assert cfg.token == "env-token"


def test_env_token_satisfies_missing_setting():
    settings = {k: v for k, v in BASE.items() if k != "jira.token"}
    assert load_config(settings, environ={"JIRA_API_TOKEN": "env-token"}).token == "env-token"


@pytest.mark.parametrize("missing", ["jira.username", "jira.url", "jira.project", "jira.token"])
def test_missing_required_setting(missing):
    settings = {k: v for k, v in BASE.items() if k != missing}
    with pytest.raises(ConfigurationError, match=f"missing required setting: {missing}"):
        load_config(settings, environ={})


def test_query_overrides():
    settings = dict(
        BASE,
        **{
            "jira.format": "markdown",
            "jira.query.jql_template": "project = %s AND updated >= %s AND updated < %s",
            "jira.query.assignee_current_user": "false",
            "jira.query.status_filter": "= In Progress",
            "jira.query.in_open_sprints": "false",
            "jira.query.max_results": "25",
            "jira.query.fields": " summary , status,, comment ",
        },
    )
    cfg = load_config(settings, environ={})
    opts = cfg.query_options
    assert cfg.report_format == "markdown"
    assert opts.jql_template.startswith("project = %s AND updated")
    assert opts.assignee_current_user is False
    assert opts.in_open_sprints is False
    assert opts.status_filter == "= In Progress"
    assert opts.max_results == 25
    assert tuple(opts.fields) == ("summary", "status", "comment")


@pytest.mark.parametrize("value", ["zero", "0", "-3"])
def test_invalid_max_results_keeps_default(value):
    cfg = load_config(dict(BASE, **{"jira.query.max_results": value}), environ={})
    assert cfg.query_options.max_results == 100


def test_parse_fields_accepts_lists():
    assert parse_fields(["summary ", " comment"]) == ("summary", "comment")
    assert parse_fields(None) == ()


def test_yaml_settings_are_flattened(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "jira:\n"
        "  username: me@example.com\n"
        "  token: t\n"
        "  url: https://example.atlassian.net\n"
        "  project: TEST\n"
        "  query:\n"
        "    max_results: 50\n"
        "    in_open_sprints: false\n"
    )
    settings = load_settings_file(path)
    assert settings["jira.query.max_results"] == 50
    cfg = load_config(settings, environ={})
    assert cfg.query_options.max_results == 50
    assert cfg.query_options.in_open_sprints is False


def test_missing_or_invalid_settings_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_settings_file(tmp_path / "absent.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n")
    with pytest.raises(ConfigurationError, match="must contain a mapping"):
        load_settings_file(bad)


def test_flatten_settings_nested():
    assert flatten_settings({"a": {"b": {"c": 1}}, "d": 2}) == {"a.b.c": 1, "d": 2}


def test_settings_from_secrets_section_and_top_level():
    secrets = {
        "jira": {"JIRA_SERVER": "https://example.atlassian.net", "JIRA_EMAIL": "me@example.com"},
        "JIRA_TOKEN": "tok",
        "JIRA_PROJECT": "TEST",
    }
    assert settings_from_secrets(secrets) == {
        "jira.url": "https://example.atlassian.net",
        "jira.username": "me@example.com",
        "jira.token": "tok",
        "jira.project": "TEST",
    }


def test_required_keys_declared():
    assert set(REQUIRED_KEYS) == {"jira.username", "jira.token", "jira.url", "jira.project"}
    token_key = next(k for k in CONFIG_KEYS if k.key == "jira.token")
    assert token_key.env_var == "JIRA_API_TOKEN"

"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import jira_activity` works. Shared raw-Jira payload builders
live here as fixtures.
"""

from __future__ import annotations

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from jira_activity.core.models import TimeRange  # noqa: E402

ACTOR_ID = "user123"


@pytest.fixture
def window() -> TimeRange:
    return TimeRange(
        start=datetime(2024, 9, 1, tzinfo=UTC),
        end=datetime(2024, 9, 3, tzinfo=UTC),
    )


def raw_comment(created: str, author: str = "Bob", body: str = "Looks good") -> dict:
    return {"created": created, "author": {"displayName": author}, "body": body}


def raw_history(created: str, account_id: str = ACTOR_ID, items=None, name: str = "Test User") -> dict:
    return {
        "created": created,
        "author": {"accountId": account_id, "displayName": name},
        "items": items
        if items is not None
        else [{"field": "status", "fromString": "To Do", "toString": "In Progress"}],
    }


def raw_issue(key: str, status: str = "In Progress", comments=None, histories=None) -> dict:
    return {
        "key": key,
        "fields": {
            "summary": f"Summary of {key}",
            "status": {"name": status},
            "comment": {"comments": comments or []},
        },
        "changelog": {"histories": histories or []},
    }

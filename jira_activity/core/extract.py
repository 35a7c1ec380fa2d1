"""Extract in-window comments and actor changes from raw Jira issue JSON."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import datetime
from typing import Any

import pandas as pd

from .concurrency import run_batch
from .config import JIRA_TIMESTAMP_FORMAT
from .models import Change, Comment, Issue, TimeRange

logger = logging.getLogger(__name__)

# Millisecond fraction and a four-digit numeric offset, nothing else.
_JIRA_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}[+-]\d{4}")


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a Jira timestamp (``2024-09-10T10:00:00.000+0000``).

    Anything that does not match the fixed layout yields None; callers drop
    such items rather than failing the report.
    """
    if not isinstance(value, str) or not _JIRA_TIMESTAMP_RE.fullmatch(value):
        return None
    ts = pd.to_datetime(value, format=JIRA_TIMESTAMP_FORMAT, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def comment_text(body: Any) -> str:
    """Return a comment body as plain text.

    REST v2 delivers a string. Atlassian Document Format bodies (dicts) are
    flattened to their text nodes, one line per top-level block.
    """
    if body is None:
        return ""
    if isinstance(body, str):
        return body
    if not isinstance(body, dict):
        return str(body)

    def walk(node: Any, parts: list[str]) -> None:
        if isinstance(node, dict):
            text = node.get("text")
            if node.get("type") == "text" and isinstance(text, str):
                parts.append(text)
            for child in node.get("content") or []:
                walk(child, parts)
        elif isinstance(node, list):
            for child in node:
                walk(child, parts)

    lines = []
    for block in body.get("content") or []:
        parts: list[str] = []
        walk(block, parts)
        lines.append("".join(parts))
    return "\n".join(lines)


def _display_name(person: Any) -> str:
    if not isinstance(person, dict):
        return ""
    return person.get("displayName") or ""


def _comment_in_window(raw: dict[str, Any], time_range: TimeRange) -> Comment | None:
    created = parse_timestamp(raw.get("created"))
    if created is None:
        logger.debug("Dropping comment %s with unparseable timestamp %r", raw.get("id"), raw.get("created"))
        return None
    if not time_range.is_in_range(created):
        return None
    return Comment(
        timestamp=created,
        author=_display_name(raw.get("author")),
        content=comment_text(raw.get("body")),
    )


def _history_changes(history: dict[str, Any], time_range: TimeRange, actor_id: str) -> list[Change]:
    created = parse_timestamp(history.get("created"))
    if created is None:
        logger.debug("Dropping history %s with unparseable timestamp %r", history.get("id"), history.get("created"))
        return []
    author = history.get("author") or {}
    if not time_range.is_in_range(created) or author.get("accountId") != actor_id:
        return []
    return [
        Change(
            timestamp=created,
            author=_display_name(author),
            field=item.get("field") or "",
            from_value=item.get("fromString") or "",
            to_value=item.get("toString") or "",
        )
        for item in history.get("items") or []
    ]


def extract_comments(raw_comments: Iterable[dict[str, Any]], time_range: TimeRange) -> list[Comment]:
    """Comments created inside the window, regardless of author."""
    results = run_batch(list(raw_comments), lambda c: _comment_in_window(c, time_range))
    return [c for c in results if c is not None]


def extract_changes(
    histories: Iterable[dict[str, Any]],
    time_range: TimeRange,
    actor_id: str,
) -> list[Change]:
    """Field changes made by ``actor_id`` inside the window.

    Every item of a qualifying history entry becomes one Change carrying the
    entry's timestamp and author.
    """
    batches = run_batch(list(histories), lambda h: _history_changes(h, time_range, actor_id))
    return [change for batch in batches for change in batch]


def build_issue(raw: dict[str, Any], time_range: TimeRange, actor_id: str) -> Issue:
    fields = raw.get("fields") or {}
    comment_block = fields.get("comment") or {}
    histories = (raw.get("changelog") or {}).get("histories") or []
    return Issue(
        key=raw.get("key") or "",
        summary=fields.get("summary") or "",
        status=(fields.get("status") or {}).get("name") or "",
        comments=extract_comments(comment_block.get("comments") or [], time_range),
        changes=extract_changes(histories, time_range, actor_id),
    )


def extract_issues(
    raw_issues: Iterable[dict[str, Any]],
    time_range: TimeRange,
    actor_id: str,
) -> list[Issue]:
    """Normalize every raw issue; issues without in-window activity are kept."""
    return run_batch(list(raw_issues), lambda raw: build_issue(raw, time_range, actor_id))

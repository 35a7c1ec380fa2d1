"""Render an ActivityReport as XML, JSON, Markdown, or HTML.

Every formatter is a pure function ``report -> FormattedContent``. Reports
without issues render a fixed, format-specific placeholder instead of an
empty template.
"""

from __future__ import annotations

import html
import json
import re
import xml.etree.ElementTree as ET
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .config import DEFAULT_REPORT_FORMAT, NO_ACTIVITY_MESSAGE, REPORT_TITLE
from .errors import ReportFormatError
from .models import ActivityReport, Issue


class ReportFormat(str, Enum):
    XML = "xml"
    JSON = "json"
    MARKDOWN = "markdown"
    HTML = "html"


@dataclass(frozen=True, slots=True)
class FormattedContent:
    content: str
    content_type: str


CONTENT_TYPES: dict[ReportFormat, str] = {
    ReportFormat.XML: "application/xml",
    ReportFormat.JSON: "application/json",
    ReportFormat.MARKDOWN: "text/markdown",
    ReportFormat.HTML: "text/html",
}

FILE_EXTENSIONS: dict[ReportFormat, str] = {
    ReportFormat.XML: "xml",
    ReportFormat.JSON: "json",
    ReportFormat.MARKDOWN: "md",
    ReportFormat.HTML: "html",
}

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
EMPTY_XML = "<jira_report></jira_report>"
EMPTY_JSON = "{}"
EMPTY_HTML = f"<html><body><h1>{REPORT_TITLE}</h1><p>{NO_ACTIVITY_MESSAGE}</p></body></html>"

XML_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"
MINUTE_FORMAT = "%Y-%m-%d %H:%M"

HTML_STYLE = """body { font-family: Arial, sans-serif; margin: 20px; }
h1 { color: #0052CC; }
h2 { color: #172B4D; border-bottom: 1px solid #DFE1E6; padding-bottom: 8px; }
h3 { margin-top: 20px; }
.issue { background-color: #F4F5F7; border-radius: 3px; padding: 15px; margin-bottom: 15px; }
.issue-key { color: #0052CC; font-weight: bold; }
.issue-summary { font-size: 16px; margin-bottom: 10px; }
.metadata { color: #6B778C; font-size: 14px; margin-bottom: 15px; }
.changes, .comments { margin-top: 10px; }
.change, .comment { background-color: white; border: 1px solid #DFE1E6; padding: 10px; margin-bottom: 8px; }
.author { color: #0052CC; font-weight: bold; }
.timestamp { color: #6B778C; font-size: 12px; }
"""


def group_by_status(issues: list[Issue]) -> dict[str, list[Issue]]:
    groups: dict[str, list[Issue]] = {}
    for issue in issues:
        groups.setdefault(issue.status, []).append(issue)
    return groups


# Characters outside the XML 1.0 Char production.
_XML_ILLEGAL = re.compile("[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _sub_text(parent: ET.Element, tag: str, text: str) -> ET.Element:
    node = ET.SubElement(parent, tag)
    node.text = _XML_ILLEGAL.sub("\ufffd", text)
    return node


def format_xml(report: ActivityReport) -> FormattedContent:
    content_type = CONTENT_TYPES[ReportFormat.XML]
    if not report.issues:
        return FormattedContent(EMPTY_XML, content_type)

    root = ET.Element("jira_report")
    for issue in report.issues:
        node = ET.SubElement(root, "issue")
        _sub_text(node, "key", issue.key)
        _sub_text(node, "status", issue.status)
        _sub_text(node, "summary", issue.summary)
        comments = ET.SubElement(node, "comments")
        for comment in issue.comments:
            entry = ET.SubElement(comments, "comment")
            _sub_text(entry, "timestamp", comment.timestamp.strftime(XML_TIME_FORMAT))
            _sub_text(entry, "author", comment.author)
            _sub_text(entry, "content", comment.content)
        changelog = ET.SubElement(node, "changelog")
        for change in issue.changes:
            entry = ET.SubElement(changelog, "change")
            _sub_text(entry, "timestamp", change.timestamp.strftime(XML_TIME_FORMAT))
            _sub_text(entry, "author", change.author)
            _sub_text(entry, "field", change.field)
            _sub_text(entry, "from", change.from_value)
            _sub_text(entry, "to", change.to_value)
    ET.indent(root, space="  ")
    try:
        body = ET.tostring(root, encoding="unicode")
    except (TypeError, ValueError) as exc:
        raise ReportFormatError(f"failed to marshal XML: {exc}") from exc
    return FormattedContent(XML_HEADER + body, content_type)


def _iso(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


def format_json(report: ActivityReport) -> FormattedContent:
    content_type = CONTENT_TYPES[ReportFormat.JSON]
    if not report.issues:
        return FormattedContent(EMPTY_JSON, content_type)

    # accountId is deliberately left out of the user block.
    payload = {
        "timeRange": {"start": _iso(report.time_range.start), "end": _iso(report.time_range.end)},
        "user": {"displayName": report.user.display_name, "email": report.user.email},
        "issues": [
            {
                "key": issue.key,
                "status": issue.status,
                "summary": issue.summary,
                "comments": [
                    {"timestamp": _iso(c.timestamp), "author": c.author, "content": c.content}
                    for c in issue.comments
                ],
                "changes": [
                    {
                        "timestamp": _iso(c.timestamp),
                        "author": c.author,
                        "field": c.field,
                        "from": c.from_value,
                        "to": c.to_value,
                    }
                    for c in issue.changes
                ],
            }
            for issue in report.issues
        ],
    }
    try:
        body = json.dumps(payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ReportFormatError(f"failed to marshal JSON: {exc}") from exc
    return FormattedContent(body, content_type)


def format_markdown(report: ActivityReport) -> FormattedContent:
    content_type = CONTENT_TYPES[ReportFormat.MARKDOWN]
    if not report.issues:
        return FormattedContent(NO_ACTIVITY_MESSAGE, content_type)

    tr = report.time_range
    lines = [
        f"# {REPORT_TITLE}\n",
        f"**Time Range:** {tr.start.strftime(DATE_FORMAT)} to {tr.end.strftime(DATE_FORMAT)}\n",
        f"**User:** {report.user.display_name} ({report.user.email})\n",
    ]
    for status, issues in group_by_status(report.issues).items():
        lines.append(f"## {status} Issues\n")
        for issue in issues:
            lines.append(f"### [{issue.key}] {issue.summary}\n")
            if issue.changes:
                lines.append("#### Changes\n")
                lines.append("| Time | Field | From | To |")
                lines.append("|------|-------|------|----|")
                for change in issue.changes:
                    lines.append(
                        f"| {change.timestamp.strftime(MINUTE_FORMAT)} | {change.field} "
                        f"| {change.from_value} | {change.to_value} |"
                    )
                lines.append("")
            if issue.comments:
                lines.append("#### Comments\n")
                for comment in issue.comments:
                    lines.append(f"**{comment.author}** - {comment.timestamp.strftime(MINUTE_FORMAT)}\n")
                    lines.append(f"{comment.content}\n")
            lines.append("---\n")
    return FormattedContent("\n".join(lines) + "\n", content_type)


def format_html(report: ActivityReport) -> FormattedContent:
    content_type = CONTENT_TYPES[ReportFormat.HTML]
    if not report.issues:
        return FormattedContent(EMPTY_HTML, content_type)

    esc = html.escape
    tr = report.time_range
    out = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{REPORT_TITLE}</title>",
        "<style>",
        HTML_STYLE.rstrip("\n"),
        "</style>",
        "</head>",
        "<body>",
        f"<h1>{REPORT_TITLE}</h1>",
        '<div class="metadata">',
        f"<p><strong>Time Range:</strong> {tr.start.strftime(DATE_FORMAT)} to {tr.end.strftime(DATE_FORMAT)}</p>",
        f"<p><strong>User:</strong> {esc(report.user.display_name)} ({esc(report.user.email)})</p>",
        "</div>",
    ]
    for status, issues in group_by_status(report.issues).items():
        out.append(f"<h2>{esc(status)} Issues</h2>")
        for issue in issues:
            out.append('<div class="issue">')
            out.append(
                f'<h3><span class="issue-key">[{esc(issue.key)}]</span> '
                f'<span class="issue-summary">{esc(issue.summary)}</span></h3>'
            )
            if issue.changes:
                out.append('<div class="changes">')
                out.append("<h4>Changes</h4>")
                for change in issue.changes:
                    out.append('<div class="change">')
                    out.append(
                        f'<p><span class="author">{esc(change.author)}</span> changed '
                        f"<strong>{esc(change.field)}</strong> from "
                        f"&quot;{esc(change.from_value)}&quot; to &quot;{esc(change.to_value)}&quot;</p>"
                    )
                    out.append(f'<p class="timestamp">{change.timestamp.strftime(XML_TIME_FORMAT)}</p>')
                    out.append("</div>")
                out.append("</div>")
            if issue.comments:
                out.append('<div class="comments">')
                out.append("<h4>Comments</h4>")
                for comment in issue.comments:
                    out.append('<div class="comment">')
                    out.append(f'<p><span class="author">{esc(comment.author)}</span></p>')
                    out.append(f"<p>{esc(comment.content)}</p>")
                    out.append(f'<p class="timestamp">{comment.timestamp.strftime(XML_TIME_FORMAT)}</p>')
                    out.append("</div>")
                out.append("</div>")
            out.append("</div>")
    out.append("</body>")
    out.append("</html>")
    return FormattedContent("\n".join(out), content_type)


FORMATTERS: dict[ReportFormat, Callable[[ActivityReport], FormattedContent]] = {
    ReportFormat.XML: format_xml,
    ReportFormat.JSON: format_json,
    ReportFormat.MARKDOWN: format_markdown,
    ReportFormat.HTML: format_html,
}


def resolve_format(name: str | ReportFormat | None) -> ReportFormat:
    """Map a format name to ReportFormat; unknown or empty names fall back to JSON."""
    if isinstance(name, ReportFormat):
        return name
    text = (name or "").strip().lower()
    try:
        return ReportFormat(text)
    except ValueError:
        return ReportFormat(DEFAULT_REPORT_FORMAT)


def format_report(report: ActivityReport, fmt: str | ReportFormat | None = None) -> FormattedContent:
    return FORMATTERS[resolve_format(fmt)](report)

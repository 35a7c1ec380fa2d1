from datetime import UTC, datetime

from conftest import ACTOR_ID, raw_comment, raw_history, raw_issue

from jira_activity.core.extract import (
    build_issue,
    comment_text,
    extract_changes,
    extract_comments,
    extract_issues,
    parse_timestamp,
)
from jira_activity.core.models import TimeRange


def test_parse_timestamp_fixed_layout():
    ts = parse_timestamp("2024-09-01T10:30:00.000+0000")
    assert ts == datetime(2024, 9, 1, 10, 30, tzinfo=UTC)
    offset = parse_timestamp("2024-09-01T10:30:00.000-0300")
    assert offset == datetime(2024, 9, 1, 13, 30, tzinfo=UTC)


def test_parse_timestamp_rejects_other_layouts():
    assert parse_timestamp("not a date") is None
    assert parse_timestamp("") is None
    assert parse_timestamp(None) is None
    assert parse_timestamp("2024-09-01T10:30:00.000Z") is None
    assert parse_timestamp("2024-09-01T10:30:00.000+00:00") is None
    assert parse_timestamp("2024-09-01T10:30:00.000000+0000") is None
    assert parse_timestamp("2024-09-01T10:30:00+0000") is None


def test_comments_filtered_to_window_in_input_order(window):
    comments = [
        raw_comment("2024-09-02T09:00:00.000+0000", body="second day"),
        raw_comment("2024-08-31T23:59:59.000+0000", body="before"),
        raw_comment("2024-09-01T00:00:00.000+0000", body="at start"),
        raw_comment("2024-09-03T00:00:00.000+0000", body="at end"),
    ]
    out = extract_comments(comments, window)
    assert [c.content for c in out] == ["second day", "at start"]
    assert out[0].author == "Bob"


def test_comment_author_is_ignored(window):
    out = extract_comments([raw_comment("2024-09-01T10:00:00.000+0000", author="Someone Else")], window)
    assert len(out) == 1 and out[0].author == "Someone Else"


def test_unparseable_timestamps_are_dropped(window):
    comments = [raw_comment("garbage"), raw_comment("2024-09-01T10:00:00.000+0000", body="ok")]
    histories = [raw_history("2024-09-01"), raw_history("2024-09-01T11:00:00.000+0000")]
    assert [c.content for c in extract_comments(comments, window)] == ["ok"]
    assert len(extract_changes(histories, window, ACTOR_ID)) == 1


def test_changes_require_matching_actor(window):
    histories = [
        raw_history("2024-09-01T10:00:00.000+0000", account_id="someone-else"),
        raw_history("2024-09-01T11:00:00.000+0000"),
    ]
    out = extract_changes(histories, window, ACTOR_ID)
    assert len(out) == 1
    assert out[0].timestamp == datetime(2024, 9, 1, 11, tzinfo=UTC)
    assert (out[0].field, out[0].from_value, out[0].to_value) == ("status", "To Do", "In Progress")
    assert out[0].author == "Test User"


def test_history_items_share_entry_timestamp(window):
    items = [
        {"field": "status", "fromString": "To Do", "toString": "Done"},
        {"field": "resolution", "fromString": None, "toString": "Fixed"},
    ]
    out = extract_changes([raw_history("2024-09-02T08:00:00.000+0000", items=items)], window, ACTOR_ID)
    assert [c.field for c in out] == ["status", "resolution"]
    assert out[1].from_value == ""
    assert out[0].timestamp == out[1].timestamp


def test_out_of_window_activity_yields_empty_lists(window):
    issue = build_issue(
        raw_issue(
            "OLD-1",
            comments=[raw_comment("2024-08-01T10:00:00.000+0000")],
            histories=[raw_history("2024-10-01T10:00:00.000+0000")],
        ),
        window,
        ACTOR_ID,
    )
    assert issue.comments == []
    assert issue.changes == []


def test_issue_without_comment_or_changelog_blocks(window):
    issue = build_issue({"key": "BARE-1", "fields": {"summary": "s", "status": {"name": "Open"}}}, window, ACTOR_ID)
    assert issue.key == "BARE-1" and issue.status == "Open"
    assert issue.comments == [] and issue.changes == []


def test_issues_without_activity_are_kept(window):
    raws = [raw_issue("A-1"), raw_issue("A-2", comments=[raw_comment("2024-09-01T10:00:00.000+0000")])]
    issues = extract_issues(raws, window, ACTOR_ID)
    assert [i.key for i in issues] == ["A-1", "A-2"]


def test_large_batches_keep_every_item(window):
    comments = [raw_comment(f"2024-09-01T{h:02d}:00:00.000+0000", body=str(h)) for h in range(12)]
    histories = [raw_history(f"2024-09-02T{h:02d}:00:00.000+0000") for h in range(8)]
    assert sorted(int(c.content) for c in extract_comments(comments, window)) == list(range(12))
    assert len(extract_changes(histories, window, ACTOR_ID)) == 8


def test_fan_out_issue_keys_match_input(window):
    raws = [raw_issue(f"FAN-{i}") for i in range(20)]
    issues = extract_issues(raws, window, ACTOR_ID)
    keys = [i.key for i in issues]
    assert len(keys) == 20
    assert set(keys) == {f"FAN-{i}" for i in range(20)}


def test_comment_text_flattens_document_bodies():
    adf = {
        "type": "doc",
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": "Hello "}, {"type": "text", "text": "there"}]},
            {"type": "paragraph", "content": [{"type": "text", "text": "Second line"}]},
        ],
    }
    assert comment_text(adf) == "Hello there\nSecond line"
    assert comment_text("plain") == "plain"
    assert comment_text(None) == ""


def test_naive_window_bounds_compare_with_parsed_timestamps():
    naive = TimeRange(start=datetime(2024, 9, 1), end=datetime(2024, 9, 3))
    raw = [raw_issue("N-1", comments=[raw_comment("2024-09-01T10:00:00.000+0000")])]
    issues = extract_issues(raw, naive, ACTOR_ID)
    assert [c.content for c in issues[0].comments] == ["Looks good"]

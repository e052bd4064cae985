"""Tests for REST payload conversion and grouping."""

from datetime import datetime, timedelta, timezone

import pytest

from gh_report.adapters.sources.rest import (
    categorize,
    group_by_repo,
    issue_from_rest,
    parse_timestamp,
    repo_from_url,
)
from gh_report.core import IssueState


def _payload(**overrides) -> dict:
    payload = {
        "number": 42,
        "title": "Crash on startup",
        "body": "Steps to reproduce",
        "state": "open",
        "user": {"login": "octocat"},
        "labels": [{"name": "bug", "color": "d73a4a", "description": "Something is broken"}],
        "comments": 3,
        "created_at": "2025-05-30T10:00:00Z",
        "updated_at": "2025-06-01T09:30:00Z",
        "html_url": "https://github.com/acme/app/issues/42",
    }
    payload.update(overrides)
    return payload


def test_issue_from_rest() -> None:
    """Test converting a REST issue object."""
    issue = issue_from_rest(_payload())
    
    assert issue.number == 42
    assert issue.title == "Crash on startup"
    assert issue.body == "Steps to reproduce"
    assert issue.state == IssueState.OPEN
    assert issue.author == "octocat"
    assert issue.label_names == ["bug"]
    assert issue.labels[0].color == "d73a4a"
    assert issue.comment_count == 3
    assert not issue.is_pull_request
    assert issue.repository == "acme/app"
    assert issue.updated_at == datetime(2025, 6, 1, 9, 30, tzinfo=timezone.utc)


def test_issue_from_rest_pull_request_states() -> None:
    """Test PR detection and merged state."""
    merged = issue_from_rest(_payload(state="closed", pull_request={"merged_at": "2025-06-01T00:00:00Z"}))
    closed = issue_from_rest(_payload(state="closed", pull_request={"merged_at": None}))
    closed_issue = issue_from_rest(_payload(state="closed"))
    
    assert merged.is_pull_request
    assert merged.state == IssueState.MERGED
    assert closed.state == IssueState.CLOSED
    assert closed_issue.state == IssueState.CLOSED
    assert not closed_issue.is_pull_request


def test_issue_from_rest_explicit_repository() -> None:
    """Test explicit repository wins over URL."""
    issue = issue_from_rest(_payload(body=None, labels=None, comments=None), "acme/other")
    
    assert issue.repository == "acme/other"
    assert issue.body is None
    assert issue.labels == ()
    assert issue.comment_count == 0


def test_issue_from_rest_missing_field() -> None:
    """Test missing required fields raise."""
    payload = _payload()
    del payload["title"]
    
    with pytest.raises(KeyError):
        issue_from_rest(payload)


def test_repo_from_url() -> None:
    """Test extracting owner/repo from URLs."""
    assert repo_from_url("https://github.com/acme/app/issues/1") == "acme/app"
    assert repo_from_url("https://github.com/acme/app/pull/2") == "acme/app"
    assert repo_from_url("https://github.com/acme") is None
    assert repo_from_url("https://example.com/acme/app/issues/1") is None


def test_parse_timestamp() -> None:
    """Test parsing GitHub timestamps."""
    assert parse_timestamp("2025-01-02T03:04:05Z") == datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_parse_timestamp_without_offset() -> None:
    """Test timestamps without offset are taken as UTC."""
    parsed = parse_timestamp("2025-06-01T10:00:00")
    
    assert parsed == datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc)
    assert parsed.tzinfo is not None


def test_parse_timestamp_rejects_non_string() -> None:
    """Test missing timestamps raise ValueError."""
    with pytest.raises(ValueError):
        parse_timestamp(None)


def test_categorize(make_issue, now) -> None:
    """Test splitting into new and updated issues and PRs."""
    new_issue = make_issue(number=1, created_at=now - timedelta(hours=2))
    old_issue = make_issue(number=2, created_at=now - timedelta(days=3))
    new_closed = make_issue(number=3, created_at=now - timedelta(hours=1), state=IssueState.CLOSED)
    new_pr = make_issue(number=4, is_pull_request=True, created_at=now - timedelta(hours=23))
    merged_pr = make_issue(number=5, is_pull_request=True, state=IssueState.MERGED)
    
    activity = categorize([new_issue, old_issue, new_closed, new_pr, merged_pr], now)
    
    assert [i.number for i in activity.new_issues] == [1]
    assert [i.number for i in activity.updated_issues] == [2, 3]
    assert [i.number for i in activity.new_prs] == [4]
    assert [i.number for i in activity.updated_prs] == [5]


def test_group_by_repo(make_issue, now) -> None:
    """Test grouping by repository in name order."""
    issues = [
        make_issue(number=1, repository="b/repo"),
        make_issue(number=2, repository="a/repo"),
        make_issue(number=3, repository="b/repo", is_pull_request=True),
    ]
    
    grouped = group_by_repo(issues, now)
    
    assert list(grouped) == ["a/repo", "b/repo"]
    assert [i.number for i in grouped["b/repo"].new_issues] == [1]
    assert [i.number for i in grouped["b/repo"].new_prs] == [3]

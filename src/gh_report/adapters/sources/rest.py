"""Conversion of GitHub REST issue payloads into domain entities."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from gh_report.core import Issue, IssueState, Label, RepoActivity

NEW_ITEM_WINDOW = timedelta(hours=24)


def parse_timestamp(value: str) -> datetime:
    """Parse GitHub ISO 8601 timestamp (``2024-01-02T03:04:05Z``).

    Timestamps without an offset are taken as UTC.
    """
    if not isinstance(value, str):
        raise ValueError(f"Invalid timestamp: {value!r}")

    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def repo_from_url(url: str) -> Optional[str]:
    """Extract ``owner/repo`` from a github.com issue or PR URL."""
    prefix = "https://github.com/"
    if not url.startswith(prefix):
        return None

    parts = url[len(prefix):].split("/")
    if len(parts) >= 2 and parts[0] and parts[1]:
        return f"{parts[0]}/{parts[1]}"
    return None


def _state(payload: dict) -> IssueState:
    if payload.get("state") == "open":
        return IssueState.OPEN
    pull_request = payload.get("pull_request") or {}
    if pull_request.get("merged_at"):
        return IssueState.MERGED
    return IssueState.CLOSED


def issue_from_rest(payload: dict, repository: Optional[str] = None) -> Issue:
    """Create issue from a REST API issue object.

    Args:
        payload: Issue object as returned by ``GET /repos/{repo}/issues``
        repository: Owning repository; derived from the URL when omitted

    Raises:
        KeyError: If a required field is missing
        ValueError: If a field has an invalid value
    """
    url = payload["html_url"]
    repository = repository or repo_from_url(url) or "unknown"

    labels = tuple(
        Label(
            name=label["name"],
            color=label.get("color"),
            description=label.get("description"),
        )
        for label in payload.get("labels") or []
    )

    return Issue(
        number=int(payload["number"]),
        title=payload["title"],
        body=payload.get("body"),
        state=_state(payload),
        author=(payload.get("user") or {}).get("login", "ghost"),
        labels=labels,
        created_at=parse_timestamp(payload["created_at"]),
        updated_at=parse_timestamp(payload["updated_at"]),
        comment_count=int(payload.get("comments") or 0),
        is_pull_request="pull_request" in payload,
        url=url,
        repository=repository,
    )


def categorize(issues: list[Issue], now: datetime) -> RepoActivity:
    """Split issues into new/updated issues and PRs.

    Open items created within the last 24 hours are new; everything else,
    including closed and merged items, counts as updated.
    """
    activity = RepoActivity()

    for issue in issues:
        is_new = issue.state == IssueState.OPEN and now - issue.created_at < NEW_ITEM_WINDOW
        if issue.is_pull_request:
            target = activity.new_prs if is_new else activity.updated_prs
        else:
            target = activity.new_issues if is_new else activity.updated_issues
        target.append(issue)

    return activity


def group_by_repo(issues: list[Issue], now: datetime) -> dict[str, RepoActivity]:
    """Group issues by repository and categorize each group."""
    grouped: dict[str, list[Issue]] = {}
    for issue in issues:
        grouped.setdefault(issue.repository, []).append(issue)

    return {repo: categorize(items, now) for repo, items in sorted(grouped.items())}

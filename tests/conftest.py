"""Shared fixtures."""

from datetime import datetime, timezone
from typing import Callable

import pytest

from gh_report.core import Issue, IssueState, Label

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time."""
    return NOW


@pytest.fixture
def make_issue() -> Callable[..., Issue]:
    """Factory for issues with sensible defaults."""
    def _make(
        number: int = 1,
        title: str = "Test issue",
        body: str | None = None,
        labels: tuple[str, ...] = (),
        comments: int = 0,
        is_pull_request: bool = False,
        state: IssueState = IssueState.OPEN,
        updated_at: datetime = NOW,
        created_at: datetime = NOW,
        repository: str = "test/repo",
    ) -> Issue:
        kind = "pull" if is_pull_request else "issues"
        return Issue(
            number=number,
            title=title,
            body=body,
            state=state,
            author="user",
            labels=tuple(Label(name=name) for name in labels),
            created_at=created_at,
            updated_at=updated_at,
            comment_count=comments,
            is_pull_request=is_pull_request,
            url=f"https://github.com/{repository}/{kind}/{number}",
            repository=repository,
        )

    return _make

"""Activity source backed by a JSON export of GitHub issues."""

import json
from datetime import datetime
from pathlib import Path

from gh_report.adapters.sources.rest import group_by_repo, issue_from_rest
from gh_report.core import ActivitySource, Issue, RepoActivity


class JsonFileSource(ActivitySource):
    """Read REST issue objects from a JSON file.

    The file holds a JSON array such as the output of
    ``gh api repos/{owner}/{repo}/issues``; repositories are derived from
    each item's ``html_url``.
    """

    emoji = "📁"
    name = "JSON file"

    def __init__(self, path: Path) -> None:
        self.path = path

    async def fetch_activity(
        self, repos: list[str], since: datetime, now: datetime
    ) -> dict[str, RepoActivity]:
        """Load activity from file, keeping items updated since given time.

        Args:
            repos: Repositories to keep (empty list keeps all)
            since: Drop items last updated before this time
            now: Reference time for new/updated categorization
        """
        payloads = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(payloads, list):
            raise ValueError(f"{self.path} must contain a JSON array of issues")

        issues: list[Issue] = []
        for payload in payloads:
            try:
                issue = issue_from_rest(payload)
            except (KeyError, TypeError, ValueError) as e:
                print(f"  └─ ⚠️  Skipping malformed item: {e}")
                continue

            if issue.updated_at < since:
                continue
            if repos and issue.repository not in repos:
                continue
            issues.append(issue)

        print(f"  └─ Loaded {len(issues)} items from {self.path}")
        return group_by_repo(issues, now)

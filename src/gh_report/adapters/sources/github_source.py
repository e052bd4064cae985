"""GitHub source for collecting issue and PR activity of repositories."""

import asyncio
from datetime import datetime
from typing import Optional

import httpx

from gh_report.adapters.sources.rest import categorize, issue_from_rest
from gh_report.core import ActivitySource, Issue, RepoActivity


class GitHubSource(ActivitySource):
    """Fetch recently updated issues and PRs via the GitHub REST API."""

    emoji = "🐙"
    name = "GitHub"

    def __init__(
        self,
        token: Optional[str] = None,
        api_base: str = "https://api.github.com",
        max_items: int = 100,
        request_delay: float = 1.0,
        timeout: float = 30.0,
    ) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.max_items = max_items
        self.request_delay = request_delay
        self.timeout = timeout

    async def fetch_activity(
        self, repos: list[str], since: datetime, now: datetime
    ) -> dict[str, RepoActivity]:
        """Fetch activity for each repository since given time."""
        activities: dict[str, RepoActivity] = {}

        print(f"  └─ Since: {since.isoformat()}")
        if not self.token:
            print("  └─ ⚠️  No GitHub token (rate limit: 60 requests/hour)")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            headers = self._get_headers()

            for i, repo in enumerate(repos):
                if i > 0:  # Delay after first request
                    await self._rate_limit_delay()

                issues = await self._fetch_repo_issues(client, headers, repo, since)
                activities[repo] = categorize(issues, now)
                if issues:
                    print(f"  └─ {repo}: {len(issues)} items")

        return activities

    async def _fetch_repo_issues(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str],
        repo: str,
        since: datetime,
    ) -> list[Issue]:
        """Fetch issues and PRs of one repository updated since given time."""
        issues: list[Issue] = []

        try:
            response = await client.get(
                f"{self.api_base}/repos/{repo}/issues",
                headers=headers,
                params={
                    "state": "all",
                    "since": since.isoformat(),
                    "sort": "updated",
                    "direction": "desc",
                    "per_page": min(self.max_items, 100),
                },
            )

            if response.status_code != 200:
                print(f"  └─ ⚠️  GitHub API error: {response.status_code} for {repo}")
                if response.status_code == 403:
                    print("      Rate limit exceeded or authentication required")
                elif response.status_code == 404:
                    print("      Repository not found or not accessible")
                return issues

            data = response.json()
            if not isinstance(data, list):
                print(f"  └─ ⚠️  Unexpected response for {repo}: expected a list of issues")
                return issues

            for payload in data:
                try:
                    issues.append(issue_from_rest(payload, repo))
                except (KeyError, TypeError, ValueError) as e:
                    print(f"      ⚠️  Skipping malformed item in {repo}: {e}")

        except httpx.HTTPError as e:
            print(f"  └─ ❌ Error fetching {repo}: {e}")
        except ValueError as e:
            print(f"  └─ ❌ Invalid JSON from {repo}: {e}")

        return issues[:self.max_items]

    async def _rate_limit_delay(self) -> None:
        """Apply delay between repository requests."""
        if self.request_delay > 0:
            await asyncio.sleep(self.request_delay)

    def _get_headers(self) -> dict[str, str]:
        """Get headers for GitHub API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        return headers

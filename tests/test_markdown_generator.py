"""Tests for markdown report generator."""

from datetime import date

import pytest

from gh_report.adapters.report import MarkdownReportGenerator
from gh_report.core import (
    ActionItem,
    AnalysisResult,
    Importance,
    MatchedRule,
    PrioritizedIssue,
    PriorityScore,
    RepoActivity,
    Urgency,
)


@pytest.mark.asyncio
async def test_generate_report(make_issue) -> None:
    """Test report with action items, prioritized items and activity."""
    issue = make_issue(number=42, title="Security hole", repository="acme/auth")
    pr = make_issue(number=7, title="Add cache", is_pull_request=True, repository="acme/auth")
    activities = {
        "acme/auth": RepoActivity(new_issues=[issue], updated_prs=[pr]),
        "acme/quiet": RepoActivity(),
    }
    analysis = AnalysisResult(
        prioritized_issues=[
            PrioritizedIssue(
                issue=issue,
                repo="acme/auth",
                score=PriorityScore(total=110),
                matched_rules=[MatchedRule("security_issues", "security", 1.0)],
                importance=Importance.HIGH,
            )
        ],
        action_items=[
            ActionItem(
                description="Review and address security issue #42",
                urgency=Urgency.CRITICAL,
                reason="Security concern",
                issue=issue,
                repo="acme/auth",
            )
        ],
    )
    
    report = await MarkdownReportGenerator().generate(activities, analysis, date(2025, 6, 1))
    
    assert report.startswith("# GitHub Activity Report - 2025-06-01")
    assert "1. 🔴 Review and address security issue #42 - Security concern" in report
    assert "**[acme/auth]** Issue [#42](https://github.com/acme/auth/issues/42)" in report
    assert "(Score: 110, Critical)" in report
    assert "- **acme/auth**: 1 new issues, 1 updated PRs" in report
    assert "acme/quiet" not in report
    assert "No Activity" not in report


@pytest.mark.asyncio
async def test_generate_empty_report() -> None:
    """Test report without any activity."""
    report = await MarkdownReportGenerator().generate({}, AnalysisResult(), date(2025, 6, 1))
    
    assert "## 📭 No Activity" in report
    assert "Action Items" not in report
    assert "Prioritized Items" not in report

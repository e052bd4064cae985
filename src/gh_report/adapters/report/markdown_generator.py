"""Markdown report generator."""

from datetime import date

from gh_report.core import AnalysisResult, RepoActivity, ReportGenerator, Urgency
from gh_report.core.scoring import classify

URGENCY_MARKERS = {
    Urgency.CRITICAL: "🔴",
    Urgency.HIGH: "🟠",
    Urgency.MEDIUM: "🟡",
    Urgency.LOW: "🟢",
}

MAX_PRIORITIZED_ITEMS = 10


class MarkdownReportGenerator(ReportGenerator):
    """Generate markdown report from analysis results."""

    async def generate(
        self,
        activities: dict[str, RepoActivity],
        analysis: AnalysisResult,
        report_date: date,
    ) -> str:
        """Generate markdown report."""
        lines = [
            f"# GitHub Activity Report - {report_date.isoformat()}",
            "",
        ]

        if analysis.action_items:
            lines.extend([
                "## 🎯 Action Items",
                "",
            ])
            for i, action in enumerate(analysis.action_items, 1):
                marker = URGENCY_MARKERS[action.urgency]
                lines.append(f"{i}. {marker} {action.description} - {action.reason}")
            lines.append("")

        active = {repo: a for repo, a in activities.items() if not a.is_empty()}
        if not active:
            lines.extend([
                "## 📭 No Activity",
                "",
                "No issues or pull requests were updated in the specified time period.",
                "",
            ])
            return "\n".join(lines)

        if analysis.prioritized_issues:
            lines.extend([
                "## 🔥 Prioritized Items",
                "",
            ])
            for prioritized in analysis.prioritized_issues[:MAX_PRIORITIZED_ITEMS]:
                issue = prioritized.issue
                kind = "PR" if issue.is_pull_request else "Issue"
                priority = classify(prioritized.score.total).name.capitalize()
                lines.append(
                    f"- **[{prioritized.repo}]** {kind} [#{issue.number}]({issue.url}) - "
                    f"{issue.title} (Score: {prioritized.score.total}, {priority})"
                )
            lines.append("")

        lines.extend([
            "## 📊 Repository Activity",
            "",
        ])
        for repo in sorted(active):
            lines.extend(self._format_repo(repo, active[repo]))

        return "\n".join(lines)

    def _format_repo(self, repo: str, activity: RepoActivity) -> list[str]:
        """Format activity counts of a single repository."""
        counts = [
            ("new issues", len(activity.new_issues)),
            ("updated issues", len(activity.updated_issues)),
            ("new PRs", len(activity.new_prs)),
            ("updated PRs", len(activity.updated_prs)),
        ]
        parts = [f"{count} {label}" for label, count in counts if count]
        return [f"- **{repo}**: {', '.join(parts)}"]

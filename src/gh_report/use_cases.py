"""Business logic use cases."""

from datetime import date, datetime
from pathlib import Path

from gh_report.core import (
    ActivitySource,
    AnalysisResult,
    IntelligentAnalyzer,
    RepoActivity,
    ReportGenerator,
)


class ReportService:
    """Service for collecting, analyzing and reporting GitHub activity."""

    def __init__(
        self,
        source: ActivitySource,
        analyzer: IntelligentAnalyzer,
        report_generator: ReportGenerator,
        repos: list[str],
    ) -> None:
        self.source = source
        self.analyzer = analyzer
        self.report_generator = report_generator
        self.repos = repos

    async def collect(self, since: datetime, now: datetime) -> dict[str, RepoActivity]:
        """Collect activity of configured repositories."""
        print("\n" + "=" * 70)
        print("📥 STAGE 1: COLLECTING ACTIVITY")
        print("=" * 70)

        emoji = getattr(self.source, "emoji", "🔍")
        name = getattr(self.source, "name", self.source.__class__.__name__)
        print(f"\n{emoji} Source: {name}")

        activities = await self.source.fetch_activity(self.repos, since, now)

        total = sum(len(list(a.all_items())) for a in activities.values())
        print(f"\n✓ Collected {total} items from {len(activities)} repositories")

        return activities

    def analyze(self, activities: dict[str, RepoActivity], now: datetime) -> AnalysisResult:
        """Prioritize collected activity."""
        print("\n" + "=" * 70)
        print("🔍 STAGE 2: PRIORITIZATION")
        print("=" * 70)

        analysis = self.analyzer.analyze(activities, now)

        print(f"✓ Matched watch rules: {len(analysis.prioritized_issues)} items")
        print(f"✓ Action items: {len(analysis.action_items)}")

        for prioritized in analysis.prioritized_issues[:5]:
            rules = ", ".join(m.rule_type for m in prioritized.matched_rules)
            print(
                f"  • [{prioritized.score.total}] {prioritized.repo}#{prioritized.issue.number} "
                f"{prioritized.issue.title[:60]}"
            )
            print(f"     └─ {rules}")

        return analysis

    async def generate_report(
        self,
        activities: dict[str, RepoActivity],
        analysis: AnalysisResult,
        report_date: date,
    ) -> str:
        """Render report from analysis."""
        print("\n" + "=" * 70)
        print("📝 STAGE 3: REPORT GENERATION")
        print("=" * 70)

        return await self.report_generator.generate(activities, analysis, report_date)

    def save_report(self, report: str, output_path: Path) -> None:
        """Save report to file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report, encoding="utf-8")
        print(f"Report saved to {output_path}")

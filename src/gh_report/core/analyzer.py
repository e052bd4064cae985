"""Analysis of collected GitHub activity."""

from datetime import datetime
from typing import Optional

from gh_report.core.actions import build_context_prompt, extract_action_items
from gh_report.core.entities import (
    AnalysisResult,
    MatchedRule,
    PrioritizedIssue,
    RepoActivity,
    RepoProfile,
    WatchRules,
)
from gh_report.core.scoring import calculate_priority_score
from gh_report.core.watch_rules import WatchRuleEngine


class IntelligentAnalyzer:
    """Filter, score and rank issues across repositories.

    Watch rules and repository profiles are injected; repositories without
    a profile fall back to ``RepoProfile()`` (medium importance, no rules).
    """

    def __init__(
        self,
        watch_rules: WatchRules,
        repo_profiles: Optional[dict[str, RepoProfile]] = None,
    ) -> None:
        self.engine = WatchRuleEngine(watch_rules)
        self.repo_profiles = repo_profiles or {}

    def profile_for(self, repo_name: str) -> RepoProfile:
        return self.repo_profiles.get(repo_name) or RepoProfile()

    def analyze_repo(
        self, repo_name: str, activity: RepoActivity, now: datetime
    ) -> tuple[list[PrioritizedIssue], list[MatchedRule]]:
        """Analyze one repository.

        Returns:
            Tuple of (prioritized issues in candidate order, all matches)
        """
        profile = self.profile_for(repo_name)
        prioritized: list[PrioritizedIssue] = []
        repo_matches: list[MatchedRule] = []

        for issue in activity.all_items():
            matches = self.engine.match_issue(issue, profile.watch_rules)
            if not matches:
                continue

            score = calculate_priority_score(
                issue, profile.importance, matches, issue.is_pull_request, now
            )
            prioritized.append(
                PrioritizedIssue(
                    issue=issue,
                    repo=repo_name,
                    score=score,
                    matched_rules=matches,
                    importance=profile.importance,
                    context=profile.context,
                )
            )
            repo_matches.extend(matches)

        return prioritized, repo_matches

    def analyze(self, activities: dict[str, RepoActivity], now: datetime) -> AnalysisResult:
        """Analyze activities and return prioritized, filtered results."""
        result = AnalysisResult()
        contexts: dict[str, str] = {}

        # Sorted so that results do not depend on mapping order
        for repo_name in sorted(activities):
            profile = self.profile_for(repo_name)
            result.repo_importances[repo_name] = profile.importance
            if profile.context:
                contexts[repo_name] = profile.context

            prioritized, matches = self.analyze_repo(repo_name, activities[repo_name], now)
            result.prioritized_issues.extend(prioritized)
            if matches:
                result.matched_rules.setdefault(repo_name, []).extend(matches)

        # Highest score first; ties keep collection order
        result.prioritized_issues.sort(key=lambda p: p.score.total, reverse=True)

        result.context_prompt = build_context_prompt(result.repo_importances, contexts)
        result.action_items = extract_action_items(result.prioritized_issues)
        return result


def analyze(
    activities: dict[str, RepoActivity],
    watch_rules: WatchRules,
    repo_profiles: dict[str, RepoProfile],
    now: datetime,
) -> AnalysisResult:
    """Run a one-off analysis with the given rules and profiles."""
    return IntelligentAnalyzer(watch_rules, repo_profiles).analyze(activities, now)

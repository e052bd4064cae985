"""Urgency classification, action items and summarization context."""

from typing import Optional

from gh_report.core.entities import (
    ActionItem,
    Importance,
    Issue,
    MatchedRule,
    PrioritizedIssue,
    Urgency,
)

MAX_ACTION_ITEMS = 10
BUSY_DISCUSSION_COMMENTS = 10
MAX_TITLE_LENGTH = 60

RULE_REASONS: dict[str, str] = {
    "security_issues": "Security concern",
    "breaking_changes": "Breaking change",
    "review_requests": "Review requested",
    "api_changes": "API change",
    "performance": "Performance impact",
}

IMPORTANCE_REASONS: dict[Importance, str] = {
    Importance.CRITICAL: "Critical repository",
    Importance.HIGH: "High priority repository",
}

SUMMARIZATION_GUIDELINES = """## Summarization Guidelines

When summarizing GitHub activity:
1. Prioritize security issues, breaking changes, and critical bugs first
2. Highlight pull requests that need review
3. Group related items together for clarity
4. For each high-priority item, explain why it matters
5. Suggest specific actions when appropriate
6. Keep summaries concise but informative
"""


def determine_urgency(prioritized: PrioritizedIssue) -> Urgency:
    """Determine urgency from matched rules, importance and score."""
    total = prioritized.score.total

    if prioritized.has_rule("security_issues"):
        return Urgency.CRITICAL
    if prioritized.importance == Importance.CRITICAL and total > 80:
        return Urgency.CRITICAL

    if prioritized.has_rule("breaking_changes", "review_requests"):
        return Urgency.HIGH
    if total > 60:
        return Urgency.HIGH

    if total > 30:
        return Urgency.MEDIUM

    return Urgency.LOW


def _link(issue: Issue) -> str:
    title = issue.title
    if len(title) > MAX_TITLE_LENGTH:
        title = f"{title[:MAX_TITLE_LENGTH - 3]}..."
    return f"[{title}]({issue.url})"


def generate_action(issue: Issue, matched_rules: list[MatchedRule]) -> Optional[str]:
    """Suggest an action for an issue, or None if nothing stands out."""
    rule_types = {m.rule_type for m in matched_rules}
    kind = issue.kind

    if "security_issues" in rule_types:
        action = f"Review and address security {kind} #{issue.number}"
    elif "review_requests" in rule_types:
        action = f"Review PR #{issue.number}"
    elif "breaking_changes" in rule_types:
        action = f"Review breaking change in {kind} #{issue.number}"
    elif issue.comment_count > BUSY_DISCUSSION_COMMENTS:
        action = f"Check active discussion on {kind} #{issue.number}"
    elif issue.is_pull_request:
        action = f"Review PR #{issue.number}"
    elif any("bug" in name.lower() or "urgent" in name.lower() for name in issue.label_names):
        action = f"Address issue #{issue.number}"
    else:
        return None

    return f"{action}: {_link(issue)}"


def generate_reason(prioritized: PrioritizedIssue) -> str:
    """Explain why an item needs attention."""
    reasons = [
        RULE_REASONS[m.rule_type]
        for m in prioritized.matched_rules
        if m.rule_type in RULE_REASONS
    ]

    importance_reason = IMPORTANCE_REASONS.get(prioritized.importance)
    if importance_reason:
        reasons.append(importance_reason)

    comments = prioritized.issue.comment_count
    if comments > BUSY_DISCUSSION_COMMENTS:
        reasons.append(f"{comments} comments")

    return ", ".join(reasons) if reasons else "Requires attention"


def extract_action_items(prioritized_issues: list[PrioritizedIssue]) -> list[ActionItem]:
    """Build up to ten action items, most urgent first.

    Items of equal urgency keep their input order.
    """
    action_items: list[ActionItem] = []

    for prioritized in prioritized_issues:
        description = generate_action(prioritized.issue, prioritized.matched_rules)
        if description is None:
            continue

        action_items.append(
            ActionItem(
                description=description,
                urgency=determine_urgency(prioritized),
                reason=generate_reason(prioritized),
                issue=prioritized.issue,
                repo=prioritized.repo,
            )
        )

    action_items.sort(key=lambda item: item.urgency, reverse=True)
    return action_items[:MAX_ACTION_ITEMS]


def build_context_prompt(
    repo_importances: dict[str, Importance],
    repo_contexts: Optional[dict[str, str]] = None,
) -> str:
    """Build extra instructions for the summarizer.

    Repositories are listed under their importance tier, highest first,
    with their configured context note if any.
    """
    repo_contexts = repo_contexts or {}
    lines = [SUMMARIZATION_GUIDELINES]

    if repo_importances:
        lines.append("## Repository Priorities")
        lines.append("")
        for tier in sorted(Importance, reverse=True):
            repos = sorted(name for name, imp in repo_importances.items() if imp == tier)
            if not repos:
                continue
            lines.append(f"### {tier.name.capitalize()}")
            for repo in repos:
                context = repo_contexts.get(repo)
                lines.append(f"- {repo}: {context}" if context else f"- {repo}")
            lines.append("")

    return "\n".join(lines)

"""Priority scoring for issues and pull requests."""

from datetime import datetime

from gh_report.core.entities import Importance, Issue, MatchedRule, Priority, PriorityScore

IMPORTANCE_POINTS: dict[Importance, int] = {
    Importance.CRITICAL: 40,
    Importance.HIGH: 30,
    Importance.MEDIUM: 20,
    Importance.LOW: 10,
}

# (max age in hours, points), checked in order
RECENCY_BUCKETS: list[tuple[int, int]] = [
    (6, 30),
    (24, 25),
    (72, 20),
    (168, 15),
    (336, 10),
]
STALE_POINTS = 5

MAX_COUNTED_COMMENTS = 10
POINTS_PER_COMMENT = 2

RULE_POINTS: dict[str, int] = {
    "security_issues": 30,
    "breaking_changes": 25,
    "api_changes": 20,
    "review_requests": 15,
    "performance": 15,
    "mentions": 10,
}
DEFAULT_RULE_POINTS = 5

# (label substrings, points), first hit wins
LABEL_POINTS: list[tuple[tuple[str, ...], int]] = [
    (("security", "critical"), 20),
    (("bug", "urgent"), 15),
    (("feature", "enhancement"), 10),
    (("documentation", "test"), 5),
]
DEFAULT_LABEL_POINTS = 2

PR_BONUS = 10


def age_in_hours(updated_at: datetime, now: datetime) -> int:
    """Whole hours since the last update, never less than 1."""
    hours = int((now - updated_at).total_seconds() // 3600)
    return max(1, hours)


def recency_points(age_hours: int) -> int:
    for max_age, points in RECENCY_BUCKETS:
        if age_hours <= max_age:
            return points
    return STALE_POINTS


def rule_points(rule_type: str) -> int:
    """Points for a matched rule; unknown rule names get the default."""
    return RULE_POINTS.get(rule_type, DEFAULT_RULE_POINTS)


def label_points(label_name: str) -> int:
    name = label_name.lower()
    for needles, points in LABEL_POINTS:
        if any(needle in name for needle in needles):
            return points
    return DEFAULT_LABEL_POINTS


def calculate_priority_score(
    issue: Issue,
    repo_importance: Importance,
    matched_rules: list[MatchedRule],
    is_pull_request: bool,
    now: datetime,
) -> PriorityScore:
    """Calculate the additive priority score for an issue.

    Args:
        issue: Issue or PR to score
        repo_importance: Importance tier of the owning repository
        matched_rules: Watch rules the issue matched (may be empty)
        is_pull_request: Whether to add the PR bonus
        now: Reference time for recency

    Returns:
        Score with one field per factor; ``total`` also includes the PR bonus
    """
    score = PriorityScore(
        importance_score=IMPORTANCE_POINTS[repo_importance],
        recency_score=recency_points(age_in_hours(issue.updated_at, now)),
        activity_score=min(issue.comment_count, MAX_COUNTED_COMMENTS) * POINTS_PER_COMMENT,
        rule_match_score=max((rule_points(m.rule_type) for m in matched_rules), default=0),
        label_score=max((label_points(label.name) for label in issue.labels), default=0),
        pr_bonus=PR_BONUS if is_pull_request else 0,
    )

    score.total = (
        score.importance_score
        + score.recency_score
        + score.activity_score
        + score.rule_match_score
        + score.label_score
        + score.pr_bonus
    )
    return score


def classify(total: int) -> Priority:
    """Map a score total to a coarse priority label."""
    if total <= 30:
        return Priority.LOW
    if total <= 60:
        return Priority.MEDIUM
    if total <= 90:
        return Priority.HIGH
    return Priority.CRITICAL

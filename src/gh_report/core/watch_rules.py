"""Watch rule matching for issues and repositories."""

from gh_report.core.entities import Issue, MatchedRule, WatchRules

ALL_ACTIVITY = "all_activity"
SECURITY_ISSUES = "security_issues"
BREAKING_CHANGES = "breaking_changes"
REPO_PATTERN = "repo_pattern"

# Built-in label heuristics: rule name -> label substrings
LABEL_HEURISTICS: dict[str, tuple[str, ...]] = {
    SECURITY_ISSUES: ("security", "vulnerability"),
    BREAKING_CHANGES: ("breaking", "major"),
}

PATTERN_CONFIDENCE = 1.0
LABEL_CONFIDENCE = 0.9
RULE_PATTERN_CONFIDENCE = 0.8
REPO_NAME_CONFIDENCE = 0.7


def is_mention_pattern(pattern: str) -> bool:
    """Check for a ``@{username}`` style placeholder."""
    return pattern.startswith("@{") and pattern.endswith("}")


def build_searchable_text(issue: Issue) -> str:
    """Lowercased title, body and label names joined by spaces."""
    parts = [issue.title]
    if issue.body:
        parts.append(issue.body)
    parts.extend(issue.label_names)
    return " ".join(parts).lower()


class WatchRuleEngine:
    """Match issues against named watch rules."""

    def __init__(self, rules: WatchRules) -> None:
        self.rules = rules

    def match_issue(self, issue: Issue, active_rules: list[str]) -> list[MatchedRule]:
        """Return the watch rules an issue matches.

        Only the first matching pattern of each active rule is recorded.
        Security and breaking-change labels are always checked, whether or
        not those rules are active.
        """
        matches: list[MatchedRule] = []
        text = build_searchable_text(issue)

        for rule_name in active_rules:
            patterns = self.rules.get(rule_name)
            if patterns is None:
                continue

            # Empty all_activity rule matches everything
            if not patterns and rule_name == ALL_ACTIVITY:
                matches.append(MatchedRule(rule_name, "all", PATTERN_CONFIDENCE))
                continue

            for pattern in patterns:
                # TODO: resolve @{username} against the authenticated user
                if is_mention_pattern(pattern):
                    continue
                if pattern.lower() in text:
                    matches.append(MatchedRule(rule_name, pattern, PATTERN_CONFIDENCE))
                    break

        for label in issue.labels:
            label_lower = label.name.lower()
            for rule_name, needles in LABEL_HEURISTICS.items():
                if not any(needle in label_lower for needle in needles):
                    continue
                if any(m.rule_type == rule_name for m in matches):
                    continue
                matches.append(MatchedRule(rule_name, label.name, LABEL_CONFIDENCE))

        return matches

    def match_repo_name(self, repo_name: str, patterns: list[str]) -> list[MatchedRule]:
        """Tag a repository by name.

        A pattern listed verbatim under a rule yields that rule; a pattern
        contained in the repo name yields ``repo_pattern``.
        """
        matches: list[MatchedRule] = []
        repo_lower = repo_name.lower()

        for pattern in patterns:
            for rule_name, rule_patterns in self.rules.items():
                if pattern in rule_patterns:
                    matches.append(MatchedRule(rule_name, pattern, RULE_PATTERN_CONFIDENCE))

            if pattern.lower() in repo_lower:
                matches.append(MatchedRule(REPO_PATTERN, pattern, REPO_NAME_CONFIDENCE))

        return matches

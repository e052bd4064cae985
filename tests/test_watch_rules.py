"""Tests for watch rule matching."""

from gh_report.core import MatchedRule, WatchRuleEngine


RULES = {
    "security_issues": ["security", "vulnerability"],
    "breaking_changes": ["BREAKING", "migration"],
    "performance": ["slow", "regression"],
    "mentions": ["@{username}", "ping"],
    "all_activity": [],
}


def test_pattern_match_in_title(make_issue) -> None:
    """Test matching a pattern in the title."""
    engine = WatchRuleEngine(RULES)
    issue = make_issue(
        title="Security vulnerability in auth module",
        body="Found a critical security issue",
    )
    
    matches = engine.match_issue(issue, ["security_issues"])
    
    assert matches == [MatchedRule("security_issues", "security", 1.0)]


def test_first_pattern_wins(make_issue) -> None:
    """Test only the first matching pattern of a rule is recorded."""
    engine = WatchRuleEngine({"performance": ["regression", "slow"]})
    issue = make_issue(title="Slow startup", body="A regression since 2.0")
    
    matches = engine.match_issue(issue, ["performance"])
    
    assert len(matches) == 1
    assert matches[0].matched_text == "regression"
    
    # Reversed pattern order surfaces the other pattern
    engine = WatchRuleEngine({"performance": ["slow", "regression"]})
    assert engine.match_issue(issue, ["performance"])[0].matched_text == "slow"


def test_case_insensitive_match(make_issue) -> None:
    """Test matching ignores case on both sides."""
    engine = WatchRuleEngine(RULES)
    issue = make_issue(title="breaking: drop python 3.8")
    
    matches = engine.match_issue(issue, ["breaking_changes"])
    
    assert matches == [MatchedRule("breaking_changes", "BREAKING", 1.0)]


def test_match_in_body_and_labels(make_issue) -> None:
    """Test body and label names are searched."""
    engine = WatchRuleEngine(RULES)
    
    in_body = make_issue(title="Startup", body="The app is slow on boot")
    assert engine.match_issue(in_body, ["performance"])[0].matched_text == "slow"
    
    in_label = make_issue(title="Startup", labels=("needs-migration",))
    assert engine.match_issue(in_label, ["breaking_changes"])[0].matched_text == "migration"


def test_inactive_and_unknown_rules_ignored(make_issue) -> None:
    """Test only active, known rules are checked."""
    engine = WatchRuleEngine(RULES)
    issue = make_issue(title="Slow security scan")
    
    assert engine.match_issue(issue, []) == []
    assert engine.match_issue(issue, ["does_not_exist"]) == []
    assert [m.rule_type for m in engine.match_issue(issue, ["performance"])] == ["performance"]


def test_all_activity_matches_everything(make_issue) -> None:
    """Test empty all_activity rule matches any issue."""
    engine = WatchRuleEngine(RULES)
    issue = make_issue(title="Random issue")
    
    matches = engine.match_issue(issue, ["all_activity"])
    
    assert matches == [MatchedRule("all_activity", "all", 1.0)]


def test_empty_rule_other_than_all_activity_never_matches(make_issue) -> None:
    """Test an empty pattern list only matches for all_activity."""
    engine = WatchRuleEngine({"custom": []})
    
    assert engine.match_issue(make_issue(title="Anything"), ["custom"]) == []


def test_mention_patterns_skipped(make_issue) -> None:
    """Test @{...} placeholders are never matched literally."""
    engine = WatchRuleEngine(RULES)
    
    literal = make_issue(title="Contains @{username} literally")
    assert engine.match_issue(literal, ["mentions"]) == []
    
    # Later patterns are still scanned
    other = make_issue(title="ping maintainers")
    assert engine.match_issue(other, ["mentions"]) == [MatchedRule("mentions", "ping", 1.0)]


def test_label_heuristics(make_issue) -> None:
    """Test security and breaking labels match without active rules."""
    engine = WatchRuleEngine({})
    issue = make_issue(title="Update API", labels=("breaking-change",))
    
    matches = engine.match_issue(issue, [])
    
    assert matches == [MatchedRule("breaking_changes", "breaking-change", 0.9)]


def test_label_heuristics_fire_once(make_issue) -> None:
    """Test each heuristic rule is added at most once."""
    engine = WatchRuleEngine({})
    issue = make_issue(labels=("Security", "vulnerability", "major", "breaking"))
    
    matches = engine.match_issue(issue, [])
    
    assert matches == [
        MatchedRule("security_issues", "Security", 0.9),
        MatchedRule("breaking_changes", "major", 0.9),
    ]


def test_label_heuristics_skip_existing_rule(make_issue) -> None:
    """Test heuristics do not duplicate a rule already matched by pattern."""
    engine = WatchRuleEngine(RULES)
    issue = make_issue(title="Security hole", labels=("security",))
    
    matches = engine.match_issue(issue, ["security_issues"])
    
    assert matches == [MatchedRule("security_issues", "security", 1.0)]


def test_one_match_per_active_rule(make_issue) -> None:
    """Test pattern scanning yields at most one match per rule name."""
    engine = WatchRuleEngine(RULES)
    issue = make_issue(
        title="Security regression: slow vulnerability scan",
        body="BREAKING migration required",
    )
    active = ["security_issues", "performance", "breaking_changes", "all_activity"]
    
    matches = engine.match_issue(issue, active)
    
    assert [m.rule_type for m in matches] == active
    assert [m.matched_text for m in matches] == ["security", "slow", "BREAKING", "all"]


def test_match_repo_name() -> None:
    """Test tagging a repository by name."""
    engine = WatchRuleEngine(RULES)
    
    matches = engine.match_repo_name("acme/security-scanner", ["security", "scanner"])
    
    assert matches == [
        MatchedRule("security_issues", "security", 0.8),
        MatchedRule("repo_pattern", "security", 0.7),
        MatchedRule("repo_pattern", "scanner", 0.7),
    ]


def test_match_repo_name_no_match() -> None:
    """Test repo name tagging with unrelated patterns."""
    engine = WatchRuleEngine(RULES)
    
    assert engine.match_repo_name("acme/widgets", ["Security"]) == []
    assert engine.match_repo_name("acme/widgets", []) == []

"""Core domain layer."""

from gh_report.core.analyzer import IntelligentAnalyzer, analyze
from gh_report.core.entities import (
    ActionItem,
    AnalysisResult,
    Importance,
    Issue,
    IssueState,
    Label,
    MatchedRule,
    PrioritizedIssue,
    Priority,
    PriorityScore,
    RepoActivity,
    RepoProfile,
    Urgency,
    WatchRules,
)
from gh_report.core.interfaces import ActivitySource, ReportGenerator
from gh_report.core.watch_rules import WatchRuleEngine

__all__ = [
    "ActionItem",
    "AnalysisResult",
    "Importance",
    "Issue",
    "IssueState",
    "Label",
    "MatchedRule",
    "PrioritizedIssue",
    "Priority",
    "PriorityScore",
    "RepoActivity",
    "RepoProfile",
    "Urgency",
    "WatchRules",
    "ActivitySource",
    "ReportGenerator",
    "IntelligentAnalyzer",
    "WatchRuleEngine",
    "analyze",
]

"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Iterator, Optional


class IssueState(str, Enum):
    """State of an issue or pull request."""

    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


class Importance(IntEnum):
    """Per-repository importance tier set by configuration."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @classmethod
    def parse(cls, value: str) -> "Importance":
        """Parse a configuration value such as ``"high"``."""
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(
                f"Invalid importance '{value}' (expected one of: low, medium, high, critical)"
            ) from None


class Urgency(IntEnum):
    """Actionability tier of an action item."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


class Priority(IntEnum):
    """Coarse label for a priority score total (see ``scoring.classify``)."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


# Rule name -> ordered trigger patterns
WatchRules = dict[str, list[str]]


@dataclass(frozen=True)
class Label:
    """Label attached to an issue or PR."""

    name: str
    color: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Issue:
    """GitHub issue or pull request."""

    number: int
    title: str
    state: IssueState
    author: str
    created_at: datetime
    updated_at: datetime
    url: str
    repository: str
    body: Optional[str] = None
    labels: tuple[Label, ...] = ()
    comment_count: int = 0
    is_pull_request: bool = False

    def __post_init__(self) -> None:
        if self.number <= 0:
            raise ValueError("Issue number must be positive")
        if not self.url:
            raise ValueError("URL cannot be empty")

    @property
    def kind(self) -> str:
        return "PR" if self.is_pull_request else "issue"

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]


@dataclass
class RepoActivity:
    """Activity collected for one repository."""

    new_issues: list[Issue] = field(default_factory=list)
    updated_issues: list[Issue] = field(default_factory=list)
    new_prs: list[Issue] = field(default_factory=list)
    updated_prs: list[Issue] = field(default_factory=list)

    def all_items(self) -> Iterator[Issue]:
        """Iterate new issues, updated issues, new PRs, updated PRs in that order."""
        yield from self.new_issues
        yield from self.updated_issues
        yield from self.new_prs
        yield from self.updated_prs

    def is_empty(self) -> bool:
        return not (self.new_issues or self.updated_issues or self.new_prs or self.updated_prs)


@dataclass
class RepoProfile:
    """Analysis settings resolved for one repository."""

    importance: Importance = Importance.MEDIUM
    watch_rules: list[str] = field(default_factory=list)
    context: Optional[str] = None


@dataclass(frozen=True)
class MatchedRule:
    """Evidence that an issue (or repo name) satisfied a watch rule."""

    rule_type: str
    matched_text: str
    confidence: float


@dataclass
class PriorityScore:
    """Additive priority score of an issue.

    ``pr_bonus`` is part of ``total`` but not of any named component.
    """

    importance_score: int = 0
    recency_score: int = 0
    activity_score: int = 0
    rule_match_score: int = 0
    label_score: int = 0
    pr_bonus: int = 0
    total: int = 0


@dataclass
class PrioritizedIssue:
    """Issue that matched at least one watch rule, with its score."""

    issue: Issue
    repo: str
    score: PriorityScore
    matched_rules: list[MatchedRule]
    importance: Importance
    context: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.matched_rules:
            raise ValueError("Prioritized issue requires at least one matched rule")

    def has_rule(self, *rule_types: str) -> bool:
        return any(m.rule_type in rule_types for m in self.matched_rules)


@dataclass
class ActionItem:
    """Suggested next step for one issue or PR."""

    description: str
    urgency: Urgency
    reason: str
    issue: Issue
    repo: str


@dataclass
class AnalysisResult:
    """Output of one analysis run."""

    prioritized_issues: list[PrioritizedIssue] = field(default_factory=list)
    matched_rules: dict[str, list[MatchedRule]] = field(default_factory=dict)
    context_prompt: str = ""
    action_items: list[ActionItem] = field(default_factory=list)
    repo_importances: dict[str, Importance] = field(default_factory=dict)

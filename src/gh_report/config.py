"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from gh_report.core import Importance, RepoProfile, WatchRules


def default_watch_rules() -> WatchRules:
    """Built-in watch rules used when the config defines none."""
    return {
        "api_changes": ["public API", "breaking change", "deprecation", "new feature"],
        "breaking_changes": ["BREAKING", "migration", "major version"],
        "security_issues": ["security", "vulnerability", "CVE", "exploit"],
        "performance": ["performance", "regression", "benchmark", "slow"],
        "mentions": ["@{username}"],
        "review_requests": ["review requested", "PTAL", "feedback needed"],
        "all_activity": [],
    }


@dataclass
class ReportSettings:
    """Report output settings."""
    report_dir: Path = Path("reports")
    max_lookback_days: int = 30
    file_name_format: str = "{yyyy-mm-dd} - Github - Activity Report"
    state_file: Path = Path(".gh-report-state.yaml")


@dataclass
class GitHubConfig:
    """GitHub API settings."""
    api_base: str = "https://api.github.com"
    max_items_per_repo: int = 100
    request_delay: float = 1.0
    timeout: float = 30.0


@dataclass
class LabelConfig:
    """Named group of repositories sharing rules, importance and context."""
    name: str
    description: str = ""
    watch_rules: list[str] = field(default_factory=list)
    importance: Importance = Importance.MEDIUM
    context: str = ""


@dataclass
class RepoConfig:
    """Per-repository settings."""
    name: str
    labels: list[str] = field(default_factory=list)
    watch_rules: Optional[list[str]] = None
    importance_override: Optional[Importance] = None
    custom_context: Optional[str] = None


@dataclass
class Settings:
    """Application settings."""

    # API token (from environment only)
    github_token: Optional[str] = None

    # Config sections
    report: ReportSettings = field(default_factory=ReportSettings)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    watch_rules: WatchRules = field(default_factory=default_watch_rules)
    labels: list[LabelConfig] = field(default_factory=list)
    repos: list[RepoConfig] = field(default_factory=list)

    @property
    def repo_names(self) -> list[str]:
        return [repo.name for repo in self.repos]

    def label(self, name: str) -> LabelConfig:
        for label in self.labels:
            if label.name == name:
                return label
        raise ValueError(f"Unknown label '{name}'")

    def repo_profiles(self) -> dict[str, RepoProfile]:
        """Resolve analysis profile for every configured repository.

        Explicit repo settings win over settings inherited from labels.
        """
        profiles: dict[str, RepoProfile] = {}

        for repo in self.repos:
            labels = [self.label(name) for name in repo.labels]

            # Importance: override, else highest label importance
            if repo.importance_override is not None:
                importance = repo.importance_override
            else:
                importance = max((label.importance for label in labels), default=Importance.MEDIUM)

            # Watch rules: explicit list, else union of label rules
            if repo.watch_rules is not None:
                watch_rules = list(repo.watch_rules)
            else:
                watch_rules = list(dict.fromkeys(
                    rule for label in labels for rule in label.watch_rules
                ))

            context = repo.custom_context or " ".join(
                label.context for label in labels if label.context
            )

            profiles[repo.name] = RepoProfile(
                importance=importance,
                watch_rules=watch_rules,
                context=context or None,
            )

        return profiles


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Invalid config at {config_path}: expected a mapping")
    return data


def _str_list(value: Any, where: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{where} must be a list of strings")
    return list(value)


def parse_watch_rules(data: Any) -> WatchRules:
    """Validate a ``watch_rules`` mapping."""
    if not isinstance(data, dict):
        raise ValueError("watch_rules must be a mapping of rule name to patterns")

    rules: WatchRules = {}
    for name, patterns in data.items():
        if not isinstance(name, str) or not name.strip():
            raise ValueError("watch_rules names must be non-empty strings")
        rules[name] = _str_list(patterns, f"watch_rules.{name}")
    return rules


def parse_label(data: dict) -> LabelConfig:
    if "name" not in data:
        raise ValueError("Label entry is missing 'name'")
    name = str(data["name"])
    return LabelConfig(
        name=name,
        description=str(data.get("description", "")),
        watch_rules=_str_list(data.get("watch_rules"), f"labels.{name}.watch_rules"),
        importance=Importance.parse(data.get("importance", "medium")),
        context=str(data.get("context") or ""),
    )


def parse_repo(data: dict) -> RepoConfig:
    if "name" not in data:
        raise ValueError("Repo entry is missing 'name'")
    name = str(data["name"])
    override = data.get("importance_override")
    watch_rules = data.get("watch_rules")
    return RepoConfig(
        name=name,
        labels=_str_list(data.get("labels"), f"repos.{name}.labels"),
        watch_rules=None if watch_rules is None else _str_list(watch_rules, f"repos.{name}.watch_rules"),
        importance_override=None if override is None else Importance.parse(override),
        custom_context=data.get("custom_context"),
    )


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    # Load YAML config
    config = load_config(config_path)

    # Get API token from environment
    settings = Settings(github_token=os.getenv("GITHUB_TOKEN"))

    # Apply YAML config
    if "settings" in config:
        for key, value in config["settings"].items():
            if key in ("report_dir", "state_file"):
                value = Path(value).expanduser()
            setattr(settings.report, key, value)

    if "github" in config:
        for key, value in config["github"].items():
            setattr(settings.github, key, value)

    if "watch_rules" in config:
        settings.watch_rules = parse_watch_rules(config["watch_rules"])

    if "labels" in config:
        settings.labels = [parse_label(entry) for entry in config["labels"] or []]

    if "repos" in config:
        settings.repos = [parse_repo(entry) for entry in config["repos"] or []]

    # Fail early on repos that reference undefined labels
    settings.repo_profiles()

    return settings

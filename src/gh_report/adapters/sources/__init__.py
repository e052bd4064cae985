"""Source adapters for collecting activity."""

from gh_report.adapters.sources.github_source import GitHubSource
from gh_report.adapters.sources.json_source import JsonFileSource

__all__ = ["GitHubSource", "JsonFileSource"]

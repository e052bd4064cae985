"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from datetime import date, datetime

from gh_report.core.entities import AnalysisResult, RepoActivity


class ActivitySource(ABC):
    """Interface for collecting issue and PR activity."""

    @abstractmethod
    async def fetch_activity(
        self, repos: list[str], since: datetime, now: datetime
    ) -> dict[str, RepoActivity]:
        """Fetch activity per repository updated since given time."""
        pass


class ReportGenerator(ABC):
    """Interface for rendering analysis results."""

    @abstractmethod
    async def generate(
        self,
        activities: dict[str, RepoActivity],
        analysis: AnalysisResult,
        report_date: date,
    ) -> str:
        """Generate report from analysis."""
        pass

"""Run state persisted between reports."""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import yaml

from gh_report.adapters.sources.rest import parse_timestamp


class RunState:
    """Remember when the last report was generated.

    Stored as a small YAML file so that consecutive runs pick up where the
    previous one stopped.
    """

    def __init__(
        self,
        path: Path,
        last_run: Optional[datetime] = None,
        last_report_file: Optional[str] = None,
    ) -> None:
        self.path = path
        self.last_run = last_run
        self.last_report_file = last_report_file

    @classmethod
    def load(cls, path: Path) -> "RunState":
        """Load state from file; a missing file gives an empty state.

        Raises:
            ValueError: If the file exists but is not a valid state file
        """
        if not path.exists():
            return cls(path)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse state from {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Invalid state at {path}: expected a mapping")

        last_run = data.get("last_run")
        if isinstance(last_run, datetime):
            # PyYAML already turns ISO timestamps into datetimes
            last_run = parse_timestamp(last_run.isoformat())
        elif last_run is not None:
            last_run = parse_timestamp(last_run)

        return cls(path, last_run, data.get("last_report_file"))

    def save(self) -> None:
        """Save state to file, creating parent directories."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "last_run": self.last_run.isoformat() if self.last_run else None,
            "last_report_file": self.last_report_file,
        }
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, allow_unicode=True, default_flow_style=False, sort_keys=False)

    def since(self, now: datetime, max_lookback_days: int) -> datetime:
        """Start of the next reporting window.

        The later of the last run and ``now - max_lookback_days``.
        """
        max_lookback = now - timedelta(days=max_lookback_days)
        if self.last_run is None or self.last_run < max_lookback:
            return max_lookback
        return self.last_run

    def mark_run(self, now: datetime, report_file: Path) -> None:
        self.last_run = now
        self.last_report_file = str(report_file)

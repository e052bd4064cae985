"""CLI entry point for gh-report."""

import asyncio
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import typer

from gh_report.adapters.report import MarkdownReportGenerator
from gh_report.adapters.sources import GitHubSource, JsonFileSource
from gh_report.adapters.state import RunState
from gh_report.config import Settings, get_settings
from gh_report.core import IntelligentAnalyzer
from gh_report.use_cases import ReportService


def main(
    days: Optional[int] = typer.Option(None, "--days", help="Look back this many days (default: since last run)"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Path to config.yaml"),
    input_file: Optional[Path] = typer.Option(None, "--input", help="Read issues from a JSON file instead of GitHub"),
    output: Optional[Path] = typer.Option(None, "--output", help="Report file path"),
    repo: Optional[list[str]] = typer.Option(None, "--repo", help="Repository to include (repeatable)"),
) -> None:
    """Analyze GitHub activity and generate a prioritized report."""
    try:
        settings = get_settings(config)
        state = RunState.load(settings.report.state_file)
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}")
        raise typer.Exit(code=1)

    asyncio.run(async_run(settings, state, days, input_file, output, repo or []))


def app() -> None:
    """CLI entry point."""
    typer.run(main)


def report_filename(settings: Settings, now: datetime) -> str:
    """Build report file name from configured format."""
    filename = settings.report.file_name_format
    filename = filename.replace("{yyyy-mm-dd}", now.strftime("%Y-%m-%d"))
    filename = filename.replace("{yyyy}", now.strftime("%Y"))
    filename = filename.replace("{mm}", now.strftime("%m"))
    filename = filename.replace("{dd}", now.strftime("%d"))

    if not filename.endswith(".md"):
        filename += ".md"
    return filename


def lookback_start(settings: Settings, state: RunState, days: Optional[int], now: datetime) -> datetime:
    """Start of the reporting window.

    Explicit ``days`` win; otherwise continue from the last run. Both are
    capped by ``max_lookback_days``.
    """
    max_days = settings.report.max_lookback_days
    if days is not None:
        return now - timedelta(days=min(days, max_days))
    return state.since(now, max_days)


async def async_run(
    settings: Settings,
    state: RunState,
    days: Optional[int],
    input_file: Optional[Path],
    output: Optional[Path],
    repos: list[str],
) -> None:
    """Async implementation of run command."""
    # Single clock read for the whole run
    now = datetime.now(timezone.utc)

    print("\n" + "=" * 70)
    print("🐙 GH-REPORT - GitHub Activity Report")
    print("=" * 70)

    since = lookback_start(settings, state, days, now)
    repos = repos or settings.repo_names

    print("\n⚙️  Settings:")
    print(f"  • Period: {since.strftime('%Y-%m-%d %H:%M')} - {now.strftime('%Y-%m-%d %H:%M')}")
    if days is None and state.last_run is not None:
        print(f"  • Last run: {state.last_run.strftime('%Y-%m-%d %H:%M')}")
    print(f"  • Repositories: {len(repos) if repos else 'all in input'}")
    print(f"  • Watch rules: {', '.join(settings.watch_rules) or 'none'}")

    if input_file is not None:
        source = JsonFileSource(input_file)
    else:
        if not repos:
            print("\n❌ No repositories configured (use --repo or 'repos' in config)")
            return
        source = GitHubSource(
            token=settings.github_token,
            api_base=settings.github.api_base,
            max_items=settings.github.max_items_per_repo,
            request_delay=settings.github.request_delay,
            timeout=settings.github.timeout,
        )

    service = ReportService(
        source=source,
        analyzer=IntelligentAnalyzer(settings.watch_rules, settings.repo_profiles()),
        report_generator=MarkdownReportGenerator(),
        repos=repos,
    )

    activities = await service.collect(since, now)
    analysis = service.analyze(activities, now)
    report = await service.generate_report(activities, analysis, now.date())

    if output is None:
        output = settings.report.report_dir / report_filename(settings, now)

    service.save_report(report, output)

    state.mark_run(now, output)
    state.save()

    print("\n" + "=" * 70)
    print("✅ DONE!")
    print("=" * 70)
    print(f"📄 Report: {output}")
    print()


if __name__ == "__main__":
    app()

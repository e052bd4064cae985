"""Report adapters."""

from gh_report.adapters.report.markdown_generator import MarkdownReportGenerator

__all__ = ["MarkdownReportGenerator"]

"""Report output for fifocalc."""

from fifocalc.report.writer import ReportWriter, format_signed

__all__ = ["ReportWriter", "format_signed"]

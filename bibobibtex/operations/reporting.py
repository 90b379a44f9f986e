"""Batch statistics reports.

Supports:
- Plain text for logs and terminals without markup
- JSON for machine processing
- A rich table for interactive display
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from .batch import ConversionStatistics


class ReportFormatter(ABC):
    """Abstract base class for statistics formatters."""

    @abstractmethod
    def format(self, stats: ConversionStatistics) -> str:
        """Format batch statistics.

        Args:
            stats: Statistics to format

        Returns:
            Formatted report as string
        """
        pass

    def save(self, stats: ConversionStatistics, path: Path) -> None:
        """Save formatted report to file."""
        path.write_text(self.format(stats), encoding="utf-8")


class TextReporter(ReportFormatter):
    """Generate plain text reports."""

    def __init__(self, top_fields: int = 10):
        """Initialize with the number of most used fields to list."""
        self.top_fields = top_fields

    def format(self, stats: ConversionStatistics) -> str:
        """Format statistics as text."""
        lines = [
            "Conversion summary",
            "==================",
            f"Total:      {stats.total}",
            f"Succeeded:  {stats.succeeded} ({stats.success_rate:.1f}%)",
            f"Failed:     {stats.failed}",
            f"Skipped:    {stats.skipped}",
            f"Warnings:   {stats.warnings}",
            f"Elapsed:    {stats.elapsed_ms:.1f} ms",
        ]

        if stats.failures:
            lines.append("")
            lines.append("Failures:")
            for failure in stats.failures:
                lines.append(f"  - {failure.key}: {failure.message}")

        if stats.duplicate_keys:
            lines.append("")
            lines.append("Duplicate keys:")
            for key in stats.duplicate_keys:
                lines.append(f"  - {key}")

        if stats.unmapped:
            lines.append("")
            lines.append("Without a target type:")
            for name in stats.unmapped:
                lines.append(f"  - {name}")

        if stats.field_usage:
            lines.append("")
            lines.append("Most used fields:")
            for name, count in stats.field_usage.most_common(self.top_fields):
                lines.append(f"  {name}: {count}")

        return "\n".join(lines)


class JSONReporter(ReportFormatter):
    """Generate JSON reports."""

    def __init__(self, indent: int = 2):
        """Initialize JSON reporter.

        Args:
            indent: Indentation level for pretty printing
        """
        self.indent = indent

    def format(self, stats: ConversionStatistics) -> str:
        """Format statistics as JSON."""
        data = {
            "total": stats.total,
            "succeeded": stats.succeeded,
            "failed": stats.failed,
            "skipped": stats.skipped,
            "warnings": stats.warnings,
            "success_rate": round(stats.success_rate, 2),
            "elapsed_ms": round(stats.elapsed_ms, 3),
            "failures": [
                {"key": f.key, "message": f.message, "field": f.field}
                for f in stats.failures
            ],
            "duplicate_keys": stats.duplicate_keys,
            "unmapped": stats.unmapped,
            "field_usage": dict(sorted(stats.field_usage.items())),
        }
        return json.dumps(data, indent=self.indent, ensure_ascii=False)


def render_statistics(
    stats: ConversionStatistics, console: Console | None = None
) -> Table:
    """Print batch statistics as a rich table.

    Args:
        stats: Statistics to display
        console: Console to print to; a default one is used when omitted

    Returns:
        The rendered table
    """
    table = Table(title="Conversion summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total", str(stats.total))
    table.add_row("Succeeded", f"[green]{stats.succeeded}[/green]")
    table.add_row("Failed", f"[red]{stats.failed}[/red]" if stats.failed else "0")
    table.add_row("Skipped", str(stats.skipped))
    table.add_row("Warnings", f"[yellow]{stats.warnings}[/yellow]" if stats.warnings else "0")
    table.add_row("Success rate", f"{stats.success_rate:.1f}%")
    table.add_row("Elapsed", f"{stats.elapsed_ms:.1f} ms")

    (console or Console()).print(table)
    return table

"""Output formatters for generated plans."""

from fitplan.export.formatters import (
    JSONFormatter,
    MarkdownFormatter,
    TableFormatter,
    format_plan,
)

__all__ = ["TableFormatter", "JSONFormatter", "MarkdownFormatter", "format_plan"]

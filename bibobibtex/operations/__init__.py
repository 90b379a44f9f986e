"""Batch conversion and reporting."""

from bibobibtex.operations.batch import (
    BatchConversionResult,
    BatchConverter,
    ConversionFailure,
    ConversionStatistics,
)
from bibobibtex.operations.reporting import (
    JSONReporter,
    ReportFormatter,
    TextReporter,
    render_statistics,
)

__all__ = [
    "BatchConversionResult",
    "BatchConverter",
    "ConversionFailure",
    "ConversionStatistics",
    "JSONReporter",
    "ReportFormatter",
    "TextReporter",
    "render_statistics",
]

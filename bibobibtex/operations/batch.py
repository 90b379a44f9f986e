"""Batch conversion over already-parsed records.

Each record converts independently: a failure is recorded and the batch
moves on. Records whose citation key was already seen in the batch are
skipped as duplicates.
"""

import logging
import time
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..core.converter import BibliographicConverter
from ..core.exceptions import ConversionError
from ..core.models import ConversionIssue, Document, SourceEntry
from .reporting import JSONReporter, TextReporter

logger = logging.getLogger(__name__)


@dataclass
class ConversionFailure:
    """A record that could not be converted."""

    key: str
    message: str
    field: str | None = None


@dataclass
class ConversionStatistics:
    """Counters for one batch run."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    warnings: int = 0
    failures: list[ConversionFailure] = field(default_factory=list)
    duplicate_keys: list[str] = field(default_factory=list)
    unmapped: list[str] = field(default_factory=list)
    field_usage: Counter = field(default_factory=Counter)
    elapsed_ms: float = 0.0

    @property
    def skipped(self) -> int:
        """Records skipped as duplicates or for lack of a target type."""
        return len(self.duplicate_keys) + len(self.unmapped)

    @property
    def success_rate(self) -> float:
        """Share of records converted, as a percentage."""
        if self.total == 0:
            return 0.0
        return self.succeeded / self.total * 100

    def to_text_report(self) -> str:
        """Human-readable summary."""
        return TextReporter().format(self)

    def to_json(self) -> str:
        """Machine-readable summary."""
        return JSONReporter().format(self)


@dataclass
class BatchConversionResult:
    """Converted records plus issues and statistics."""

    documents: list[Document] = field(default_factory=list)
    entries: list[SourceEntry] = field(default_factory=list)
    issues: list[ConversionIssue] = field(default_factory=list)
    statistics: ConversionStatistics = field(default_factory=ConversionStatistics)

    @property
    def success(self) -> bool:
        """True when nothing failed."""
        return self.statistics.failed == 0


class BatchConverter:
    """Runs a converter over many records."""

    def __init__(self, converter: BibliographicConverter | None = None):
        """Initialize with the converter to apply to each record."""
        self.converter = converter or BibliographicConverter()

    def to_documents(self, entries: Iterable[SourceEntry]) -> BatchConversionResult:
        """Convert BibTeX entries into documents.

        Args:
            entries: Parsed entries, in input order.

        Returns:
            Result with the converted documents, warning issues and
            statistics.
        """
        result = BatchConversionResult()
        stats = result.statistics
        seen: set[str] = set()
        started = time.perf_counter()

        for entry in entries:
            stats.total += 1
            key = entry.citation_key
            if key in seen:
                logger.info(f"Skipping duplicate citation key: {key}")
                stats.duplicate_keys.append(key)
                continue
            seen.add(key)

            try:
                document, issues = self.converter.to_target_with_issues(entry)
            except ConversionError as e:
                logger.error(f"Failed to convert {key}: {e}")
                stats.failed += 1
                stats.failures.append(
                    ConversionFailure(key=key, message=e.message, field=e.field)
                )
                continue

            stats.succeeded += 1
            stats.warnings += len(issues)
            stats.field_usage.update(
                name for name, value in entry.fields.items() if value.strip()
            )
            result.documents.append(document)
            result.issues.extend(issues)

        stats.elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Converted {stats.succeeded}/{stats.total} entries "
            f"({stats.failed} failed, {stats.skipped} skipped)"
        )
        return result

    def to_entries(self, documents: Iterable[Document]) -> BatchConversionResult:
        """Convert documents into BibTeX entries.

        Documents without a BibTeX analogue are counted as skipped, as are
        documents whose citation key was already produced in this batch.
        """
        result = BatchConversionResult()
        stats = result.statistics
        seen: set[str] = set()
        started = time.perf_counter()

        for document in documents:
            stats.total += 1
            try:
                entry = self.converter.to_source(document)
            except ConversionError as e:
                logger.error(f"Failed to convert '{document.title}': {e}")
                stats.failed += 1
                stats.failures.append(
                    ConversionFailure(
                        key=document.id or document.title,
                        message=e.message,
                        field=e.field,
                    )
                )
                continue

            if entry is None:
                stats.unmapped.append(document.id or document.title)
                continue
            if entry.citation_key in seen:
                logger.info(f"Skipping duplicate citation key: {entry.citation_key}")
                stats.duplicate_keys.append(entry.citation_key)
                continue
            seen.add(entry.citation_key)

            stats.succeeded += 1
            stats.field_usage.update(entry.fields)
            result.entries.append(entry)

        stats.elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Converted {stats.succeeded}/{stats.total} documents "
            f"({stats.failed} failed, {stats.skipped} skipped)"
        )
        return result

"""Tests for batch conversion."""

import pytest

from bibobibtex.core.builders import DocumentBuilder
from bibobibtex.core.fields import DocumentType
from bibobibtex.core.models import SourceEntry
from bibobibtex.operations.batch import BatchConverter


@pytest.fixture
def entries(proceedings_entry, article_entry) -> list[SourceEntry]:
    """Two good entries, one duplicate key and two failing entries."""
    return [
        proceedings_entry,
        article_entry,
        SourceEntry.create("misc", "smith2023", {"title": "Duplicate key"}),
        SourceEntry.create("book", "notitle", {"author": "Doe, Jane"}),
        SourceEntry.create("book", "baddate", {"title": "T", "year": "20x3"}),
        SourceEntry.create("book", "badisbn", {"title": "T", "isbn": "123"}),
    ]


class TestToDocuments:
    """Test converting entries in bulk."""

    def test_batch_continues_past_failures(self, entries) -> None:
        """Failures are recorded and the rest still convert."""
        result = BatchConverter().to_documents(entries)
        stats = result.statistics

        assert stats.total == 6
        assert stats.succeeded == 3
        assert stats.failed == 2
        assert stats.duplicate_keys == ["smith2023"]
        assert stats.skipped == 1
        assert not result.success
        assert [d.id for d in result.documents] == ["smith2023", "muller2020", "badisbn"]

    def test_failures_name_entry_and_field(self, entries) -> None:
        """Each failure keeps the key and offending field."""
        stats = BatchConverter().to_documents(entries).statistics

        assert [(f.key, f.field) for f in stats.failures] == [
            ("notitle", "title"),
            ("baddate", "year"),
        ]

    def test_warnings_are_counted(self, entries) -> None:
        """Dropped identifiers count as warnings."""
        result = BatchConverter().to_documents(entries)

        assert result.statistics.warnings == 1
        assert result.issues[0].entry_key == "badisbn"

    def test_field_usage(self, entries) -> None:
        """Field usage counts fields of converted entries."""
        stats = BatchConverter().to_documents(entries).statistics

        assert stats.field_usage["title"] == 3
        assert stats.field_usage["doi"] == 1

    def test_empty_batch(self) -> None:
        """An empty batch has no successes and no failures."""
        result = BatchConverter().to_documents([])

        assert result.statistics.total == 0
        assert result.statistics.success_rate == 0.0
        assert result.success


class TestToEntries:
    """Test converting documents in bulk."""

    def test_webpages_are_skipped(self) -> None:
        """Documents without a BibTeX type are counted as skipped."""
        documents = [
            DocumentBuilder().type(DocumentType.BOOK).title("A Book").build(),
            DocumentBuilder().type(DocumentType.WEBPAGE).title("Home").build(),
        ]
        result = BatchConverter().to_entries(documents)

        assert [e.citation_key for e in result.entries] == ["a_book"]
        assert result.statistics.unmapped == ["Home"]
        assert result.statistics.skipped == 1

    def test_generated_key_collisions_are_skipped(self) -> None:
        """Two documents yielding the same key keep only the first."""
        documents = [
            DocumentBuilder().type(DocumentType.BOOK).title("Same").build(),
            DocumentBuilder().type(DocumentType.ARTICLE).title("Same").build(),
        ]
        result = BatchConverter().to_entries(documents)

        assert len(result.entries) == 1
        assert result.statistics.duplicate_keys == ["same"]

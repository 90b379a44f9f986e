"""Tests for documents, source entries and the document builder."""

import msgspec
import pytest

from bibobibtex.core.builders import DocumentBuilder
from bibobibtex.core.dates import PublicationDate
from bibobibtex.core.exceptions import (
    MissingFieldError,
    UnsupportedTypeError,
    ValidationError,
)
from bibobibtex.core.fields import ContributorRole, DocumentType, EntryType, IdentifierType
from bibobibtex.core.identifiers import Identifier
from bibobibtex.core.models import ConversionIssue, IssueSeverity, SourceEntry
from bibobibtex.core.names import PersonName


class TestSourceEntry:
    """Test BibTeX-side records."""

    def test_create_lowercases_field_names(self) -> None:
        """Field names are stored lower-cased."""
        entry = SourceEntry.create("article", "key1", {"Title": "T", "YEAR": "2020"})

        assert entry.fields == {"title": "T", "year": "2020"}
        assert entry.get("Title") == "T"

    def test_create_accepts_type_names(self) -> None:
        """Type names are case-insensitive."""
        assert SourceEntry.create("InProceedings", "k", {}).type is EntryType.INPROCEEDINGS

    def test_conference_alias(self) -> None:
        """conference is read as inproceedings."""
        assert SourceEntry.create("conference", "k", {}).type is EntryType.INPROCEEDINGS

    def test_unknown_type(self) -> None:
        """Unknown type names are rejected."""
        with pytest.raises(UnsupportedTypeError) as exc_info:
            SourceEntry.create("patent", "k", {})
        assert exc_info.value.field == "type"

    def test_get_trims_and_treats_blank_as_missing(self) -> None:
        """Blank values read as None."""
        entry = SourceEntry.create("misc", "k", {"note": "  ", "title": "  A title "})

        assert entry.get("note") is None
        assert entry.get("missing") is None
        assert entry.get("title") == "A title"

    def test_blank_citation_key(self) -> None:
        """A citation key is required."""
        with pytest.raises(ValidationError):
            SourceEntry.create("misc", "  ", {})


class TestDocumentBuilder:
    """Test building documents."""

    def test_required_type_and_title(self) -> None:
        """Type and title are checked when building."""
        with pytest.raises(MissingFieldError) as exc_info:
            DocumentBuilder().type(DocumentType.BOOK).build()
        assert exc_info.value.field == "title"

        with pytest.raises(MissingFieldError) as exc_info:
            DocumentBuilder().title("A Book").build()
        assert exc_info.value.field == "type"

    def test_blank_title_is_missing(self) -> None:
        """A whitespace title counts as absent."""
        with pytest.raises(MissingFieldError):
            DocumentBuilder().type(DocumentType.BOOK).title("   ").build()

    def test_strings_are_trimmed(self) -> None:
        """Values are trimmed and blanks dropped."""
        document = (
            DocumentBuilder()
            .type(DocumentType.ARTICLE)
            .title("  Title  ")
            .volume(" 12 ")
            .issue("   ")
            .build()
        )

        assert document.title == "Title"
        assert document.volume == "12"
        assert document.issue is None

    def test_contributor_order_and_views(self) -> None:
        """Authors and editors keep insertion order within their role."""
        smith = PersonName.of("Smith, Alice", "Alice", "Smith")
        doe = PersonName.of("Doe, Bob", "Bob", "Doe")
        evan = PersonName.of("Editor, Evan", "Evan", "Editor")
        document = (
            DocumentBuilder()
            .type(DocumentType.CONFERENCE_PAPER)
            .title("Paper")
            .author(smith)
            .author(doe)
            .editor(evan)
            .build()
        )

        assert document.authors == (smith, doe)
        assert document.editors == (evan,)
        assert [c.role for c in document.contributors] == [
            ContributorRole.AUTHOR,
            ContributorRole.AUTHOR,
            ContributorRole.EDITOR,
        ]

    def test_identifiers_and_keywords_deduplicated(self) -> None:
        """Repeated identifiers and keywords are stored once."""
        doi = Identifier.of(IdentifierType.DOI, "10.1000/x")
        document = (
            DocumentBuilder()
            .type(DocumentType.OTHER)
            .title("T")
            .identifier(doi)
            .identifier(doi)
            .keyword("rdf")
            .keyword("rdf")
            .keyword(" ")
            .build()
        )

        assert document.identifiers == (doi,)
        assert document.identifier(IdentifierType.DOI) == "10.1000/x"
        assert document.keywords == ("rdf",)

    def test_documents_are_immutable(self) -> None:
        """Built documents cannot be modified."""
        document = DocumentBuilder().type(DocumentType.BOOK).title("T").build()

        with pytest.raises(AttributeError):
            document.title = "Other"

    def test_publication_date(self) -> None:
        """Dates are stored as given."""
        date = PublicationDate(year=2023, month=2)
        document = (
            DocumentBuilder()
            .type(DocumentType.BOOK)
            .title("T")
            .publication_date(date)
            .build()
        )
        assert document.publication_date == date

    def test_document_serializes_with_msgspec(self) -> None:
        """Documents can be encoded as JSON."""
        document = DocumentBuilder().type(DocumentType.BOOK).title("T").build()
        data = msgspec.json.decode(msgspec.json.encode(document))

        assert data["type"] == "book"
        assert data["title"] == "T"


class TestConversionIssue:
    """Test issue records."""

    def test_defaults(self) -> None:
        """Issues default to error severity."""
        issue = ConversionIssue(field="isbn", message="Invalid ISBN-13")

        assert issue.severity is IssueSeverity.ERROR
        assert issue.entry_key is None

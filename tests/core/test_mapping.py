"""Tests for the entry type mapping table."""

import pytest

from bibobibtex.core.fields import DocumentType, EntryType
from bibobibtex.core.mapping import (
    DOCUMENT_TO_ENTRY,
    ENTRY_TO_DOCUMENT,
    check_tables,
    container_field,
    publisher_field,
    to_document_type,
    to_entry_type,
)


class TestTables:
    """Test table totality and consistency."""

    def test_every_entry_type_is_mapped(self) -> None:
        """Each BibTeX type has a document type."""
        assert set(ENTRY_TO_DOCUMENT) == set(EntryType)

    def test_every_document_type_has_an_inverse_slot(self) -> None:
        """Each document type appears in the inverse table."""
        assert set(DOCUMENT_TO_ENTRY) == set(DocumentType)

    def test_preferred_inverse_maps_back(self) -> None:
        """The preferred inverse of a document type maps back to it."""
        for doc_type, entry_type in DOCUMENT_TO_ENTRY.items():
            if entry_type is not None:
                assert ENTRY_TO_DOCUMENT[entry_type] is doc_type

    def test_check_tables_passes(self) -> None:
        """The shipped tables are consistent."""
        check_tables()


class TestForwardMapping:
    """Test BibTeX to BIBO type resolution."""

    @pytest.mark.parametrize(
        "entry_type,expected",
        [
            (EntryType.INBOOK, DocumentType.BOOK_SECTION),
            (EntryType.INCOLLECTION, DocumentType.BOOK_SECTION),
            (EntryType.PROCEEDINGS, DocumentType.CONFERENCE_PAPER),
            (EntryType.MASTERSTHESIS, DocumentType.THESIS),
            (EntryType.TECHREPORT, DocumentType.REPORT),
            (EntryType.ONLINE, DocumentType.WEBPAGE),
            (EntryType.BOOKLET, DocumentType.OTHER),
            (EntryType.UNPUBLISHED, DocumentType.OTHER),
        ],
    )
    def test_many_to_one(self, entry_type: EntryType, expected: DocumentType) -> None:
        """Several BibTeX types share a document type."""
        assert to_document_type(entry_type) is expected


class TestInverseMapping:
    """Test BIBO to BibTeX type resolution."""

    def test_preferred_inverses(self) -> None:
        """Shared document types map to one preferred BibTeX type."""
        assert to_entry_type(DocumentType.BOOK_SECTION) is EntryType.INCOLLECTION
        assert to_entry_type(DocumentType.CONFERENCE_PAPER) is EntryType.INPROCEEDINGS
        assert to_entry_type(DocumentType.OTHER) is EntryType.MISC

    def test_thesis_degree(self) -> None:
        """Master degrees become mastersthesis, anything else phdthesis."""
        assert to_entry_type(DocumentType.THESIS, "Master's thesis") is EntryType.MASTERSTHESIS
        assert to_entry_type(DocumentType.THESIS, "MSc thesis") is EntryType.PHDTHESIS
        assert to_entry_type(DocumentType.THESIS, None) is EntryType.PHDTHESIS

    def test_webpage_has_no_analogue(self) -> None:
        """Webpages map to nothing unless a fallback is given."""
        assert to_entry_type(DocumentType.WEBPAGE) is None
        assert to_entry_type(DocumentType.WEBPAGE, webpage_fallback=EntryType.ONLINE) is EntryType.ONLINE

    def test_field_names(self) -> None:
        """Publisher and container fields depend on the entry type."""
        assert publisher_field(EntryType.PHDTHESIS) == "school"
        assert publisher_field(EntryType.TECHREPORT) == "institution"
        assert publisher_field(EntryType.BOOK) == "publisher"
        assert container_field(EntryType.ARTICLE) == "journal"
        assert container_field(EntryType.INPROCEEDINGS) == "booktitle"

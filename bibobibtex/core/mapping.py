"""Entry type mapping between BibTeX and BIBO.

The forward table is total over ``EntryType``. The inverse table names a
preferred BibTeX type for every document type except ``webpage``, which
has no BibTeX analogue unless the caller configures a fallback. Both
tables are checked when the module is imported.
"""

from .exceptions import UnsupportedTypeError
from .fields import DocumentType, EntryType

ENTRY_TO_DOCUMENT: dict[EntryType, DocumentType] = {
    EntryType.ARTICLE: DocumentType.ARTICLE,
    EntryType.BOOK: DocumentType.BOOK,
    EntryType.INBOOK: DocumentType.BOOK_SECTION,
    EntryType.INCOLLECTION: DocumentType.BOOK_SECTION,
    EntryType.INPROCEEDINGS: DocumentType.CONFERENCE_PAPER,
    EntryType.PROCEEDINGS: DocumentType.CONFERENCE_PAPER,
    EntryType.MASTERSTHESIS: DocumentType.THESIS,
    EntryType.PHDTHESIS: DocumentType.THESIS,
    EntryType.TECHREPORT: DocumentType.REPORT,
    EntryType.ONLINE: DocumentType.WEBPAGE,
    EntryType.BOOKLET: DocumentType.OTHER,
    EntryType.MANUAL: DocumentType.OTHER,
    EntryType.UNPUBLISHED: DocumentType.OTHER,
    EntryType.MISC: DocumentType.OTHER,
}

DOCUMENT_TO_ENTRY: dict[DocumentType, EntryType | None] = {
    DocumentType.ARTICLE: EntryType.ARTICLE,
    DocumentType.BOOK: EntryType.BOOK,
    DocumentType.BOOK_SECTION: EntryType.INCOLLECTION,
    DocumentType.CONFERENCE_PAPER: EntryType.INPROCEEDINGS,
    DocumentType.THESIS: EntryType.PHDTHESIS,
    DocumentType.REPORT: EntryType.TECHREPORT,
    DocumentType.WEBPAGE: None,
    DocumentType.OTHER: EntryType.MISC,
}

# Entry types whose publisher is stored under another field name
PUBLISHER_FIELDS: dict[EntryType, str] = {
    EntryType.MASTERSTHESIS: "school",
    EntryType.PHDTHESIS: "school",
    EntryType.TECHREPORT: "institution",
    EntryType.MANUAL: "organization",
}

THESIS_TYPES = {EntryType.MASTERSTHESIS, EntryType.PHDTHESIS}

# Entry types whose organization field names the conference organizer
CONFERENCE_TYPES = {EntryType.INPROCEEDINGS, EntryType.PROCEEDINGS}

MASTERS_DEGREE = "Master's thesis"


def to_document_type(entry_type: EntryType) -> DocumentType:
    """Document type for a BibTeX entry type.

    Raises:
        UnsupportedTypeError: If the entry type has no mapping.
    """
    try:
        return ENTRY_TO_DOCUMENT[entry_type]
    except KeyError:
        raise UnsupportedTypeError(entry_type) from None


def to_entry_type(
    doc_type: DocumentType,
    degree_type: str | None = None,
    webpage_fallback: EntryType | None = None,
) -> EntryType | None:
    """Preferred BibTeX entry type for a document type.

    Theses become ``mastersthesis`` when the degree mentions "master",
    otherwise ``phdthesis``. Webpages map to ``webpage_fallback``, which is
    None unless configured.
    """
    if doc_type is DocumentType.THESIS:
        if degree_type and "master" in degree_type.lower():
            return EntryType.MASTERSTHESIS
        return EntryType.PHDTHESIS
    if doc_type is DocumentType.WEBPAGE:
        return webpage_fallback
    return DOCUMENT_TO_ENTRY[doc_type]


def publisher_field(entry_type: EntryType) -> str:
    """BibTeX field that carries the publisher for an entry type."""
    return PUBLISHER_FIELDS.get(entry_type, "publisher")


def container_field(entry_type: EntryType) -> str:
    """BibTeX field that carries the container title for an entry type."""
    return "journal" if entry_type is EntryType.ARTICLE else "booktitle"


def check_tables() -> None:
    """Verify both tables are total and mutually consistent.

    Raises:
        RuntimeError: If an entry type or document type is unmapped, or a
            preferred inverse does not map back to its document type.
    """
    missing = set(EntryType) - set(ENTRY_TO_DOCUMENT)
    if missing:
        names = ", ".join(sorted(t.value for t in missing))
        raise RuntimeError(f"Entry types without a document type: {names}")

    missing = set(DocumentType) - set(DOCUMENT_TO_ENTRY)
    if missing:
        names = ", ".join(sorted(t.value for t in missing))
        raise RuntimeError(f"Document types without an inverse: {names}")

    for doc_type, entry_type in DOCUMENT_TO_ENTRY.items():
        if entry_type is not None and ENTRY_TO_DOCUMENT[entry_type] is not doc_type:
            raise RuntimeError(
                f"Inverse of {doc_type.value} ({entry_type.value}) "
                f"maps to {ENTRY_TO_DOCUMENT[entry_type].value}"
            )


check_tables()

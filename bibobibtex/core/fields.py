"""Field names and closed type variants for both bibliographic models."""

from enum import Enum, unique

from .exceptions import UnsupportedTypeError

# BibTeX fields read by the converter
NAME_FIELDS = {"author", "editor"}

DATE_FIELDS = {"year", "month", "day"}

IDENTIFIER_FIELDS = {"doi", "isbn", "issn", "url", "handle", "uri"}

SCALAR_FIELDS = {
    "title",
    "subtitle",
    "publisher",
    "school",
    "institution",
    "organization",
    "address",
    "journal",
    "booktitle",
    "volume",
    "number",
    "pages",
    "language",
    "abstract",
    "note",
    "series",
    "edition",
    "keywords",
    "type",
}

ALL_FIELDS = NAME_FIELDS | DATE_FIELDS | IDENTIFIER_FIELDS | SCALAR_FIELDS

# Input aliases for entry type names
ENTRY_TYPE_ALIASES = {
    "conference": "inproceedings",
}


@unique
class EntryType(Enum):
    """BibTeX entry types."""

    ARTICLE = "article"
    BOOK = "book"
    INBOOK = "inbook"
    INCOLLECTION = "incollection"
    INPROCEEDINGS = "inproceedings"
    PROCEEDINGS = "proceedings"
    BOOKLET = "booklet"
    MANUAL = "manual"
    MASTERSTHESIS = "mastersthesis"
    PHDTHESIS = "phdthesis"
    TECHREPORT = "techreport"
    UNPUBLISHED = "unpublished"
    MISC = "misc"
    ONLINE = "online"

    @classmethod
    def from_name(cls, name: "str | EntryType") -> "EntryType":
        """Resolve an entry type from its BibTeX name, case-insensitively.

        Raises:
            UnsupportedTypeError: If the name is not a known entry type.
        """
        if isinstance(name, cls):
            return name
        normalized = str(name).strip().lower()
        normalized = ENTRY_TYPE_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedTypeError(name) from None


@unique
class DocumentType(Enum):
    """BIBO document types."""

    ARTICLE = "article"
    BOOK = "book"
    BOOK_SECTION = "book-section"
    THESIS = "thesis"
    REPORT = "report"
    CONFERENCE_PAPER = "conference-paper"
    WEBPAGE = "webpage"
    OTHER = "other"


@unique
class IdentifierType(Enum):
    """Kinds of document identifiers."""

    DOI = "doi"
    ISBN_10 = "isbn-10"
    ISBN_13 = "isbn-13"
    ISSN = "issn"
    HANDLE = "handle"
    URI = "uri"
    URL = "url"
    OTHER = "other"


@unique
class ContributorRole(Enum):
    """Roles a contributor can hold on a document."""

    AUTHOR = "author"
    EDITOR = "editor"

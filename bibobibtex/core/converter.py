"""Bidirectional conversion between BibTeX entries and BIBO documents.

Whole-entry failures (unsupported type, missing title, invalid date) are
raised. An invalid identifier only loses that identifier: it is dropped,
logged and reported as a warning issue while the entry still converts.
"""

import logging
import re

from ..config import ConverterConfig
from .builders import DocumentBuilder
from .dates import month_abbreviation, parse_date
from .exceptions import IdentifierError, MissingFieldError
from .fields import EntryType, IdentifierType
from .identifiers import Identifier, classify_isbn
from .keys import generate_key, is_valid_key
from .latex import to_latex, to_unicode
from .mapping import (
    CONFERENCE_TYPES,
    MASTERS_DEGREE,
    PUBLISHER_FIELDS,
    THESIS_TYPES,
    container_field,
    publisher_field,
    to_document_type,
    to_entry_type,
)
from .models import ConversionIssue, Document, IssueSeverity, SourceEntry
from .names import format_names, parse_names

logger = logging.getLogger(__name__)

LIST_SEPARATOR = re.compile(r"\s*[,;]\s*")

# Single-valued identifier fields, in output order
SINGLE_IDENTIFIER_FIELDS = (
    ("doi", IdentifierType.DOI),
    ("url", IdentifierType.URL),
    ("handle", IdentifierType.HANDLE),
    ("uri", IdentifierType.URI),
)

# Scalars copied as-is in both directions: (BibTeX field, Document attribute)
PLAIN_FIELDS = (
    ("subtitle", "subtitle"),
    ("address", "place_of_publication"),
    ("volume", "volume"),
    ("number", "issue"),
    ("pages", "pages"),
    ("language", "language"),
    ("abstract", "abstract"),
    ("note", "notes"),
    ("series", "series"),
    ("edition", "edition"),
)


def split_list(value: str | None) -> list[str]:
    """Split a comma or semicolon separated field into trimmed items."""
    if not value:
        return []
    return [item for item in LIST_SEPARATOR.split(value.strip()) if item]


class BibliographicConverter:
    """Converts between SourceEntry and Document.

    The converter holds only its configuration and can be shared between
    threads.
    """

    def __init__(self, config: ConverterConfig | None = None):
        """Initialize with an optional configuration."""
        self.config = config or ConverterConfig()

    def _from_latex(self, value: str | None) -> str | None:
        if value is None or not self.config.convert_latex:
            return value
        return to_unicode(value)

    def _to_latex(self, value: str | None) -> str | None:
        if value is None or not self.config.convert_latex:
            return value
        return to_latex(value)

    # BibTeX -> BIBO

    def to_target(self, entry: SourceEntry) -> Document:
        """Convert a BibTeX entry into a document.

        Raises:
            UnsupportedTypeError: If the entry type has no document type.
            MissingFieldError: If the title is missing.
            DateError: If year, month or day is invalid.
        """
        document, _ = self.to_target_with_issues(entry)
        return document

    def to_target_with_issues(
        self, entry: SourceEntry
    ) -> tuple[Document, list[ConversionIssue]]:
        """Convert a BibTeX entry and report the identifiers that were dropped.

        Args:
            entry: Entry to convert.

        Returns:
            Tuple of (document, issues). Issues are warnings only; anything
            fatal is raised instead.
        """
        key = entry.citation_key
        logger.debug(f"Converting {entry.type.value} entry {key}")

        doc_type = to_document_type(entry.type)
        title = self._from_latex(entry.get("title"))
        if title is None:
            raise MissingFieldError("title")

        builder = DocumentBuilder().type(doc_type).id(key).title(title)

        for name in parse_names(self._from_latex(entry.get("author"))):
            builder.author(name)
        for name in parse_names(self._from_latex(entry.get("editor"))):
            builder.editor(name)

        builder.publication_date(
            parse_date(entry.get("year"), entry.get("month"), entry.get("day"))
        )

        issues: list[ConversionIssue] = []
        for identifier in self._read_identifiers(entry, issues):
            builder.identifier(identifier)
            if identifier.type is IdentifierType.URL:
                builder.url(identifier.value)

        for field, attribute in PLAIN_FIELDS:
            getattr(builder, attribute)(self._from_latex(entry.get(field)))

        publisher = entry.get("publisher")
        if publisher is None and entry.type in PUBLISHER_FIELDS:
            publisher = entry.get(PUBLISHER_FIELDS[entry.type])
        builder.publisher(self._from_latex(publisher))

        builder.container_title(
            self._from_latex(entry.get("journal") or entry.get("booktitle"))
        )

        if entry.type in CONFERENCE_TYPES:
            builder.conference_organizer(self._from_latex(entry.get("organization")))

        if entry.type in THESIS_TYPES:
            degree = entry.get("type")
            if degree is None and entry.type is EntryType.MASTERSTHESIS:
                degree = MASTERS_DEGREE
            builder.degree_type(self._from_latex(degree))

        for keyword in split_list(self._from_latex(entry.get("keywords"))):
            builder.keyword(keyword)

        document = builder.build()
        logger.info(f"Converted entry {key} to {doc_type.value} document")
        return document, issues

    def _read_identifiers(
        self, entry: SourceEntry, issues: list[ConversionIssue]
    ) -> list[Identifier]:
        candidates: list[tuple[str, str, IdentifierType | None]] = []
        for field, id_type in SINGLE_IDENTIFIER_FIELDS:
            value = entry.get(field)
            if value is not None:
                candidates.append((field, value, id_type))
        for value in split_list(entry.get("isbn")):
            candidates.append(("isbn", value, None))
        for value in split_list(entry.get("issn")):
            candidates.append(("issn", value, IdentifierType.ISSN))

        identifiers = []
        for field, value, id_type in candidates:
            try:
                if id_type is None:
                    id_type = classify_isbn(value)
                identifiers.append(Identifier.of(id_type, value))
            except IdentifierError as e:
                logger.warning(f"Dropping invalid {field} in {entry.citation_key}: {e}")
                issues.append(
                    ConversionIssue(
                        field=field,
                        message=e.message,
                        severity=IssueSeverity.WARNING,
                        entry_key=entry.citation_key,
                    )
                )
        return identifiers

    # BIBO -> BibTeX

    def to_source(self, document: Document) -> SourceEntry | None:
        """Convert a document into a BibTeX entry.

        Returns:
            The entry, or None when the document type has no BibTeX
            analogue (webpages without a configured fallback).
        """
        entry_type = to_entry_type(
            document.type, document.degree_type, self.config.webpage_fallback
        )
        if entry_type is None:
            logger.info(
                f"No BibTeX type for {document.type.value} document '{document.title}'"
            )
            return None

        key = self.citation_key(document)
        fields: dict[str, str] = {"title": self._to_latex(document.title)}

        if document.authors:
            fields["author"] = self._to_latex(format_names(document.authors))
        if document.editors:
            fields["editor"] = self._to_latex(format_names(document.editors))

        date = document.publication_date
        if date is not None:
            fields["year"] = f"{date.year:04d}"
            if date.month is not None:
                fields["month"] = month_abbreviation(date.month)
            if date.day is not None:
                fields["day"] = str(date.day)

        fields.update(self._write_identifiers(document))
        url = document.url or document.identifier(IdentifierType.URL)
        if url:
            fields["url"] = url

        for field, attribute in PLAIN_FIELDS:
            value = getattr(document, attribute)
            if value is not None:
                fields[field] = self._to_latex(value)

        if document.publisher:
            fields[publisher_field(entry_type)] = self._to_latex(document.publisher)
        if document.container_title:
            fields[container_field(entry_type)] = self._to_latex(
                document.container_title
            )
        if entry_type in CONFERENCE_TYPES and document.conference_organizer:
            fields["organization"] = self._to_latex(document.conference_organizer)
        if entry_type in THESIS_TYPES and document.degree_type:
            if not (
                entry_type is EntryType.MASTERSTHESIS
                and document.degree_type == MASTERS_DEGREE
            ):
                fields["type"] = self._to_latex(document.degree_type)
        if document.keywords:
            fields["keywords"] = self._to_latex(", ".join(document.keywords))

        logger.info(f"Converted {document.type.value} document to entry {key}")
        logger.debug(f"Entry type: {entry_type.value}, fields count: {len(fields)}")
        return SourceEntry(type=entry_type, citation_key=key, fields=fields)

    def _write_identifiers(self, document: Document) -> dict[str, str]:
        fields = {}
        grouped = {
            "doi": (IdentifierType.DOI,),
            "isbn": (IdentifierType.ISBN_10, IdentifierType.ISBN_13),
            "issn": (IdentifierType.ISSN,),
            "handle": (IdentifierType.HANDLE,),
            "uri": (IdentifierType.URI,),
        }
        for field, types in grouped.items():
            values = [i.value for i in document.identifiers_of(*types)]
            if values:
                fields[field] = ", ".join(values)

        for ident in document.identifiers_of(IdentifierType.OTHER):
            logger.debug(f"Skipping identifier without BibTeX field: {ident.value}")
        return fields

    def citation_key(self, document: Document) -> str:
        """Citation key for a document: its id, or one derived from it."""
        if document.id is not None:
            key = document.id.strip()
            if is_valid_key(key):
                return key
            logger.warning(
                f"Document id '{document.id}' is not a usable citation key, regenerating"
            )
        return generate_key(document, self.config.key_strategy)

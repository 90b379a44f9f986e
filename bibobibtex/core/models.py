"""Core data models for both sides of the conversion.

Key components:
- Document: Immutable BIBO document with typed contributors, dates and
  identifiers
- Contributor: A person in an author or editor role
- SourceEntry: Flat BibTeX record keyed by lower-cased field name
- ConversionIssue: Structured report of a non-fatal conversion problem
"""

import enum
from typing import Any

import msgspec

from .dates import PublicationDate
from .exceptions import MissingFieldError, ValidationError
from .fields import ContributorRole, DocumentType, EntryType, IdentifierType
from .identifiers import Identifier
from .names import PersonName


class Contributor(msgspec.Struct, frozen=True, kw_only=True):
    """A person contributing to a document in a given role."""

    name: PersonName
    role: ContributorRole


class Document(msgspec.Struct, frozen=True, kw_only=True):
    """Immutable BIBO document.

    Optional text fields are either trimmed non-blank strings or None.
    Contributors keep insertion order; authors are conventionally listed
    before editors. Build instances with ``DocumentBuilder``.
    """

    type: DocumentType
    title: str
    id: str | None = None
    subtitle: str | None = None
    contributors: tuple[Contributor, ...] = ()
    publication_date: PublicationDate | None = None
    publisher: str | None = None
    place_of_publication: str | None = None
    conference_organizer: str | None = None
    container_title: str | None = None
    volume: str | None = None
    issue: str | None = None
    pages: str | None = None
    identifiers: tuple[Identifier, ...] = ()
    url: str | None = None
    language: str | None = None
    abstract: str | None = None
    notes: str | None = None
    series: str | None = None
    edition: str | None = None
    degree_type: str | None = None
    keywords: tuple[str, ...] = ()

    def __post_init__(self):
        """Reject a blank title."""
        if not self.title or not self.title.strip():
            raise MissingFieldError("title", self.title)

    @property
    def authors(self) -> tuple[PersonName, ...]:
        """Author names in order."""
        return tuple(
            c.name for c in self.contributors if c.role is ContributorRole.AUTHOR
        )

    @property
    def editors(self) -> tuple[PersonName, ...]:
        """Editor names in order."""
        return tuple(
            c.name for c in self.contributors if c.role is ContributorRole.EDITOR
        )

    def identifiers_of(self, *types: IdentifierType) -> tuple[Identifier, ...]:
        """Identifiers of the given types, in document order."""
        return tuple(i for i in self.identifiers if i.type in types)

    def identifier(self, id_type: IdentifierType) -> str | None:
        """Value of the first identifier of a type."""
        for ident in self.identifiers:
            if ident.type is id_type:
                return ident.value
        return None


class SourceEntry(msgspec.Struct, frozen=True, kw_only=True):
    """A BibTeX record: entry type, citation key and raw field values."""

    type: EntryType
    citation_key: str
    fields: dict[str, str] = msgspec.field(default_factory=dict)

    def __post_init__(self):
        """Reject a blank citation key."""
        if not self.citation_key or not self.citation_key.strip():
            raise ValidationError(
                "Citation key cannot be blank", "citation_key", self.citation_key
            )

    @classmethod
    def create(
        cls,
        entry_type: EntryType | str,
        citation_key: str,
        fields: dict[str, Any] | None = None,
    ) -> "SourceEntry":
        """Create an entry, resolving the type name and lower-casing field names.

        Raises:
            UnsupportedTypeError: If the type name is unknown.
            ValidationError: If the citation key is blank.
        """
        normalized = {}
        for name, value in (fields or {}).items():
            if value is None:
                continue
            normalized[str(name).strip().lower()] = str(value)
        return cls(
            type=EntryType.from_name(entry_type),
            citation_key=citation_key.strip() if citation_key else citation_key,
            fields=normalized,
        )

    def get(self, name: str) -> str | None:
        """Trimmed field value, or None when missing or blank."""
        value = self.fields.get(name.lower())
        if value is None:
            return None
        value = value.strip()
        return value or None


class IssueSeverity(enum.Enum):
    """Severity levels for conversion issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ConversionIssue(msgspec.Struct):
    """Structured report of a problem found while converting an entry."""

    field: str | None
    message: str
    severity: IssueSeverity = IssueSeverity.ERROR
    entry_key: str | None = None

"""Fluent builders for documents and person names."""

from typing import Any

from .dates import PublicationDate
from .exceptions import MissingFieldError
from .fields import ContributorRole, DocumentType
from .identifiers import Identifier
from .models import Contributor, Document
from .names import PersonName


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class PersonNameBuilder:
    """Builder for person names."""

    def __init__(self):
        self._data: dict[str, str | None] = {}

    def full_name(self, full_name: str | None) -> "PersonNameBuilder":
        """Set the full name."""
        self._data["full_name"] = _clean(full_name)
        return self

    def given_name(self, given_name: str | None) -> "PersonNameBuilder":
        """Set the given name."""
        self._data["given_name"] = _clean(given_name)
        return self

    def family_name(self, family_name: str | None) -> "PersonNameBuilder":
        """Set the family name."""
        self._data["family_name"] = _clean(family_name)
        return self

    def build(self) -> PersonName:
        """Build the name.

        When no full name was set it is synthesized as ``"Family, Given"``
        from the parts, or from whichever single part is present.

        Raises:
            MissingFieldError: If no name part is present at all.
        """
        full = self._data.get("full_name")
        given = self._data.get("given_name")
        family = self._data.get("family_name")
        if full is None:
            if family and given:
                full = f"{family}, {given}"
            else:
                full = family or given
        if full is None:
            raise MissingFieldError("full_name")
        return PersonName(full_name=full, given_name=given, family_name=family)


class DocumentBuilder:
    """Builder for documents.

    Every string is trimmed and blank values are treated as absent.
    Required fields are only checked in ``build()``.
    """

    def __init__(self):
        self._data: dict[str, Any] = {}
        self._contributors: list[Contributor] = []
        self._identifiers: list[Identifier] = []
        self._keywords: list[str] = []

    def _set(self, field: str, value: str | None) -> "DocumentBuilder":
        cleaned = _clean(value)
        if cleaned is None:
            self._data.pop(field, None)
        else:
            self._data[field] = cleaned
        return self

    def type(self, doc_type: DocumentType) -> "DocumentBuilder":
        """Set document type."""
        self._data["type"] = doc_type
        return self

    def id(self, doc_id: str | None) -> "DocumentBuilder":
        """Set document id."""
        return self._set("id", doc_id)

    def title(self, title: str | None) -> "DocumentBuilder":
        """Set title."""
        return self._set("title", title)

    def subtitle(self, subtitle: str | None) -> "DocumentBuilder":
        """Set subtitle."""
        return self._set("subtitle", subtitle)

    def author(self, name: PersonName) -> "DocumentBuilder":
        """Append an author."""
        return self.contributor(name, ContributorRole.AUTHOR)

    def editor(self, name: PersonName) -> "DocumentBuilder":
        """Append an editor."""
        return self.contributor(name, ContributorRole.EDITOR)

    def contributor(self, name: PersonName, role: ContributorRole) -> "DocumentBuilder":
        """Append a contributor in the given role."""
        self._contributors.append(Contributor(name=name, role=role))
        return self

    def publication_date(self, date: PublicationDate | None) -> "DocumentBuilder":
        """Set publication date."""
        self._data["publication_date"] = date
        return self

    def publisher(self, publisher: str | None) -> "DocumentBuilder":
        """Set publisher."""
        return self._set("publisher", publisher)

    def place_of_publication(self, place: str | None) -> "DocumentBuilder":
        """Set place of publication."""
        return self._set("place_of_publication", place)

    def conference_organizer(self, organizer: str | None) -> "DocumentBuilder":
        """Set the organization running the conference."""
        return self._set("conference_organizer", organizer)

    def container_title(self, title: str | None) -> "DocumentBuilder":
        """Set title of the containing journal, book or proceedings."""
        return self._set("container_title", title)

    def volume(self, volume: str | None) -> "DocumentBuilder":
        """Set volume."""
        return self._set("volume", volume)

    def issue(self, issue: str | None) -> "DocumentBuilder":
        """Set issue."""
        return self._set("issue", issue)

    def pages(self, pages: str | None) -> "DocumentBuilder":
        """Set pages."""
        return self._set("pages", pages)

    def identifier(self, identifier: Identifier) -> "DocumentBuilder":
        """Append an identifier, ignoring exact duplicates."""
        if identifier not in self._identifiers:
            self._identifiers.append(identifier)
        return self

    def url(self, url: str | None) -> "DocumentBuilder":
        """Set URL."""
        return self._set("url", url)

    def language(self, language: str | None) -> "DocumentBuilder":
        """Set language."""
        return self._set("language", language)

    def abstract(self, abstract: str | None) -> "DocumentBuilder":
        """Set abstract."""
        return self._set("abstract", abstract)

    def notes(self, notes: str | None) -> "DocumentBuilder":
        """Set notes."""
        return self._set("notes", notes)

    def series(self, series: str | None) -> "DocumentBuilder":
        """Set series."""
        return self._set("series", series)

    def edition(self, edition: str | None) -> "DocumentBuilder":
        """Set edition."""
        return self._set("edition", edition)

    def degree_type(self, degree: str | None) -> "DocumentBuilder":
        """Set thesis degree."""
        return self._set("degree_type", degree)

    def keyword(self, keyword: str | None) -> "DocumentBuilder":
        """Append a keyword; blanks and repeats are ignored."""
        cleaned = _clean(keyword)
        if cleaned is not None and cleaned not in self._keywords:
            self._keywords.append(cleaned)
        return self

    def build(self) -> Document:
        """Build the document.

        Returns:
            Document with all configured fields.

        Raises:
            MissingFieldError: If type or title is missing.
        """
        if self._data.get("type") is None:
            raise MissingFieldError("type")
        if self._data.get("title") is None:
            raise MissingFieldError("title")

        return Document(
            **self._data,
            contributors=tuple(self._contributors),
            identifiers=tuple(self._identifiers),
            keywords=tuple(self._keywords),
        )

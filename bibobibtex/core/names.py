"""Contributor names and the BibTeX name-list format.

A name list is a sequence of names joined by the literal conjunction
``" and "``. Each name is either ``"Family, Given"`` or a single free-form
token that is kept whole.
"""

import msgspec

from .exceptions import ValidationError

NAME_SEPARATOR = " and "


def _normalize(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


class PersonName(msgspec.Struct, frozen=True, kw_only=True):
    """Structured personal name.

    ``full_name`` is always present; ``given_name`` and ``family_name`` are
    either trimmed non-blank strings or None.
    """

    full_name: str
    given_name: str | None = None
    family_name: str | None = None

    def __post_init__(self):
        """Reject blank names and blank-but-present parts."""
        if not self.full_name or not self.full_name.strip():
            raise ValidationError("Full name cannot be blank", "full_name", self.full_name)
        for field in ("given_name", "family_name"):
            value = getattr(self, field)
            if value is not None and not value.strip():
                raise ValidationError(f"{field} must be absent, not blank", field, value)

    @classmethod
    def of(
        cls,
        full_name: str,
        given_name: str | None = None,
        family_name: str | None = None,
    ) -> "PersonName":
        """Create a name, trimming parts and dropping blank ones."""
        full = _normalize(full_name)
        if full is None:
            raise ValidationError("Full name cannot be blank", "full_name", full_name)
        return cls(
            full_name=full,
            given_name=_normalize(given_name),
            family_name=_normalize(family_name),
        )

    @property
    def has_parts(self) -> bool:
        """True when both family and given names are known."""
        return self.family_name is not None and self.given_name is not None

    def to_bibtex(self) -> str:
        """Render as a single BibTeX name."""
        if self.has_parts:
            return f"{self.family_name}, {self.given_name}"
        return self.full_name


def parse_name(token: str) -> PersonName:
    """Parse a single name token.

    The token is split on its first comma into family and given name. When
    there is no comma the whole token becomes the full name.
    """
    token = token.strip()
    if "," not in token:
        return PersonName.of(token)

    family, given = token.split(",", 1)
    family = _normalize(family)
    given = _normalize(given)
    if family is not None and given is not None:
        return PersonName.of(f"{family}, {given}", given, family)
    return PersonName.of(token, given, family)


def parse_names(text: str | None) -> list[PersonName]:
    """Split a BibTeX name list into names, preserving order."""
    if not text or not text.strip():
        return []
    return [
        parse_name(token)
        for token in text.split(NAME_SEPARATOR)
        if token.strip()
    ]


def format_names(names: list[PersonName] | tuple[PersonName, ...]) -> str:
    """Join names back into a BibTeX name list."""
    return NAME_SEPARATOR.join(name.to_bibtex() for name in names)

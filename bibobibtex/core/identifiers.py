"""Identifier validation and normalization.

Checksums follow the published algorithms:

- ISBN-10: weights 10..1, sum modulo 11 must be 0 ('X' counts as 10)
- ISBN-13: alternating weights 1 and 3, sum modulo 10 must be 0
- ISSN: weights 8..2, check digit is (11 - sum mod 11) mod 11, 10 is 'X'

DOI, Handle, URL and URI values are checked for shape only. Every failure
is reported as an IdentifierError whose field is the identifier type and
whose value is the raw input.
"""

import re
from urllib.parse import urlparse

import msgspec

from .exceptions import IdentifierError
from .fields import IdentifierType

DOI_PATTERN = re.compile(r"^10\.[0-9]{4,}/\S+$")
DOI_PREFIXES = (
    "https://doi.org/",
    "http://doi.org/",
    "https://dx.doi.org/",
    "http://dx.doi.org/",
    "doi:",
)

HANDLE_PATTERN = re.compile(r"^[0-9]+(?:\.[0-9]+)*/.+$")

_SEPARATORS = re.compile(r"[\s-]")


def _compact(value: str) -> str:
    return _SEPARATORS.sub("", value).upper()


def isbn10_is_valid(isbn: str) -> bool:
    """Validate an ISBN-10 checksum on a compact value."""
    if not re.match(r"^[0-9]{9}[0-9X]$", isbn):
        return False

    total = 0
    for i in range(9):
        total += int(isbn[i]) * (10 - i)

    check = isbn[9]
    total += 10 if check == "X" else int(check)
    return total % 11 == 0


def isbn13_is_valid(isbn: str) -> bool:
    """Validate an ISBN-13 checksum on a compact value."""
    if not re.match(r"^[0-9]{13}$", isbn):
        return False

    total = 0
    for i, digit in enumerate(isbn):
        total += int(digit) * (1 if i % 2 == 0 else 3)
    return total % 10 == 0


def issn_check_digit(issn: str) -> str:
    """Compute the ISSN check character for the first seven digits."""
    total = 0
    for i in range(7):
        total += int(issn[i]) * (8 - i)

    check = (11 - total % 11) % 11
    return "X" if check == 10 else str(check)


def issn_is_valid(issn: str) -> bool:
    """Validate an ISSN checksum on a compact value."""
    if not re.match(r"^[0-9]{7}[0-9X]$", issn):
        return False
    return issn[7] == issn_check_digit(issn)


def strip_doi_prefix(doi: str) -> str:
    """Remove a resolver or ``doi:`` prefix from a DOI."""
    lowered = doi.lower()
    for prefix in DOI_PREFIXES:
        if lowered.startswith(prefix):
            return doi[len(prefix) :]
    return doi


def _validate_url(value: str, require_host: bool) -> bool:
    if any(ch.isspace() for ch in value):
        return False
    try:
        result = urlparse(value)
    except ValueError:
        return False
    if not result.scheme:
        return False
    if require_host:
        return bool(result.netloc)
    return bool(result.netloc or result.path)


def validate(id_type: IdentifierType, raw: str | None) -> str:
    """Validate a raw identifier string and return its normalized value.

    Args:
        id_type: Kind of identifier the value claims to be.
        raw: Raw value as found in the source record.

    Returns:
        Normalized identifier value.

    Raises:
        IdentifierError: If the value is blank or fails the format or
            checksum check for its type.
    """
    field = id_type.value
    value = raw.strip() if raw else ""
    if not value:
        raise IdentifierError("Identifier value cannot be blank", field, raw)

    if id_type is IdentifierType.ISBN_10:
        compact = _compact(value)
        if len(compact) != 10 or not isbn10_is_valid(compact):
            raise IdentifierError("Invalid ISBN-10", field, raw)
        return compact

    if id_type is IdentifierType.ISBN_13:
        compact = _compact(value)
        if len(compact) != 13 or not isbn13_is_valid(compact):
            raise IdentifierError("Invalid ISBN-13", field, raw)
        return compact

    if id_type is IdentifierType.ISSN:
        compact = _compact(value)
        if len(compact) != 8 or not issn_is_valid(compact):
            raise IdentifierError("Invalid ISSN", field, raw)
        return f"{compact[:4]}-{compact[4:]}"

    if id_type is IdentifierType.DOI:
        doi = strip_doi_prefix(value)
        if not DOI_PATTERN.match(doi):
            raise IdentifierError("Invalid DOI format", field, raw)
        return doi

    if id_type is IdentifierType.HANDLE:
        if not HANDLE_PATTERN.match(value):
            raise IdentifierError("Invalid Handle format", field, raw)
        return value

    if id_type is IdentifierType.URL:
        if not _validate_url(value, require_host=True):
            raise IdentifierError("Invalid URL", field, raw)
        return value

    if id_type is IdentifierType.URI:
        if not _validate_url(value, require_host=False):
            raise IdentifierError("Invalid URI", field, raw)
        return value

    return value


def is_valid(id_type: IdentifierType, raw: str | None) -> bool:
    """Check a raw identifier without raising."""
    try:
        validate(id_type, raw)
    except IdentifierError:
        return False
    return True


def classify_isbn(raw: str) -> IdentifierType:
    """Pick ISBN-10 or ISBN-13 from the length of the compact value.

    Raises:
        IdentifierError: If the value has neither 10 nor 13 characters.
    """
    compact = _compact(raw or "")
    if len(compact) == 10:
        return IdentifierType.ISBN_10
    if len(compact) == 13:
        return IdentifierType.ISBN_13
    raise IdentifierError("ISBN must have 10 or 13 characters", "isbn", raw)


class Identifier(msgspec.Struct, frozen=True, kw_only=True):
    """Typed document identifier.

    A value can only exist if it passed the validator for its type; use
    ``Identifier.of`` to normalize raw input on the way in.
    """

    type: IdentifierType
    value: str

    def __post_init__(self):
        """Reject blank or invalid values."""
        if self.value != self.value.strip():
            raise IdentifierError(
                "Identifier value must be trimmed", self.type.value, self.value
            )
        validate(self.type, self.value)

    @classmethod
    def of(cls, id_type: IdentifierType, raw: str) -> "Identifier":
        """Validate and normalize a raw value into an Identifier."""
        return cls(type=id_type, value=validate(id_type, raw))

"""Page range parsing."""

import re

import msgspec

RANGE_PATTERN = re.compile(r"^\s*([0-9A-Za-z]+)\s*(?:-{1,3}|–|—)\s*([0-9A-Za-z]+)\s*$")
SINGLE_PATTERN = re.compile(r"^\s*([0-9A-Za-z]+)\s*$")
ROMAN_PATTERN = re.compile(r"^[ivxlcdm]+$", re.IGNORECASE)


def _is_page(token: str) -> bool:
    return token.isdigit() or bool(ROMAN_PATTERN.match(token))


class PageRange(msgspec.Struct, frozen=True, kw_only=True):
    """Start and end page of a ``pages`` field.

    ``text`` is the original field value; ``start`` and ``end`` are None
    when the value could not be read as a page or a range.
    """

    text: str
    start: str | None = None
    end: str | None = None

    @classmethod
    def parse(cls, text: str) -> "PageRange":
        """Read ``12-34``, ``12--34``, ``xi-xv`` or a single page."""
        match = RANGE_PATTERN.match(text)
        if match and _is_page(match.group(1)) and _is_page(match.group(2)):
            return cls(text=text, start=match.group(1), end=match.group(2))

        match = SINGLE_PATTERN.match(text)
        if match and _is_page(match.group(1)):
            return cls(text=text, start=match.group(1), end=match.group(1))

        return cls(text=text)

    def page_count(self) -> int | None:
        """Number of pages when both ends are arabic numerals."""
        if self.start is None or self.end is None:
            return None
        if not (self.start.isdigit() and self.end.isdigit()):
            return None
        count = int(self.end) - int(self.start) + 1
        return count if count > 0 else None

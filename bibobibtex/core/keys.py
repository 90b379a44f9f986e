"""Citation key generation for documents without an id.

Keys are deterministic functions of the document: the same document always
yields the same key, and no record of issued keys is kept. Callers that
need unique keys across a collection must resolve collisions themselves.
"""

import hashlib
import re
import unicodedata
from enum import Enum, unique

from .models import Document

MAX_KEY_LENGTH = 64

NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")

# Characters BibTeX cannot carry inside a citation key
INVALID_KEY_CHARS = re.compile(r"[\s,{}()\"#%'=\\~]")


@unique
class KeyStrategy(Enum):
    """How to derive a citation key from a document."""

    TITLE = "title"
    AUTHOR_YEAR = "author_year"
    AUTHOR_TITLE = "author_title"
    HASH = "hash"


def slugify(text: str) -> str:
    """Accent-free lowercase slug with non-alphanumeric runs collapsed to ``_``.

    Returns ``"entry"`` when nothing alphanumeric remains.
    """
    decomposed = unicodedata.normalize("NFKD", text or "")
    ascii_text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = NON_ALPHANUMERIC.sub("_", ascii_text.lower()).strip("_")
    return slug or "entry"


def is_valid_key(key: str | None) -> bool:
    """Check that a string can be used verbatim as a citation key."""
    if not key or len(key) > MAX_KEY_LENGTH:
        return False
    return not INVALID_KEY_CHARS.search(key)


def clamp(key: str) -> str:
    """Slugify and cut a key to the maximum length."""
    return slugify(key)[:MAX_KEY_LENGTH].rstrip("_") or "entry"


def _first_author(document: Document) -> str | None:
    for name in document.authors:
        return name.family_name or name.full_name
    return None


def _author_year(document: Document) -> str:
    author = _first_author(document) or document.title
    date = document.publication_date
    year = str(date.year) if date else "nd"
    return f"{author}_{year}"


def _author_title(document: Document) -> str:
    author = _first_author(document) or document.title
    first_word = slugify(document.title).split("_")[0]
    return f"{author}_{first_word}"


def _hash(document: Document) -> str:
    digest = hashlib.md5()
    digest.update(document.title.encode("utf-8"))
    for name in document.authors:
        digest.update(name.full_name.encode("utf-8"))
    if document.publication_date:
        digest.update(str(document.publication_date.year).encode("utf-8"))
    digest.update(document.type.value.encode("utf-8"))
    return digest.hexdigest()[:8]


def generate_key(document: Document, strategy: KeyStrategy = KeyStrategy.TITLE) -> str:
    """Derive a citation key for a document.

    Args:
        document: Document to derive the key from.
        strategy: Key derivation strategy.

    Returns:
        Slugified key of at most ``MAX_KEY_LENGTH`` characters.
    """
    if strategy is KeyStrategy.AUTHOR_YEAR:
        return clamp(_author_year(document))
    if strategy is KeyStrategy.AUTHOR_TITLE:
        return clamp(_author_title(document))
    if strategy is KeyStrategy.HASH:
        return _hash(document)
    return clamp(document.title)

"""Tests for citation key generation."""

import pytest

from bibobibtex.core.builders import DocumentBuilder
from bibobibtex.core.dates import PublicationDate
from bibobibtex.core.fields import DocumentType
from bibobibtex.core.keys import (
    MAX_KEY_LENGTH,
    KeyStrategy,
    generate_key,
    is_valid_key,
    slugify,
)
from bibobibtex.core.names import PersonName


@pytest.fixture
def document():
    """Article with an accented author and a year."""
    return (
        DocumentBuilder()
        .type(DocumentType.ARTICLE)
        .title("The Art of Computer Programming")
        .author(PersonName.of("Müller, Jörg", "Jörg", "Müller"))
        .publication_date(PublicationDate(year=1968))
        .build()
    )


class TestSlugify:
    """Test slug generation."""

    def test_accents_and_punctuation(self) -> None:
        """Accents are stripped and separators collapsed."""
        assert slugify("Éléments de géométrie: Tome 1!") == "elements_de_geometrie_tome_1"

    def test_empty_slug(self) -> None:
        """Nothing alphanumeric gives 'entry'."""
        assert slugify("!!!") == "entry"
        assert slugify("") == "entry"


class TestStrategies:
    """Test the key strategies."""

    def test_title_is_default(self, document) -> None:
        """The default key is the title slug."""
        assert generate_key(document) == "the_art_of_computer_programming"

    def test_author_year(self, document) -> None:
        """First author family name and year."""
        assert generate_key(document, KeyStrategy.AUTHOR_YEAR) == "muller_1968"

    def test_author_year_without_date(self) -> None:
        """Missing years are written as nd."""
        document = (
            DocumentBuilder()
            .type(DocumentType.BOOK)
            .title("T")
            .author(PersonName.of("Plato"))
            .build()
        )
        assert generate_key(document, KeyStrategy.AUTHOR_YEAR) == "plato_nd"

    def test_author_title(self, document) -> None:
        """First author family name and first title word."""
        assert generate_key(document, KeyStrategy.AUTHOR_TITLE) == "muller_the"

    def test_hash_is_deterministic(self, document) -> None:
        """Hash keys are eight hex characters and stable."""
        key = generate_key(document, KeyStrategy.HASH)

        assert len(key) == 8
        assert all(c in "0123456789abcdef" for c in key)
        assert generate_key(document, KeyStrategy.HASH) == key

    def test_keys_are_clamped(self) -> None:
        """Long titles are cut to the maximum key length."""
        document = DocumentBuilder().type(DocumentType.BOOK).title("word " * 40).build()
        key = generate_key(document)

        assert len(key) <= MAX_KEY_LENGTH
        assert not key.endswith("_")


class TestKeyValidity:
    """Test which ids can be used verbatim as keys."""

    @pytest.mark.parametrize("key", ["smith2024", "smith:2024", "10.1000/x", "RFC-8259"])
    def test_valid(self, key: str) -> None:
        """Common key shapes are accepted."""
        assert is_valid_key(key)

    @pytest.mark.parametrize("key", ["", "smith 2024", "a,b", "smith{2024}", "x" * 65])
    def test_invalid(self, key: str) -> None:
        """Whitespace, commas, braces and long keys are rejected."""
        assert not is_valid_key(key)

"""Pytest configuration and fixtures."""

import os

import pytest

from bibobibtex.core.converter import BibliographicConverter
from bibobibtex.core.fields import EntryType
from bibobibtex.core.models import SourceEntry


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Isolate environment variables for each test.

    This prevents test pollution where one test's environment
    changes affect other tests.
    """
    original_env = os.environ.copy()
    for name in list(os.environ):
        if name.startswith("BIBOBIBTEX_"):
            monkeypatch.delenv(name)

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def converter() -> BibliographicConverter:
    """Converter with default configuration."""
    return BibliographicConverter()


@pytest.fixture
def proceedings_entry() -> SourceEntry:
    """In-proceedings entry with contributors, a full date and a DOI."""
    return SourceEntry.create(
        EntryType.INPROCEEDINGS,
        "smith2023",
        {
            "title": "Proceedings Example",
            "author": "Smith, Alice and Doe, Bob",
            "editor": "Editor, Evan",
            "year": "2023",
            "month": "feb",
            "day": "10",
            "volume": "12",
            "number": "4",
            "pages": "10-20",
            "doi": "10.1000/example-doi",
        },
    )


@pytest.fixture
def article_entry() -> SourceEntry:
    """Journal article with identifiers and LaTeX escapes."""
    return SourceEntry.create(
        "article",
        "muller2020",
        {
            "Title": "Caf{\\'e} culture and the {\\\"o}konomie of attention",
            "Author": "M{\\\"u}ller, J{\\\"o}rg and Knuth, Donald E.",
            "Journal": "Journal of Examples",
            "Year": "2020",
            "Month": "3",
            "ISSN": "0317-8471",
            "URL": "https://example.org/papers/42",
            "Keywords": "attention; economics, culture",
            "Publisher": "Example Press",
            "Address": "Berlin",
        },
    )

"""Core models, validators and mapping tables for BibTeX/BIBO conversion."""

# Builders
from bibobibtex.core.builders import (
    DocumentBuilder,
    PersonNameBuilder,
)

# Dates
from bibobibtex.core.dates import (
    PublicationDate,
    parse_date,
)

# Errors
from bibobibtex.core.exceptions import (
    ConversionError,
    DateError,
    GraphStructureError,
    IdentifierError,
    MissingFieldError,
    UnsupportedTypeError,
    ValidationError,
)

# Fields and types
from bibobibtex.core.fields import (
    ContributorRole,
    DocumentType,
    EntryType,
    IdentifierType,
)

# Identifiers
from bibobibtex.core.identifiers import (
    Identifier,
    validate,
)

# Citation keys
from bibobibtex.core.keys import (
    KeyStrategy,
    generate_key,
    slugify,
)

# Models
from bibobibtex.core.models import (
    ConversionIssue,
    Contributor,
    Document,
    IssueSeverity,
    SourceEntry,
)

# Names
from bibobibtex.core.names import (
    PersonName,
    format_names,
    parse_names,
)

__all__ = [
    # Builders
    "DocumentBuilder",
    "PersonNameBuilder",
    # Dates
    "PublicationDate",
    "parse_date",
    # Errors
    "ConversionError",
    "DateError",
    "GraphStructureError",
    "IdentifierError",
    "MissingFieldError",
    "UnsupportedTypeError",
    "ValidationError",
    # Fields and types
    "ContributorRole",
    "DocumentType",
    "EntryType",
    "IdentifierType",
    # Identifiers
    "Identifier",
    "validate",
    # Citation keys
    "KeyStrategy",
    "generate_key",
    "slugify",
    # Models
    "ConversionIssue",
    "Contributor",
    "Document",
    "IssueSeverity",
    "SourceEntry",
    # Names
    "PersonName",
    "format_names",
    "parse_names",
]

"""Bidirectional conversion between BibTeX entries and BIBO documents."""

from bibobibtex.core.converter import BibliographicConverter
from bibobibtex.config import ConverterConfig, load_converter_config
from bibobibtex.operations import BatchConverter
from bibobibtex.rdf import GraphDecoder, GraphEncoder

__version__ = "0.1.0"

__all__ = [
    "BatchConverter",
    "BibliographicConverter",
    "ConverterConfig",
    "GraphDecoder",
    "GraphEncoder",
    "load_converter_config",
]

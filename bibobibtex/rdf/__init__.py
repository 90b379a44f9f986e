"""RDF graph persistence for documents."""

from bibobibtex.rdf.graph import GraphDecoder, GraphEncoder, convert_format, parse_graph
from bibobibtex.rdf.vocabulary import BIBO, BIBO_EXT

__all__ = [
    "BIBO",
    "BIBO_EXT",
    "GraphDecoder",
    "GraphEncoder",
    "convert_format",
    "parse_graph",
]

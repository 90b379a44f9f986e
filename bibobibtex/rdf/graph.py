"""Encoding documents as RDF graphs and reading them back.

Contributors are stored as RDF lists (``rdf:first``/``rdf:rest`` chains
ending in ``rdf:nil``) so that author order survives a round trip through
an unordered statement set. Every other property is a plain statement on
the document subject.
"""

import logging
import re
import uuid
from collections.abc import Callable, Iterable
from urllib.parse import quote, urlparse

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.collection import Collection
from rdflib.namespace import DCTERMS, RDF, XSD
from rdflib.term import Node

from ..core.builders import DocumentBuilder, PersonNameBuilder
from ..core.dates import PublicationDate
from ..core.exceptions import (
    ConversionError,
    GraphStructureError,
    IdentifierError,
    MissingFieldError,
)
from ..core.fields import DocumentType
from ..core.identifiers import Identifier
from ..core.models import Document
from ..core.names import PersonName
from ..core.pages import PageRange
from .vocabulary import (
    AUTHOR_LIST,
    BIBO,
    BIBO_EXT,
    CLASS_TYPES,
    DOCUMENT_CLASS,
    EDITOR_LIST,
    IDENTIFIER_PREDICATES,
    IS_PART_OF,
    ISSUED,
    LITERAL_PREDICATES,
    PAGE,
    PAGE_END,
    PAGE_START,
    PERSON_CLASS,
    PERSON_FAMILY_NAME,
    PERSON_GIVEN_NAME,
    PERSON_NAME,
    SUBJECT,
    TYPE_CLASSES,
)

logger = logging.getLogger(__name__)

ISSUED_PATTERN = re.compile(r"^([0-9]{4})(?:-([0-9]{2})(?:-([0-9]{2}))?)?$")
IRI_FORBIDDEN = set('<>"{}|^`\\')


def default_id_generator() -> str:
    """Fresh opaque subject IRI."""
    return f"urn:uuid:{uuid.uuid4()}"


def is_absolute_iri(value: str) -> bool:
    """True when the value has a scheme and no characters IRIs forbid."""
    if any(ch.isspace() or ch in IRI_FORBIDDEN for ch in value):
        return False
    try:
        result = urlparse(value)
    except ValueError:
        return False
    return bool(result.scheme) and bool(result.netloc or result.path)


def _issued_literal(date: PublicationDate) -> Literal:
    if date.day is not None:
        datatype = XSD.date
    elif date.month is not None:
        datatype = XSD.gYearMonth
    else:
        datatype = XSD.gYear
    return Literal(date.isoformat(), datatype=datatype)


def new_graph() -> Graph:
    """Empty graph with the document prefixes bound."""
    graph = Graph()
    graph.bind("bibo", BIBO)
    graph.bind("biboext", BIBO_EXT)
    graph.bind("dcterms", DCTERMS)
    return graph


def parse_graph(text: str, format: str = "turtle") -> Graph:
    """Parse serialized RDF into a graph.

    Raises:
        GraphStructureError: If the text is not valid in the given format.
    """
    graph = new_graph()
    try:
        graph.parse(data=text, format=format)
    except Exception as e:
        raise GraphStructureError(
            f"Cannot parse {format} input: {e}", "format", format
        ) from e
    return graph


def convert_format(text: str, source_format: str, target_format: str) -> str:
    """Re-serialize RDF text from one format into another."""
    return parse_graph(text, source_format).serialize(format=target_format)


class GraphEncoder:
    """Writes documents into an RDF graph.

    Args:
        base_uri: Prefix for documents whose id is not an absolute IRI.
        id_generator: Callable returning a subject IRI for documents that
            cannot be named from their id.
    """

    def __init__(
        self,
        base_uri: str | None = None,
        id_generator: Callable[[], str] | None = None,
    ):
        self.base_uri = base_uri
        self.id_generator = id_generator or default_id_generator

    def subject_for(self, document: Document) -> URIRef:
        """Subject IRI for a document."""
        if document.id:
            if is_absolute_iri(document.id):
                return URIRef(document.id)
            if self.base_uri:
                return URIRef(self.base_uri + quote(document.id, safe=""))
        return URIRef(self.id_generator())

    def encode(
        self, document: Document, graph: Graph | None = None
    ) -> tuple[Graph, URIRef]:
        """Add the statements for a document to a graph.

        Args:
            document: Document to encode.
            graph: Graph to add to; a new one is created when omitted.

        Returns:
            Tuple of (graph, subject).
        """
        if graph is None:
            graph = new_graph()
        subject = self.subject_for(document)

        graph.add((subject, RDF.type, DOCUMENT_CLASS))
        type_class = TYPE_CLASSES[document.type]
        if type_class != DOCUMENT_CLASS:
            graph.add((subject, RDF.type, type_class))

        for attribute, predicate in LITERAL_PREDICATES.items():
            value = getattr(document, attribute)
            if value is not None:
                graph.add((subject, predicate, Literal(value)))

        if document.publication_date is not None:
            graph.add((subject, ISSUED, _issued_literal(document.publication_date)))

        if document.container_title:
            container = BNode()
            graph.add((subject, IS_PART_OF, container))
            graph.add((container, DCTERMS.title, Literal(document.container_title)))

        if document.pages:
            page_range = PageRange.parse(document.pages)
            if page_range.start is not None:
                graph.add((subject, PAGE_START, Literal(page_range.start)))
                graph.add((subject, PAGE_END, Literal(page_range.end)))

        for identifier in document.identifiers:
            predicate = IDENTIFIER_PREDICATES[identifier.type]
            graph.add((subject, predicate, Literal(identifier.value)))

        if document.url:
            if is_absolute_iri(document.url):
                graph.add((subject, PAGE, URIRef(document.url)))
            else:
                logger.debug(f"URL of {subject} is not an IRI, storing it as text")
                graph.add((subject, PAGE, Literal(document.url)))

        for keyword in document.keywords:
            graph.add((subject, SUBJECT, Literal(keyword)))

        self._add_people(graph, subject, AUTHOR_LIST, document.authors)
        self._add_people(graph, subject, EDITOR_LIST, document.editors)

        logger.debug(f"Encoded '{document.title}' as {subject}")
        return graph, subject

    def _add_people(
        self,
        graph: Graph,
        subject: URIRef,
        predicate: URIRef,
        names: tuple[PersonName, ...],
    ) -> None:
        if not names:
            return
        people = [self._add_person(graph, name) for name in names]
        head = BNode()
        Collection(graph, head, people)
        graph.add((subject, predicate, head))

    def _add_person(self, graph: Graph, name: PersonName) -> BNode:
        person = BNode()
        graph.add((person, RDF.type, PERSON_CLASS))
        graph.add((person, PERSON_NAME, Literal(name.full_name)))
        if name.given_name:
            graph.add((person, PERSON_GIVEN_NAME, Literal(name.given_name)))
        if name.family_name:
            graph.add((person, PERSON_FAMILY_NAME, Literal(name.family_name)))
        return person

    def serialize(self, document: Document, format: str = "turtle") -> str:
        """Encode a document into a fresh graph and serialize it."""
        graph, _ = self.encode(document)
        return graph.serialize(format=format)

    def serialize_all(self, documents: Iterable[Document], format: str = "turtle") -> str:
        """Encode several documents into one graph and serialize it."""
        graph = new_graph()
        for document in documents:
            self.encode(document, graph)
        return graph.serialize(format=format)


class GraphDecoder:
    """Reads documents back out of an RDF graph."""

    def decode(self, graph: Graph, subject: Node) -> Document:
        """Rebuild the document rooted at a subject.

        Raises:
            GraphStructureError: If the subject has no BIBO type, a
                single-valued property has several values, or a contributor
                list is broken.
            MissingFieldError: If the title is missing.
            DateError: If the issued date is not a valid calendar date.
        """
        builder = DocumentBuilder().type(self._document_type(graph, subject))

        for attribute, predicate in LITERAL_PREDICATES.items():
            getattr(builder, attribute)(self._single(graph, subject, predicate))

        issued = self._single(graph, subject, ISSUED)
        if issued is not None:
            builder.publication_date(self._parse_issued(issued))

        for container in graph.objects(subject, IS_PART_OF):
            builder.container_title(self._single(graph, container, DCTERMS.title))

        for id_type, predicate in IDENTIFIER_PREDICATES.items():
            for value in sorted(str(o) for o in graph.objects(subject, predicate)):
                try:
                    builder.identifier(Identifier.of(id_type, value))
                except IdentifierError as e:
                    logger.warning(f"Ignoring invalid identifier on {subject}: {e}")

        builder.url(self._single(graph, subject, PAGE))

        for keyword in sorted(str(o) for o in graph.objects(subject, SUBJECT)):
            builder.keyword(keyword)

        for name in self._read_people(graph, subject, AUTHOR_LIST):
            builder.author(name)
        for name in self._read_people(graph, subject, EDITOR_LIST):
            builder.editor(name)

        return builder.build()

    def decode_all(self, graph: Graph) -> list[Document]:
        """Decode every typed document subject, skipping malformed ones."""
        documents = []
        for subject in self.document_subjects(graph):
            try:
                documents.append(self.decode(graph, subject))
            except ConversionError as e:
                logger.warning(f"Skipping malformed document {subject}: {e}")
        return documents

    def parse(self, text: str, format: str = "turtle") -> list[Document]:
        """Read serialized RDF text and decode every document in it.

        Raises:
            GraphStructureError: If the text cannot be parsed in the format.
        """
        return self.decode_all(parse_graph(text, format))

    def document_subjects(self, graph: Graph) -> list[Node]:
        """Subjects typed as BIBO documents, in a stable order."""
        classes = {DOCUMENT_CLASS, *CLASS_TYPES}
        containers = set(graph.objects(None, IS_PART_OF))
        subjects = {
            s
            for s, o in graph.subject_objects(RDF.type)
            if o in classes and s not in containers
        }
        return sorted(subjects, key=str)

    def _document_type(self, graph: Graph, subject: Node) -> DocumentType:
        types = set(graph.objects(subject, RDF.type))
        specific = {CLASS_TYPES[t] for t in types if t in CLASS_TYPES}
        if len(specific) > 1:
            names = ", ".join(sorted(t.value for t in specific))
            raise GraphStructureError(
                f"Subject has conflicting document types: {names}", "rdf:type", str(subject)
            )
        if specific:
            return specific.pop()
        if DOCUMENT_CLASS in types:
            return DocumentType.OTHER
        raise GraphStructureError("Subject has no BIBO type", "rdf:type", str(subject))

    def _single(self, graph: Graph, subject: Node, predicate: URIRef) -> str | None:
        values = list(graph.objects(subject, predicate))
        if not values:
            return None
        if len(values) > 1:
            raise GraphStructureError(
                "Expected a single value", str(predicate), str(subject)
            )
        return str(values[0])

    def _parse_issued(self, value: str) -> PublicationDate:
        match = ISSUED_PATTERN.match(value.strip())
        if not match:
            raise GraphStructureError("Unreadable issued date", "issued", value)
        year, month, day = match.groups()
        return PublicationDate(
            year=int(year),
            month=int(month) if month else None,
            day=int(day) if day else None,
        )

    def _read_people(
        self, graph: Graph, subject: Node, predicate: URIRef
    ) -> list[PersonName]:
        heads = list(graph.objects(subject, predicate))
        if not heads:
            return []
        if len(heads) > 1:
            raise GraphStructureError(
                "Several contributor lists", str(predicate), str(subject)
            )
        return [self._read_person(graph, node) for node in self.read_list(graph, heads[0])]

    def read_list(self, graph: Graph, head: Node) -> list[Node]:
        """Walk an RDF list into its members, in list order.

        Raises:
            GraphStructureError: If the chain loops, forks, has a cell
                without ``rdf:first`` or stops before ``rdf:nil``.
        """
        items = []
        visited = set()
        node = head
        while node != RDF.nil:
            if node in visited:
                raise GraphStructureError("Cycle in RDF list", "rdf:rest", str(node))
            visited.add(node)

            firsts = list(graph.objects(node, RDF.first))
            rests = list(graph.objects(node, RDF.rest))
            if not firsts:
                raise GraphStructureError("List cell without rdf:first", "rdf:first", str(node))
            if len(firsts) > 1 or len(rests) > 1:
                raise GraphStructureError("Forked RDF list", "rdf:rest", str(node))
            if not rests:
                raise GraphStructureError("RDF list does not end in rdf:nil", "rdf:rest", str(node))

            items.append(firsts[0])
            node = rests[0]
        return items

    def _read_person(self, graph: Graph, node: Node) -> PersonName:
        if isinstance(node, Literal):
            return PersonName.of(str(node))
        try:
            return (
                PersonNameBuilder()
                .full_name(self._single(graph, node, PERSON_NAME))
                .given_name(self._single(graph, node, PERSON_GIVEN_NAME))
                .family_name(self._single(graph, node, PERSON_FAMILY_NAME))
                .build()
            )
        except MissingFieldError:
            raise GraphStructureError("Contributor without a name", "foaf:name", str(node)) from None

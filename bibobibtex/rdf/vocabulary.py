"""RDF vocabulary used to persist documents."""

from rdflib import Namespace, URIRef
from rdflib.namespace import DCTERMS, FOAF, RDFS

from ..core.fields import DocumentType, IdentifierType

BIBO = Namespace("http://purl.org/ontology/bibo/")
BIBO_EXT = Namespace("http://purl.org/ontology/bibo-ext/")

DOCUMENT_CLASS = BIBO.Document

# Document type -> BIBO class; OTHER is a plain bibo:Document
TYPE_CLASSES: dict[DocumentType, URIRef] = {
    DocumentType.ARTICLE: BIBO.Article,
    DocumentType.BOOK: BIBO.Book,
    DocumentType.BOOK_SECTION: BIBO.BookSection,
    DocumentType.THESIS: BIBO.Thesis,
    DocumentType.REPORT: BIBO.Report,
    DocumentType.CONFERENCE_PAPER: BIBO.ConferencePaper,
    DocumentType.WEBPAGE: BIBO.Webpage,
    DocumentType.OTHER: BIBO.Document,
}

CLASS_TYPES: dict[URIRef, DocumentType] = {
    cls: doc_type
    for doc_type, cls in TYPE_CLASSES.items()
    if doc_type is not DocumentType.OTHER
}

IDENTIFIER_PREDICATES: dict[IdentifierType, URIRef] = {
    IdentifierType.DOI: BIBO.doi,
    IdentifierType.ISBN_10: BIBO.isbn10,
    IdentifierType.ISBN_13: BIBO.isbn13,
    IdentifierType.ISSN: BIBO.issn,
    IdentifierType.HANDLE: BIBO.handle,
    IdentifierType.URI: BIBO.uri,
    IdentifierType.URL: BIBO_EXT.url,
    IdentifierType.OTHER: BIBO.identifier,
}

# Plain literal properties: Document attribute -> predicate
LITERAL_PREDICATES: dict[str, URIRef] = {
    "title": DCTERMS.title,
    "subtitle": BIBO.subtitle,
    "id": DCTERMS.identifier,
    "publisher": DCTERMS.publisher,
    "place_of_publication": DCTERMS.spatial,
    "conference_organizer": BIBO.organizer,
    "volume": BIBO.volume,
    "issue": BIBO.issue,
    "pages": BIBO.pages,
    "language": DCTERMS.language,
    "abstract": DCTERMS.abstract,
    "notes": RDFS.comment,
    "series": BIBO_EXT.series,
    "edition": BIBO.edition,
    "degree_type": BIBO.degree,
}

ISSUED = DCTERMS.issued
IS_PART_OF = DCTERMS.isPartOf
PAGE_START = BIBO.pageStart
PAGE_END = BIBO.pageEnd
PAGE = FOAF.page
SUBJECT = DCTERMS.subject
AUTHOR_LIST = BIBO.authorList
EDITOR_LIST = BIBO.editorList

PERSON_CLASS = FOAF.Person
PERSON_NAME = FOAF.name
PERSON_GIVEN_NAME = FOAF.givenName
PERSON_FAMILY_NAME = FOAF.familyName

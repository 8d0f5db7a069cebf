"""
Document store abstraction.

The API talks to persistence only through ``DocumentStore``: named
collections of schemaless documents keyed by opaque, store-assigned
IDs.  Nested collections are addressed with slash-separated paths
built by ``subcollection`` (``users/<user_id>/rented_movies``).

Queries are described by an immutable ``DocumentQuery`` built with
``where_equals``, ``order_by``, ``offset`` and ``limit``; each builder
call returns a new query.  The store owning the query executes it.
Ordering follows document-store conventions: documents lacking an
ordering field are left out of an ordered query, values of different
types sort by type first (null, booleans, numbers, strings, others)
and ties are broken by document ID.

Two implementations exist: ``InMemoryDocumentStore`` below, and
``SqliteDocumentStore`` in ``core.db``.
"""

from __future__ import annotations

import copy
import json
import re
import secrets
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple


Document = Dict[str, Any]
DocumentRow = Tuple[str, Document]

ASCENDING = "asc"
DESCENDING = "desc"

_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 20
_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class StoreError(Exception):
    """Any failure of the underlying document store."""


class DocumentNotFoundError(StoreError):
    """An update targeted a document that does not exist."""

    def __init__(self, collection: str, doc_id: str) -> None:
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"No document {doc_id!r} in collection {collection!r}")


def generate_document_id() -> str:
    """Return a random 20 character alphanumeric document ID."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def subcollection(parent: str, parent_id: str, name: str) -> str:
    """Path of the collection ``name`` nested under a parent document."""
    return f"{parent}/{parent_id}/{name}"


def check_field_name(field: str) -> str:
    if not _FIELD_NAME.match(field):
        raise ValueError(f"Invalid field name: {field!r}")
    return field


def type_rank(value: Any) -> int:
    """Rank of a value's type in cross-type ordering."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return 1
    if isinstance(value, (int, float)):
        return 2
    if isinstance(value, str):
        return 3
    return 4


def sort_key(value: Any) -> Tuple[int, Any]:
    rank = type_rank(value)
    if rank == 0:
        return rank, 0
    if rank == 4:
        return rank, json.dumps(value, sort_keys=True, default=str)
    return rank, value


def values_equal(stored: Any, expected: Any) -> bool:
    """Equality that keeps booleans and numbers apart (``True != 1``)."""
    if type_rank(stored) != type_rank(expected):
        return False
    return stored == expected


@dataclass(frozen=True)
class DocumentQuery:
    """Filterable, orderable and paginatable view of one collection."""

    store: "DocumentStore"
    collection: str
    filters: Tuple[Tuple[str, Any], ...] = ()
    orders: Tuple[Tuple[str, str], ...] = ()
    skip: int = 0
    take: Optional[int] = None

    def where_equals(self, field: str, value: Any) -> "DocumentQuery":
        check_field_name(field)
        if type_rank(value) == 4:
            raise ValueError(f"Equality filters support scalar values only, got {type(value).__name__}")
        return replace(self, filters=self.filters + ((field, value),))

    def order_by(self, field: str, direction: str = ASCENDING) -> "DocumentQuery":
        check_field_name(field)
        direction = direction.lower()
        if direction not in {ASCENDING, DESCENDING}:
            raise ValueError(f"Invalid order direction: {direction!r}")
        return replace(self, orders=self.orders + ((field, direction),))

    def offset(self, count: int) -> "DocumentQuery":
        if count < 0:
            raise ValueError("Offset must be non-negative")
        return replace(self, skip=count)

    def limit(self, count: int) -> "DocumentQuery":
        if count < 0:
            raise ValueError("Limit must be non-negative")
        return replace(self, take=count)

    @property
    def descending_ids(self) -> bool:
        """Tie-break direction: follows the last ordering clause."""
        return bool(self.orders) and self.orders[-1][1] == DESCENDING

    async def execute(self) -> List[DocumentRow]:
        """Run the query and return ``(id, document)`` pairs in order."""
        return await self.store.run_query(self)

    async def count(self) -> int:
        """Number of matching documents, ignoring offset and limit."""
        return await self.store.count_query(self)


class DocumentStore(ABC):
    """Capabilities the API consumes from a document store.

    Every method raises ``StoreError`` when the backend fails.
    """

    def query(self, collection: str) -> DocumentQuery:
        return DocumentQuery(store=self, collection=collection)

    async def list_documents(self, collection: str) -> List[DocumentRow]:
        return await self.query(collection).execute()

    @abstractmethod
    async def add_document(self, collection: str, fields: Document) -> str:
        """Insert a new document and return its generated ID."""

    @abstractmethod
    async def get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return the document or ``None`` if it does not exist."""

    @abstractmethod
    async def update_document(self, collection: str, doc_id: str, fields: Document) -> None:
        """Overwrite the given fields, keeping the others.

        Raises ``DocumentNotFoundError`` if the document does not exist.
        """

    @abstractmethod
    async def delete_document(self, collection: str, doc_id: str) -> None:
        """Delete a document; deleting a missing document is a no-op."""

    @abstractmethod
    async def increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> None:
        """Atomically add ``amount`` to a numeric field.

        A missing or non-numeric field counts as zero.  Raises
        ``DocumentNotFoundError`` if the document does not exist.
        """

    @abstractmethod
    async def run_query(self, query: DocumentQuery) -> List[DocumentRow]:
        """Execute ``query``."""

    @abstractmethod
    async def count_query(self, query: DocumentQuery) -> int:
        """Count the documents matched by ``query`` without its window."""


class InMemoryDocumentStore(DocumentStore):
    """Dictionary-backed store.

    Methods never await while touching the data, so each call runs to
    completion on the event loop without interleaving; ``increment`` is
    therefore atomic.  Documents are deep-copied on the way in and out.
    """

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Document]] = {}

    def _collection(self, name: str) -> Dict[str, Document]:
        return self._collections.setdefault(name, {})

    async def add_document(self, collection: str, fields: Document) -> str:
        docs = self._collection(collection)
        doc_id = generate_document_id()
        while doc_id in docs:
            doc_id = generate_document_id()
        docs[doc_id] = copy.deepcopy(fields)
        return doc_id

    async def get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        doc = self._collection(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def update_document(self, collection: str, doc_id: str, fields: Document) -> None:
        doc = self._collection(collection).get(doc_id)
        if doc is None:
            raise DocumentNotFoundError(collection, doc_id)
        doc.update(copy.deepcopy(fields))

    async def delete_document(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)

    async def increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> None:
        check_field_name(field)
        doc = self._collection(collection).get(doc_id)
        if doc is None:
            raise DocumentNotFoundError(collection, doc_id)
        current = doc.get(field)
        if type_rank(current) != 2:
            current = 0
        doc[field] = current + amount

    def _matching(self, query: DocumentQuery) -> List[DocumentRow]:
        rows = []
        for doc_id, doc in self._collection(query.collection).items():
            if any(field not in doc or not values_equal(doc[field], value) for field, value in query.filters):
                continue
            if any(field not in doc for field, _ in query.orders):
                continue
            rows.append((doc_id, doc))
        # Python's sort is stable, so sorting by ID first and then by
        # each ordering clause from last to first gives a lexicographic
        # order with ID as the final tie-break.
        rows.sort(key=lambda row: row[0], reverse=query.descending_ids)
        for field, direction in reversed(query.orders):
            rows.sort(key=lambda row: sort_key(row[1][field]), reverse=direction == DESCENDING)
        return rows

    async def run_query(self, query: DocumentQuery) -> List[DocumentRow]:
        rows = self._matching(query)
        end = None if query.take is None else query.skip + query.take
        return [(doc_id, copy.deepcopy(doc)) for doc_id, doc in rows[query.skip:end]]

    async def count_query(self, query: DocumentQuery) -> int:
        return len(self._matching(query))

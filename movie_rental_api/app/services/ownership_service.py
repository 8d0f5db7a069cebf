"""
Navigation of resources owned by a user.

Rentals and purchases live in collections nested under their owner,
``users/<user_id>/rented_movies`` and ``users/<user_id>/purchases``.
``OwnershipNavigator`` resolves paths of the form
``/users/<user_id>/<collection>[/<child_id>]`` in a fixed order:

1. the user document is fetched; if it does not exist a
   ``NotFoundError`` for ``"User"`` is raised and the child collection
   is never touched;
2. the child collection under that user is addressed;
3. a single child is fetched (``NotFoundError`` for ``"Rental"`` or
   ``"Purchase"`` if absent), or all children are listed.

A child is therefore only reachable through a parent that was found to
exist.  The parent can still be deleted between steps 1 and 2; that
race is accepted.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Sequence, Type

from pydantic import BaseModel

from ..core.errors import NotFoundError
from ..core.store import DocumentRow, DocumentStore, subcollection
from .user_service import USERS
from .validation import validate_payload


class OwnedCollection(str, Enum):
    """Child collections a user owns."""

    RENTALS = "rented_movies"
    PURCHASES = "purchases"

    @property
    def resource(self) -> str:
        """Label used in not-found errors."""
        return "Rental" if self is OwnedCollection.RENTALS else "Purchase"

    @property
    def data_key(self) -> str:
        """Key holding the document in listing entries."""
        return "rental_data" if self is OwnedCollection.RENTALS else "purchase_data"


class OwnershipNavigator:
    """Resolve user-owned collections with existence checks at each level."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def resolve_owner(self, user_id: str) -> Dict[str, Any]:
        user = await self.store.get_document(USERS, user_id)
        if user is None:
            raise NotFoundError("User")
        return user

    async def collection_of(self, user_id: str, kind: OwnedCollection) -> str:
        """Path of ``kind`` under an existing user."""
        await self.resolve_owner(user_id)
        return subcollection(USERS, user_id, kind.value)

    async def list_children(self, user_id: str, kind: OwnedCollection) -> List[DocumentRow]:
        collection = await self.collection_of(user_id, kind)
        return await self.store.list_documents(collection)

    async def get_child(self, user_id: str, kind: OwnedCollection, child_id: str) -> Dict[str, Any]:
        collection = await self.collection_of(user_id, kind)
        child = await self.store.get_document(collection, child_id)
        if child is None:
            raise NotFoundError(kind.resource)
        return child

    async def add_child(self, user_id: str, kind: OwnedCollection, fields: Dict[str, Any]) -> str:
        collection = await self.collection_of(user_id, kind)
        return await self.store.add_document(collection, fields)


class OwnedRecordService:
    """Append-only records kept in a user's child collection.

    Subclasses set the collection, the payload model and the required
    fields.  Records are created and read; never updated or deleted.
    """

    kind: OwnedCollection
    model: Type[BaseModel]
    required_fields: Sequence[str]

    def __init__(self, store: DocumentStore) -> None:
        self.navigator = OwnershipNavigator(store)
        self.logger = logging.getLogger(__name__)

    async def create(self, user_id: str, payload: Dict[str, Any]) -> str:
        """Validate ``payload`` then append it under the user."""
        record = validate_payload(self.model, payload, self.required_fields)
        record_id = await self.navigator.add_child(user_id, self.kind, record.model_dump())
        self.logger.info("Added %s %s for user %s", self.kind.resource.lower(), record_id, user_id)
        return record_id

    async def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        rows = await self.navigator.list_children(user_id, self.kind)
        return [{"id": doc_id, self.kind.data_key: doc} for doc_id, doc in rows]

    async def get(self, user_id: str, record_id: str) -> Dict[str, Any]:
        return await self.navigator.get_child(user_id, self.kind, record_id)

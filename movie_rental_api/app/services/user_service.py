"""
Business logic for users.

Users are plain documents in the ``users`` collection.  There is no
authentication; ``rol`` is a free-form role label stored as given.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.store import DocumentStore
from ..schemas.user import UserCreate, UserEntry
from .validation import USER_FIELDS, validate_payload


USERS = "users"


class UserService:
    """Operations on the ``users`` collection."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self.logger = logging.getLogger(__name__)

    async def create_user(self, payload: Dict[str, Any]) -> str:
        user = validate_payload(UserCreate, payload, USER_FIELDS)
        user_id = await self.store.add_document(USERS, user.model_dump())
        self.logger.info("Registered user %s (%s)", user_id, user.email)
        return user_id

    async def list_users(self) -> List[UserEntry]:
        rows = await self.store.list_documents(USERS)
        return [UserEntry(id=doc_id, user_data=doc) for doc_id, doc in rows]

    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self.store.get_document(USERS, user_id)

"""
Pydantic models for user data.

Users carry a display name, an e-mail address and a role label
(``rol``).  Their rental and purchase history lives in child
collections, see ``schemas.rental`` and ``schemas.purchase``.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    model_config = ConfigDict(strict=True)

    name: str = Field(..., min_length=1, examples=["Ana Torres"])
    email: str = Field(..., min_length=1, examples=["ana@example.com"])
    rol: str = Field(..., min_length=1, examples=["client"])


class UserEntry(BaseModel):
    id: str
    user_data: Dict[str, Any]

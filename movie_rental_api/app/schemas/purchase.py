"""Pydantic models for purchases (``users/<user_id>/purchases``)."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class PurchaseCreate(BaseModel):
    model_config = ConfigDict(strict=True)

    owner_name: str = Field(..., min_length=1, examples=["Ana Torres"])
    owner_id: str = Field(..., min_length=1, examples=["Xq3v9LkP0aZt7bNc2Rw1"])
    movie_name: str = Field(..., min_length=1, examples=["The Matrix"])
    quantity: int = Field(..., ge=1, examples=[2])
    bought_day: str = Field(..., min_length=1, examples=["2024-03-01"])


class PurchaseEntry(BaseModel):
    id: str
    purchase_data: Dict[str, Any]

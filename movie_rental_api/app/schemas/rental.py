"""
Pydantic models for rentals.

A rental is appended to ``users/<user_id>/rented_movies`` and never
changed afterwards.  Days are kept as the strings sent by the client
(typically ISO dates); ``delay`` is the number of days the return is
overdue.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class RentalCreate(BaseModel):
    model_config = ConfigDict(strict=True)

    owner_name: str = Field(..., min_length=1, examples=["Ana Torres"])
    owner_id: str = Field(..., min_length=1, examples=["Xq3v9LkP0aZt7bNc2Rw1"])
    movie_name: str = Field(..., min_length=1, examples=["The Matrix"])
    quantity: int = Field(..., ge=1, examples=[1])
    rented_day: str = Field(..., min_length=1, examples=["2024-03-01"])
    return_day: str = Field(..., min_length=1, examples=["2024-03-04"])
    delay: int = Field(..., ge=0, examples=[0])


class RentalEntry(BaseModel):
    id: str
    rental_data: Dict[str, Any]

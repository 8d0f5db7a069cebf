"""
Pydantic models for movie data.

``MovieCreate`` describes the payload accepted when adding a movie to
the catalog; ``MovieUpdate`` is the full-update payload, which leaves
``availability`` out because availability only changes through its
dedicated patch route.  The listing models mirror the JSON returned by
``GET /movies``.

Validation is strict: numbers must be JSON numbers and booleans JSON
booleans, and prices must be finite.  Zero and ``false`` are legitimate
values.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class MovieUpdate(BaseModel):
    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    title: str = Field(..., min_length=1, examples=["The Matrix"])
    description: str = Field(..., min_length=1, examples=["A hacker learns the truth about reality."])
    img: str = Field(..., min_length=1, examples=["https://example.com/matrix.jpg"])
    stock: int = Field(..., ge=0, examples=[4])
    rental_price: float = Field(..., ge=0, examples=[2.5])
    sale_price: float = Field(..., ge=0, examples=[9.99])
    likes: int = Field(..., ge=0, examples=[0])


class MovieCreate(MovieUpdate):
    """Schema for adding a movie to the catalog."""

    availability: bool = Field(..., examples=[True])


class MovieEntry(BaseModel):
    """A stored movie tagged with its document ID."""

    id: str
    movie_data: Dict[str, Any]


class MoviePage(BaseModel):
    """One page of the movie listing.

    ``total_movies`` counts every movie matching the filter, regardless
    of the page window.
    """

    total_movies: int
    movies_on_page: int
    movies: List[MovieEntry]

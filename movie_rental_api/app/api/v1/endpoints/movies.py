"""
Movie endpoints for API v1.

CRUD operations on the catalog plus the listing, like and
availability routes.  Write payloads are taken as raw JSON objects and
validated by ``MovieService`` so that a missing field is reported by
name with a 400.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from movie_rental_api.app.api.deps import get_movie_service
from movie_rental_api.app.core.errors import translate_errors
from movie_rental_api.app.schemas.common import CreatedResponse, MessageResponse
from movie_rental_api.app.schemas.movie import MovieEntry, MoviePage
from movie_rental_api.app.services.movie_service import MovieService


router = APIRouter()


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_movie(
    payload: Dict[str, Any] = Body(...),
    service: MovieService = Depends(get_movie_service),
) -> CreatedResponse:
    """Add a movie to the catalog.

    Every field of ``MovieCreate`` is required.  The lowercase title
    used for sorting is derived and stored alongside.
    """
    with translate_errors("Failed to create the movie."):
        movie_id = await service.create_movie(payload)
    return CreatedResponse(id=movie_id, message="Movie created successfully.")


@router.get("", response_model=MoviePage)
async def list_movies(
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None, alias="perPage"),
    title: Optional[str] = Query(None),
    service: MovieService = Depends(get_movie_service),
) -> MoviePage:
    """List movies, e.g. ``/movies?sortBy=likes&sortOrder=desc&page=2``.

    - **title** — exact title to match.
    - **sortBy** — ``likes``; anything else sorts by title.
    - **sortOrder** — ``asc`` (default) or ``desc``.
    - **page**, **perPage** — 1-indexed page and page size (defaults 1 and 10).
    """
    with translate_errors("Failed to get the movies."):
        return await service.list_movies(
            title=title,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            per_page=per_page,
        )


@router.get("/availability/{value}", response_model=List[MovieEntry])
async def list_movies_by_availability(
    value: str,
    service: MovieService = Depends(get_movie_service),
) -> List[MovieEntry]:
    """List movies whose availability is ``true`` or ``false``; 404 if none."""
    with translate_errors("Something went wrong"):
        return await service.list_by_availability(value)


@router.post("/{movie_id}/like", response_model=MessageResponse)
async def like_movie(
    movie_id: str,
    service: MovieService = Depends(get_movie_service),
) -> MessageResponse:
    with translate_errors("Failed to like the movie."):
        await service.like_movie(movie_id)
    return MessageResponse(message="Liked the movie!")


@router.get("/{movie_id}")
async def get_movie(
    movie_id: str,
    service: MovieService = Depends(get_movie_service),
) -> Response:
    """Return the stored movie document.

    An unknown ID is answered with 200 and an empty body.
    """
    with translate_errors("Failed to get the movie."):
        movie = await service.get_movie(movie_id)
    if movie is None:
        return Response(status_code=status.HTTP_200_OK)
    return JSONResponse(content=movie)


@router.delete("/{movie_id}")
async def delete_movie(
    movie_id: str,
    service: MovieService = Depends(get_movie_service),
) -> Response:
    """Delete a movie.  Succeeds whether or not the ID existed."""
    with translate_errors("Failed to delete the movie."):
        await service.delete_movie(movie_id)
    return Response(status_code=status.HTTP_200_OK)


@router.put("/{movie_id}", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def update_movie(
    movie_id: str,
    payload: Dict[str, Any] = Body(...),
    service: MovieService = Depends(get_movie_service),
) -> CreatedResponse:
    """Replace the data of a movie, all fields except ``availability``."""
    with translate_errors("Error updating the movie data."):
        await service.update_movie(movie_id, payload)
    return CreatedResponse(id=movie_id, message="The data of the movie were updated succesfully.")


@router.patch("/{movie_id}/availability")
async def update_availability(
    movie_id: str,
    payload: Dict[str, Any] = Body(...),
    service: MovieService = Depends(get_movie_service),
) -> Response:
    """Overwrite the movie's ``availability`` with the value sent."""
    with translate_errors("Failed to update the movie availability."):
        await service.set_availability(movie_id, payload.get("availability"))
    return Response(status_code=status.HTTP_200_OK)

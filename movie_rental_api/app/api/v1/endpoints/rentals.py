"""
Rental endpoints for API v1.

Rentals are nested under their owner:
``/users/{user_id}/rented_movies[/{rental_id}]``.  The user is looked
up first; an unknown user gives 404 ``User not found.`` before the
rentals are consulted.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from movie_rental_api.app.api.deps import get_rental_service
from movie_rental_api.app.core.errors import translate_errors
from movie_rental_api.app.schemas.common import CreatedResponse
from movie_rental_api.app.schemas.rental import RentalEntry
from movie_rental_api.app.services.rental_service import RentalService


router = APIRouter()


@router.post("/{user_id}/rented_movies", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_rental(
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    service: RentalService = Depends(get_rental_service),
) -> CreatedResponse:
    """Record a rental for the user.

    The payload is validated before the user is looked up.
    """
    with translate_errors("Failed to create the rental data."):
        rental_id = await service.create(user_id, payload)
    return CreatedResponse(id=rental_id, message="Rental added.")


@router.get("/{user_id}/rented_movies", response_model=List[RentalEntry])
async def list_rentals(
    user_id: str,
    service: RentalService = Depends(get_rental_service),
) -> List[Dict[str, Any]]:
    with translate_errors("Failed to get the rental data."):
        return await service.list_for_user(user_id)


@router.get("/{user_id}/rented_movies/{rental_id}")
async def get_rental(
    user_id: str,
    rental_id: str,
    service: RentalService = Depends(get_rental_service),
) -> Dict[str, Any]:
    with translate_errors("Failed to get the rental data."):
        return await service.get(user_id, rental_id)

"""
User endpoints for API v1.

Registration, listing and lookup of users.  The read routes answer
with 201, which existing clients of the catalog rely on.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import JSONResponse

from movie_rental_api.app.api.deps import get_user_service
from movie_rental_api.app.core.errors import translate_errors
from movie_rental_api.app.schemas.common import CreatedResponse
from movie_rental_api.app.schemas.user import UserEntry
from movie_rental_api.app.services.user_service import UserService


router = APIRouter()


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
) -> CreatedResponse:
    """Register a user; ``name``, ``email`` and ``rol`` are required."""
    with translate_errors("Failed to create the user."):
        user_id = await service.create_user(payload)
    return CreatedResponse(id=user_id, message="user created successfully.")


@router.get("", response_model=List[UserEntry], status_code=status.HTTP_201_CREATED)
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserEntry]:
    with translate_errors("Failed to get the users data."):
        return await service.list_users()


@router.get("/{user_id}", status_code=status.HTTP_201_CREATED)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Return the stored user document, or an empty body if unknown."""
    with translate_errors("Failed to get the users data."):
        user = await service.get_user(user_id)
    if user is None:
        return Response(status_code=status.HTTP_201_CREATED)
    return JSONResponse(content=user, status_code=status.HTTP_201_CREATED)

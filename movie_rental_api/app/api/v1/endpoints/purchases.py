"""
Purchase endpoints for API v1.

Purchases are nested under their owner:
``/users/{user_id}/purchases[/{purchase_id}]``, with the same
user-first lookup as rentals.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from movie_rental_api.app.api.deps import get_purchase_service
from movie_rental_api.app.core.errors import translate_errors
from movie_rental_api.app.schemas.common import CreatedResponse
from movie_rental_api.app.schemas.purchase import PurchaseEntry
from movie_rental_api.app.services.purchase_service import PurchaseService


router = APIRouter()


@router.post("/{user_id}/purchases", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_purchase(
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    service: PurchaseService = Depends(get_purchase_service),
) -> CreatedResponse:
    with translate_errors("Failed to create the purchase data."):
        purchase_id = await service.create(user_id, payload)
    return CreatedResponse(id=purchase_id, message="Purchase added.")


@router.get("/{user_id}/purchases", response_model=List[PurchaseEntry])
async def list_purchases(
    user_id: str,
    service: PurchaseService = Depends(get_purchase_service),
) -> List[Dict[str, Any]]:
    with translate_errors("Failed to get the purchase data."):
        return await service.list_for_user(user_id)


@router.get("/{user_id}/purchases/{purchase_id}")
async def get_purchase(
    user_id: str,
    purchase_id: str,
    service: PurchaseService = Depends(get_purchase_service),
) -> Dict[str, Any]:
    with translate_errors("Failed to get the purchase data."):
        return await service.get(user_id, purchase_id)

"""
Top‑level router for version 1 of the API.

This router aggregates the resource routers.  Rentals and purchases
share the ``/users`` prefix because they are nested under a user.
"""

from fastapi import APIRouter

from .endpoints import movies, purchases, rentals, users

router = APIRouter()

router.include_router(movies.router, prefix="/movies", tags=["movies"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(rentals.router, prefix="/users", tags=["rentals"])
router.include_router(purchases.router, prefix="/users", tags=["purchases"])

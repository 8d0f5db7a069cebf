"""
FastAPI dependencies.

The document store is created (or injected) by ``create_app`` and kept
on ``app.state.store``; routes receive services bound to it.
"""

from fastapi import Depends, Request

from ..core.store import DocumentStore
from ..services.movie_service import MovieService
from ..services.purchase_service import PurchaseService
from ..services.rental_service import RentalService
from ..services.user_service import UserService


def get_store(request: Request) -> DocumentStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Document store is not initialised")
    return store


def get_movie_service(store: DocumentStore = Depends(get_store)) -> MovieService:
    return MovieService(store)


def get_user_service(store: DocumentStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_rental_service(store: DocumentStore = Depends(get_store)) -> RentalService:
    return RentalService(store)


def get_purchase_service(store: DocumentStore = Depends(get_store)) -> PurchaseService:
    return PurchaseService(store)

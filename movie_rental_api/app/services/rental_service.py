"""Rentals owned by a user (``users/<user_id>/rented_movies``)."""

from ..schemas.rental import RentalCreate
from .ownership_service import OwnedCollection, OwnedRecordService
from .validation import RENTAL_FIELDS


class RentalService(OwnedRecordService):
    kind = OwnedCollection.RENTALS
    model = RentalCreate
    required_fields = RENTAL_FIELDS

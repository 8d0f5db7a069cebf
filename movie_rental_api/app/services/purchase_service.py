"""Purchases owned by a user (``users/<user_id>/purchases``)."""

from ..schemas.purchase import PurchaseCreate
from .ownership_service import OwnedCollection, OwnedRecordService
from .validation import PURCHASE_FIELDS


class PurchaseService(OwnedRecordService):
    kind = OwnedCollection.PURCHASES
    model = PurchaseCreate
    required_fields = PURCHASE_FIELDS

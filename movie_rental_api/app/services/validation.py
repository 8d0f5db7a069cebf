"""
Required-field validation for write payloads.

Validation runs in two steps, both before any store access:

1. ``require_fields`` walks the resource's required fields in order and
   rejects the first one that is absent or ``null``.
2. The payload restricted to those fields is validated by the
   resource's pydantic model; of the failing fields, the one that comes
   first in required-field order is reported.

Either way a ``ValidationError`` naming the field is raised.  Present
values such as ``0`` or ``false`` are accepted when the type is right.
"""

from typing import Any, Dict, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import ValidationError


ModelT = TypeVar("ModelT", bound=BaseModel)

MOVIE_CREATE_FIELDS = (
    "title",
    "description",
    "img",
    "stock",
    "rental_price",
    "sale_price",
    "availability",
    "likes",
)
MOVIE_UPDATE_FIELDS = tuple(field for field in MOVIE_CREATE_FIELDS if field != "availability")
USER_FIELDS = ("name", "email", "rol")
RENTAL_FIELDS = (
    "owner_name",
    "owner_id",
    "movie_name",
    "rented_day",
    "return_day",
    "quantity",
    "delay",
)
PURCHASE_FIELDS = ("owner_name", "owner_id", "movie_name", "bought_day", "quantity")


def require_fields(payload: Dict[str, Any], fields: Sequence[str]) -> None:
    """Raise ``ValidationError`` for the first missing field."""
    for field in fields:
        if payload.get(field) is None:
            raise ValidationError(field)


def _field_position(error: Dict[str, Any], fields: Sequence[str]) -> int:
    loc = error.get("loc") or ()
    if loc and loc[0] in fields:
        return fields.index(loc[0])
    return len(fields)


def validate_payload(model: Type[ModelT], payload: Dict[str, Any], fields: Sequence[str]) -> ModelT:
    """Check presence of ``fields`` and validate them with ``model``.

    Keys outside ``fields`` are ignored and never reach the store.
    """
    require_fields(payload, fields)
    try:
        return model.model_validate({field: payload[field] for field in fields})
    except PydanticValidationError as exc:
        error = min(exc.errors(), key=lambda err: _field_position(err, fields))
        field = str(error["loc"][0]) if error.get("loc") else fields[0]
        raise ValidationError(field, f'Field "{field}" is invalid: {error["msg"]}.') from exc

import pytest

from movie_rental_api.app.core.errors import ValidationError
from movie_rental_api.app.schemas.movie import MovieCreate, MovieUpdate
from movie_rental_api.app.schemas.rental import RentalCreate
from movie_rental_api.app.services.validation import (
    MOVIE_CREATE_FIELDS,
    MOVIE_UPDATE_FIELDS,
    RENTAL_FIELDS,
    require_fields,
    validate_payload,
)

from .factories import movie_payload, rental_payload


def test_update_fields_exclude_availability():
    assert "availability" not in MOVIE_UPDATE_FIELDS
    assert set(MOVIE_CREATE_FIELDS) - set(MOVIE_UPDATE_FIELDS) == {"availability"}


def test_first_missing_field_is_reported():
    payload = movie_payload()
    del payload["img"]
    del payload["likes"]
    with pytest.raises(ValidationError) as excinfo:
        require_fields(payload, MOVIE_CREATE_FIELDS)
    assert excinfo.value.field == "img"
    assert excinfo.value.message == 'Field "img" is required.'


def test_null_counts_as_missing():
    with pytest.raises(ValidationError) as excinfo:
        require_fields(movie_payload(stock=None), MOVIE_CREATE_FIELDS)
    assert excinfo.value.field == "stock"


def test_zero_and_false_are_accepted():
    movie = validate_payload(MovieCreate, movie_payload(stock=0, likes=0, availability=False), MOVIE_CREATE_FIELDS)
    assert movie.stock == 0
    assert movie.likes == 0
    assert movie.availability is False


@pytest.mark.parametrize(
    "field, value",
    [
        ("stock", "3"),
        ("stock", -1),
        ("likes", 1.5),
        ("availability", "yes"),
        ("title", ""),
        ("rental_price", "cheap"),
    ],
)
def test_wrong_types_are_reported_against_the_field(field, value):
    with pytest.raises(ValidationError) as excinfo:
        validate_payload(MovieCreate, movie_payload(**{field: value}), MOVIE_CREATE_FIELDS)
    assert excinfo.value.field == field
    assert f'"{field}"' in excinfo.value.message


def test_extra_keys_are_dropped():
    movie = validate_payload(MovieUpdate, movie_payload(director="Wachowski"), MOVIE_UPDATE_FIELDS)
    assert "director" not in movie.model_dump()
    assert "availability" not in movie.model_dump()


def test_rental_requires_delay():
    payload = rental_payload()
    del payload["delay"]
    with pytest.raises(ValidationError) as excinfo:
        validate_payload(RentalCreate, payload, RENTAL_FIELDS)
    assert excinfo.value.field == "delay"


def test_first_invalid_field_follows_required_order():
    payload = movie_payload(availability="yes", likes="many")
    with pytest.raises(ValidationError) as excinfo:
        validate_payload(MovieCreate, payload, MOVIE_CREATE_FIELDS)
    assert excinfo.value.field == "availability"


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_prices_are_invalid(value):
    with pytest.raises(ValidationError) as excinfo:
        validate_payload(MovieCreate, movie_payload(sale_price=value), MOVIE_CREATE_FIELDS)
    assert excinfo.value.field == "sale_price"

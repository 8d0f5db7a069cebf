"""Payload builders shared by the API tests."""

from typing import Any, Dict


def movie_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "title": "The Matrix",
        "description": "A hacker learns the truth about reality.",
        "img": "https://example.com/matrix.jpg",
        "stock": 3,
        "rental_price": 2.5,
        "sale_price": 9.99,
        "availability": True,
        "likes": 5,
    }
    payload.update(overrides)
    return payload


def user_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {"name": "Ana Torres", "email": "ana@example.com", "rol": "client"}
    payload.update(overrides)
    return payload


def rental_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "owner_name": "Ana Torres",
        "owner_id": "user-1",
        "movie_name": "The Matrix",
        "quantity": 1,
        "rented_day": "2024-03-01",
        "return_day": "2024-03-04",
        "delay": 0,
    }
    payload.update(overrides)
    return payload


def purchase_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "owner_name": "Ana Torres",
        "owner_id": "user-1",
        "movie_name": "Alien",
        "quantity": 2,
        "bought_day": "2024-03-01",
    }
    payload.update(overrides)
    return payload

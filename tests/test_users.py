import asyncio

import pytest

from movie_rental_api.app.core.errors import NotFoundError
from movie_rental_api.app.services.ownership_service import OwnedCollection, OwnershipNavigator

from .factories import purchase_payload, rental_payload, user_payload


def create_user(client, **overrides):
    response = client.post("/users", json=user_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["id"]


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def test_create_and_fetch_user(client):
    response = client.post("/users", json=user_payload())
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "user created successfully."

    fetched = client.get(f"/users/{body['id']}")
    assert fetched.status_code == 201
    assert fetched.json() == user_payload()


@pytest.mark.parametrize("field", ["name", "email", "rol"])
def test_create_user_missing_field(client, store, field):
    payload = user_payload()
    del payload[field]
    response = client.post("/users", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": f'Field "{field}" is required.'}
    assert store.calls == []


def test_list_users(client):
    first = create_user(client, name="Ana")
    second = create_user(client, name="Luis")
    response = client.get("/users")
    assert response.status_code == 201
    entries = {entry["id"]: entry["user_data"]["name"] for entry in response.json()}
    assert entries == {first: "Ana", second: "Luis"}


def test_get_unknown_user_has_empty_body(client):
    response = client.get("/users/nope")
    assert response.status_code == 201
    assert response.content == b""


# ---------------------------------------------------------------------------
# Rentals
# ---------------------------------------------------------------------------


def test_add_and_read_rentals(client):
    user_id = create_user(client)
    response = client.post(f"/users/{user_id}/rented_movies", json=rental_payload(owner_id=user_id))
    assert response.status_code == 201
    assert response.json()["message"] == "Rental added."
    rental_id = response.json()["id"]

    single = client.get(f"/users/{user_id}/rented_movies/{rental_id}")
    assert single.status_code == 200
    assert single.json() == rental_payload(owner_id=user_id)

    listing = client.get(f"/users/{user_id}/rented_movies")
    assert listing.status_code == 200
    assert listing.json() == [{"id": rental_id, "rental_data": rental_payload(owner_id=user_id)}]


def test_rental_listing_is_empty_for_new_user(client):
    user_id = create_user(client)
    assert client.get(f"/users/{user_id}/rented_movies").json() == []


def test_rental_for_unknown_user_is_not_found(client, store):
    response = client.post("/users/ghost/rented_movies", json=rental_payload())
    assert response.status_code == 404
    assert response.json() == {"error": "User not found."}
    assert store.collections_touched() == ["users"]


def test_rental_missing_field_is_rejected_before_user_lookup(client, store):
    payload = rental_payload()
    del payload["return_day"]
    response = client.post("/users/ghost/rented_movies", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": 'Field "return_day" is required.'}
    assert store.calls == []


def test_rental_with_zero_delay_is_accepted(client):
    user_id = create_user(client)
    response = client.post(f"/users/{user_id}/rented_movies", json=rental_payload(delay=0))
    assert response.status_code == 201


def test_nested_lookup_for_unknown_user_never_reads_the_child(client, store):
    response = client.get("/users/ghost/rented_movies/some-rental")
    assert response.status_code == 404
    assert response.json() == {"error": "User not found."}
    assert store.collections_touched() == ["users"]


def test_unknown_rental_is_not_found(client, store):
    user_id = create_user(client)
    store.calls.clear()
    response = client.get(f"/users/{user_id}/rented_movies/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Rental not found."}
    assert store.collections_touched() == ["users", f"users/{user_id}/rented_movies"]


def test_rentals_are_scoped_to_their_owner(client):
    owner = create_user(client, name="Ana")
    other = create_user(client, name="Luis")
    rental_id = client.post(f"/users/{owner}/rented_movies", json=rental_payload()).json()["id"]
    assert client.get(f"/users/{other}/rented_movies/{rental_id}").status_code == 404
    assert client.get(f"/users/{other}/rented_movies").json() == []


# ---------------------------------------------------------------------------
# Purchases
# ---------------------------------------------------------------------------


def test_add_and_read_purchases(client):
    user_id = create_user(client)
    response = client.post(f"/users/{user_id}/purchases", json=purchase_payload())
    assert response.status_code == 201
    assert response.json()["message"] == "Purchase added."
    purchase_id = response.json()["id"]

    assert client.get(f"/users/{user_id}/purchases/{purchase_id}").json() == purchase_payload()
    assert client.get(f"/users/{user_id}/purchases").json() == [
        {"id": purchase_id, "purchase_data": purchase_payload()}
    ]


@pytest.mark.parametrize("field", ["owner_name", "owner_id", "movie_name", "bought_day", "quantity"])
def test_purchase_missing_field(client, field):
    user_id = create_user(client)
    payload = purchase_payload()
    del payload[field]
    response = client.post(f"/users/{user_id}/purchases", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": f'Field "{field}" is required.'}
    assert client.get(f"/users/{user_id}/purchases").json() == []


def test_purchase_routes_for_unknown_user(client):
    assert client.get("/users/ghost/purchases").json() == {"error": "User not found."}
    assert client.get("/users/ghost/purchases/p1").status_code == 404


def test_unknown_purchase_is_not_found(client):
    user_id = create_user(client)
    response = client.get(f"/users/{user_id}/purchases/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Purchase not found."}


# ---------------------------------------------------------------------------
# Navigator
# ---------------------------------------------------------------------------


def test_navigator_resolves_child_collection_path(store):
    navigator = OwnershipNavigator(store)
    user_id = asyncio.run(store.add_document("users", user_payload()))
    path = asyncio.run(navigator.collection_of(user_id, OwnedCollection.PURCHASES))
    assert path == f"users/{user_id}/purchases"


def test_navigator_raises_for_missing_owner(store):
    navigator = OwnershipNavigator(store)
    with pytest.raises(NotFoundError) as excinfo:
        asyncio.run(navigator.list_children("ghost", OwnedCollection.RENTALS))
    assert excinfo.value.resource == "User"
    assert store.collections_touched() == ["users"]

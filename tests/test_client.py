import json

import requests

from movie_rental_client import MovieRentalAPI


class FakeSession:
    """Stands in for ``requests.Session`` and replays canned responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, **kwargs):
        self.requests.append(kwargs)
        status_code, body = self.responses.pop(0)
        response = requests.Response()
        response.status_code = status_code
        response.url = kwargs["url"]
        response._content = b"" if body is None else json.dumps(body).encode("utf-8")
        return response


class FailingSession:
    def request(self, **kwargs):
        raise requests.ConnectionError("connection refused")


def test_create_movie_returns_id():
    session = FakeSession((201, {"id": "m1", "message": "Movie created successfully."}))
    client = MovieRentalAPI(base_url="http://api.test/", session=session)
    movie_id, error = client.create_movie({"title": "Alien"})
    assert (movie_id, error) == ("m1", None)
    sent = session.requests[0]
    assert sent["method"] == "POST"
    assert sent["url"] == "http://api.test/movies"
    assert sent["json"] == {"title": "Alien"}


def test_list_movies_sends_only_given_parameters():
    page = {"total_movies": 0, "movies_on_page": 0, "movies": []}
    session = FakeSession((200, page))
    client = MovieRentalAPI(base_url="http://api.test", session=session)
    data, error = client.list_movies(sort_by="likes", sort_order="desc", page=2)
    assert error is None
    assert data == page
    assert session.requests[0]["params"] == {"sortBy": "likes", "sortOrder": "desc", "page": 2}


def test_error_envelope_is_returned_as_error():
    session = FakeSession((400, {"error": 'Field "title" is required.'}))
    client = MovieRentalAPI(base_url="http://api.test", session=session)
    movie_id, error = client.create_movie({})
    assert movie_id is None
    assert error == {"status_code": 400, "message": 'Field "title" is required.'}


def test_empty_body_is_none():
    session = FakeSession((200, None), (200, None))
    client = MovieRentalAPI(base_url="http://api.test", session=session)
    assert client.get_movie("unknown") == (None, None)
    assert client.delete_movie("unknown") == (True, None)


def test_no_movies_with_availability_is_an_empty_list():
    session = FakeSession((404, {"error": "No movies found with the given availability value."}))
    client = MovieRentalAPI(base_url="http://api.test", session=session)
    assert client.movies_by_availability(True) == ([], None)
    assert session.requests[0]["url"] == "http://api.test/movies/availability/true"


def test_nested_routes():
    session = FakeSession((201, {"id": "r1", "message": "Rental added."}), (404, {"error": "User not found."}))
    client = MovieRentalAPI(base_url="http://api.test", session=session)
    assert client.add_rental("u1", {"movie_name": "Alien"}) == ("r1", None)
    assert session.requests[0]["url"] == "http://api.test/users/u1/rented_movies"
    purchases, error = client.list_purchases("ghost")
    assert purchases == []
    assert error == {"status_code": 404, "message": "User not found."}


def test_connection_errors_are_reported():
    client = MovieRentalAPI(base_url="http://api.test", session=FailingSession())
    data, error = client.get_user("u1")
    assert data is None
    assert error["status_code"] is None
    assert "connection refused" in error["message"]

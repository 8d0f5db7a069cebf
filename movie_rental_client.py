"""Movie Rental API client.

This module defines a small client wrapper around the Movie Rental REST
API.  It uses the ``requests`` library internally and exposes one
method per route:

* movies: :meth:`create_movie`, :meth:`list_movies`, :meth:`get_movie`,
  :meth:`update_movie`, :meth:`set_availability`, :meth:`like_movie`,
  :meth:`delete_movie`, :meth:`movies_by_availability`;
* users: :meth:`create_user`, :meth:`list_users`, :meth:`get_user`;
* history: :meth:`add_rental`, :meth:`list_rentals`, :meth:`get_rental`,
  :meth:`add_purchase`, :meth:`list_purchases`, :meth:`get_purchase`.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list for
listings) and ``error`` is a dictionary with ``status_code`` and
``message`` taken from the API's ``{"error": ...}`` envelope.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class MovieRentalAPI:
    """Client for interacting with the Movie Rental API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API including any prefix, e.g.
                ``https://example.com/api/v1``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``, etc.).
            path: Path relative to :attr:`base_url` (e.g. ``/movies``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` is the parsed JSON
            response, or ``None`` for an empty body.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Movies
    # ------------------------------------------------------------------
    def create_movie(self, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[Error]]:
        """Add a movie and return its ID."""
        data, error = self._request("POST", "/movies", json_body=payload)
        if error:
            return None, error
        return data.get("id"), None

    def list_movies(
        self,
        *,
        title: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Fetch one page of the catalog.

        Returns the listing object with ``total_movies``,
        ``movies_on_page`` and ``movies``.
        """
        params = {
            "title": title,
            "sortBy": sort_by,
            "sortOrder": sort_order,
            "page": page,
            "perPage": per_page,
        }
        return self._request("GET", "/movies", params={k: v for k, v in params.items() if v is not None})

    def get_movie(self, movie_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Fetch a movie document; ``(None, None)`` if the ID is unknown."""
        return self._request("GET", f"/movies/{movie_id}")

    def update_movie(self, movie_id: str, payload: Dict[str, Any]) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("PUT", f"/movies/{movie_id}", json_body=payload)
        return error is None, error

    def set_availability(self, movie_id: str, availability: bool) -> Tuple[bool, Optional[Error]]:
        _, error = self._request(
            "PATCH", f"/movies/{movie_id}/availability", json_body={"availability": availability}
        )
        return error is None, error

    def like_movie(self, movie_id: str) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("POST", f"/movies/{movie_id}/like")
        return error is None, error

    def delete_movie(self, movie_id: str) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/movies/{movie_id}")
        return error is None, error

    def movies_by_availability(self, available: bool) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Movies that are (or are not) available.

        The API answers 404 when no movie matches; that case is returned
        as an empty list without error.
        """
        movies, error = self._list(f"/movies/availability/{'true' if available else 'false'}")
        if error and error.get("status_code") == 404:
            return [], None
        return movies, error

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def create_user(self, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[Error]]:
        data, error = self._request("POST", "/users", json_body=payload)
        if error:
            return None, error
        return data.get("id"), None

    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/users")

    def get_user(self, user_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/users/{user_id}")

    # ------------------------------------------------------------------
    # Rentals and purchases
    # ------------------------------------------------------------------
    def add_rental(self, user_id: str, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[Error]]:
        data, error = self._request("POST", f"/users/{user_id}/rented_movies", json_body=payload)
        if error:
            return None, error
        return data.get("id"), None

    def list_rentals(self, user_id: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list(f"/users/{user_id}/rented_movies")

    def get_rental(self, user_id: str, rental_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/users/{user_id}/rented_movies/{rental_id}")

    def add_purchase(self, user_id: str, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[Error]]:
        data, error = self._request("POST", f"/users/{user_id}/purchases", json_body=payload)
        if error:
            return None, error
        return data.get("id"), None

    def list_purchases(self, user_id: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list(f"/users/{user_id}/purchases")

    def get_purchase(self, user_id: str, purchase_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/users/{user_id}/purchases/{purchase_id}")

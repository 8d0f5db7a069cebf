"""
Business logic for the movie catalog.

``MovieService`` creates, lists, updates and deletes documents of the
``movies`` collection.  Every movie carries a ``titleToLowerCase``
field, written together with the title on create and full update, that
the listing orders by so that titles sort case-insensitively.

Listing (``list_movies``) combines an optional exact title filter, an
ordering (by likes, or by lowercase title by default) and a 1-indexed
page window.  The reported total counts the filtered movies without
the window, so a page past the end comes back empty with the real
total.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from ..core.config import settings
from ..core.errors import NotFoundError
from ..core.store import ASCENDING, DESCENDING, DocumentNotFoundError, DocumentStore
from ..schemas.movie import MovieCreate, MovieEntry, MoviePage, MovieUpdate
from .validation import MOVIE_CREATE_FIELDS, MOVIE_UPDATE_FIELDS, validate_payload


MOVIES = "movies"
LOWERCASE_TITLE = "titleToLowerCase"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_positive_int(raw: Any, default: int) -> int:
    """Read a page number the way ``parseInt`` would.

    The leading integer of the string is used (``"3abc"`` gives 3).
    Missing, non-numeric and non-positive input falls back to
    ``default``.
    """
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(str(raw)) if raw is not None else None
        if not match:
            return default
        value = int(match.group(1))
    return value if value > 0 else default


def availability_text(value: Any) -> str:
    """Render a stored availability the way clients spell it in URLs."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class MovieService:
    """Operations on the ``movies`` collection."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self.logger = logging.getLogger(__name__)

    async def create_movie(self, payload: Dict[str, Any]) -> str:
        """Validate ``payload`` and add the movie; return its ID."""
        movie = validate_payload(MovieCreate, payload, MOVIE_CREATE_FIELDS)
        data = movie.model_dump()
        data[LOWERCASE_TITLE] = movie.title.lower()
        movie_id = await self.store.add_document(MOVIES, data)
        self.logger.info("Created movie %s (%r)", movie_id, movie.title)
        return movie_id

    async def list_movies(
        self,
        title: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        page: Any = None,
        per_page: Any = None,
    ) -> MoviePage:
        """Return one page of movies.

        - ``title`` restricts the listing to exact (case-sensitive) matches.
        - ``sort_by="likes"`` orders by likes; anything else orders by the
          lowercase title.  ``sort_order="desc"`` reverses the order.
        - ``page`` (1-indexed) and ``per_page`` select the window.
        """
        page_number = parse_positive_int(page, settings.default_page)
        page_size = parse_positive_int(per_page, settings.default_per_page)
        direction = DESCENDING if sort_order == DESCENDING else ASCENDING

        query = self.store.query(MOVIES)
        if title:
            query = query.where_equals("title", title)
        if sort_by == "likes":
            query = query.order_by("likes", direction)
        else:
            query = query.order_by(LOWERCASE_TITLE, direction)

        total = await query.count()
        start_index = (page_number - 1) * page_size
        rows = await query.offset(start_index).limit(page_size).execute()
        movies = [MovieEntry(id=doc_id, movie_data=doc) for doc_id, doc in rows]
        return MoviePage(total_movies=total, movies_on_page=len(movies), movies=movies)

    async def get_movie(self, movie_id: str) -> Optional[Dict[str, Any]]:
        return await self.store.get_document(MOVIES, movie_id)

    async def delete_movie(self, movie_id: str) -> None:
        """Delete a movie.  Unknown IDs are not an error."""
        await self.store.delete_document(MOVIES, movie_id)
        self.logger.info("Deleted movie %s", movie_id)

    async def update_movie(self, movie_id: str, payload: Dict[str, Any]) -> None:
        """Replace every field of a movie except ``availability``.

        The lowercase title is recomputed from the new title.  Raises
        ``NotFoundError`` if the movie does not exist.
        """
        movie = validate_payload(MovieUpdate, payload, MOVIE_UPDATE_FIELDS)
        data = movie.model_dump()
        data[LOWERCASE_TITLE] = movie.title.lower()
        try:
            await self.store.update_document(MOVIES, movie_id, data)
        except DocumentNotFoundError as exc:
            raise NotFoundError("Movie") from exc
        self.logger.info("Updated movie %s", movie_id)

    async def set_availability(self, movie_id: str, availability: Any) -> None:
        """Overwrite ``availability`` with the value as received."""
        try:
            await self.store.update_document(MOVIES, movie_id, {"availability": availability})
        except DocumentNotFoundError as exc:
            raise NotFoundError("Movie") from exc

    async def like_movie(self, movie_id: str) -> None:
        """Add one like to a movie.

        The increment is performed by the store in a single atomic step,
        so concurrent likes are never lost.
        """
        if await self.store.get_document(MOVIES, movie_id) is None:
            raise NotFoundError("Movie")
        try:
            await self.store.increment(MOVIES, movie_id, "likes")
        except DocumentNotFoundError as exc:
            # Deleted between the lookup and the increment.
            raise NotFoundError("Movie") from exc

    async def list_by_availability(self, value: str) -> List[MovieEntry]:
        """Return every movie whose availability reads as ``value``.

        ``value`` is compared with the textual form of the stored
        availability (``"true"``/``"false"`` for booleans).  Raises
        ``NotFoundError`` when nothing matches.
        """
        rows = await self.store.list_documents(MOVIES)
        movies = [
            MovieEntry(id=doc_id, movie_data=doc)
            for doc_id, doc in rows
            if "availability" in doc and availability_text(doc["availability"]) == value
        ]
        if not movies:
            raise NotFoundError("Movie", "No movies found with the given availability value.")
        return movies

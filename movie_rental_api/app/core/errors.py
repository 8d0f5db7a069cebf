"""
Domain errors and the HTTP error envelope.

Services raise ``ValidationError`` and ``NotFoundError``; store
adapters raise ``StoreError`` (see ``core.store``).  Endpoints translate
them into ``HTTPException`` with the appropriate status code, and the
handlers registered by ``register_exception_handlers`` render every
failure as ``{"error": <message>}``.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .store import StoreError


logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """A required field is missing or has the wrong type."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        self.message = message or f'Field "{field}" is required.'
        super().__init__(self.message)


class NotFoundError(LookupError):
    """A resource checked for existence is absent.

    ``resource`` is the label reported to the client (``"User"``,
    ``"Rental"``, ...).  ``message`` defaults to ``"<resource> not found."``.
    """

    def __init__(self, resource: str, message: str | None = None) -> None:
        self.resource = resource
        self.message = message or f"{resource} not found."
        super().__init__(self.message)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers producing the ``{"error": ...}`` envelope."""

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Only malformed bodies reach this point; field checks happen in
        # the services so that the offending field can be named.
        logger.debug("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return error_response(status.HTTP_400_BAD_REQUEST, "Request body must be a JSON object.")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")


@contextmanager
def translate_errors(failure_message: str) -> Iterator[None]:
    """Convert domain errors raised inside the block to ``HTTPException``.

    ``ValidationError`` becomes 400 and ``NotFoundError`` 404, each with
    its own message.  ``StoreError`` is logged and becomes 500 with
    ``failure_message``.
    """
    try:
        yield
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    except StoreError as exc:
        logger.exception("%s (%s)", failure_message, exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_message) from exc

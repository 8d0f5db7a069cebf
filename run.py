"""Entry point for the Movie Rental API.

Launches the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as DATABASE_URL, LOG_LEVEL and API_PREFIX is read
from the environment (see ``movie_rental_api/app/core/config.py``).
Host and port come from ``HOST`` and ``PORT`` (defaults ``0.0.0.0`` and
``8000``).

Usage:
    python run.py
"""
import asyncio
import logging
import os
from uvicorn import Config, Server

from movie_rental_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


async def main() -> None:
    # Logging is configured by create_app when the app module is imported.
    try:
        await run_api()
    except Exception:
        logging.exception("Movie Rental API stopped with an error")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

"""
Application package initializer.

The catalog is organised into logical pieces: ``core`` holds
configuration, logging, errors and the document store adapters;
``services`` holds the business logic (catalog queries, ownership
navigation, mutations); ``schemas`` holds the pydantic payload models
and ``api`` exposes the HTTP routes grouped by version.
"""

from .main import app, create_app  # noqa: F401

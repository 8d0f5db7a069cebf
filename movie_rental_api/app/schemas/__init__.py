"""
Pydantic schema definitions for API payloads.

Each resource (movies, users, rentals, purchases) defines its own
models for request validation and response bodies.  Stored documents
are plain dictionaries; these models describe what the API accepts and
returns.
"""

"""
Service layer.

Each service encapsulates the business logic for one resource and
receives the ``DocumentStore`` it works against in its constructor, so
the API can run against SQLite in production and an in-memory store in
tests.
"""

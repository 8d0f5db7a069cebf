"""
Version 1 of the API.

This subpackage bundles the movie, user, rental and purchase endpoints.
"""

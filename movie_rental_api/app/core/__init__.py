"""Configuration, logging, error types and document store adapters."""

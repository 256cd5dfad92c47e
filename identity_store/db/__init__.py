"""Persistence layer: engine setup, ORM models, schemas and repositories."""

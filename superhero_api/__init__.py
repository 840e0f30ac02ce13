"""Superhero API - in-memory superhero registry served over HTTP.

The service exposes create/read/update/delete operations on a collection of
superhero records kept in process memory. It is built with FastAPI and
organised in layers:

- **API Layer**: FastAPI routes, middleware, schemas and exception handlers
- **Core Layer**: Configuration, logging, tracing and the exception hierarchy
- **Domain Layer**: The superhero entity and the operation outcome taxonomy
- **Infrastructure Layer**: The process-wide in-memory superhero store

The collection is seeded with three records on startup and is never
persisted; restarting the process restores the seed state.
"""

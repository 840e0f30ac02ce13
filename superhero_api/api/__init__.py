"""HTTP API layer built on FastAPI.

Key components:
- **main**: Application factory and lifecycle management
- **routes**: The superhero resource endpoints
- **middleware**: Cross-cutting concerns for all requests
  - Security headers
  - Request context with correlation ID tracking
  - Request logging with timing
  - Centralized error handling with consistent responses
- **schemas**: Pydantic models for request bodies and responses
- **utils**: orjson-backed JSON responses

The API layer translates between HTTP and the superhero store: it parses
identifiers, calls the store, and maps each outcome to a status code.
"""

"""Infrastructure layer for state the application keeps.

- **storage**: The process-wide in-memory superhero store and its FastAPI
  dependency

Nothing is persisted: the store lives in process memory and is rebuilt
from the seed records on every start.
"""

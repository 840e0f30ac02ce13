"""Pydantic schema models for API request/response validation.

- **superheroes**: The superhero item exchanged in request and response bodies
- **errors**: The standard error envelope returned for every failure
"""

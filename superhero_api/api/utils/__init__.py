"""Utility modules for the API layer.

- **responses**: orjson-backed JSON response class used as the app default
"""

"""Middleware and exception handlers installed by ``create_app``.

Starlette runs middleware in reverse order of registration, so the security
headers wrap everything and request logging sits closest to the routes.
"""

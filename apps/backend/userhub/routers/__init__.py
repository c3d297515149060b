"""API routers package."""

from userhub.routers import hello, users

__all__ = [
    "hello",
    "users",
]

"""
Repository layer: sole owner of user storage.

Services depend on the UserRepository interface; the concrete store is chosen
at wiring time (see userhub.deps).
"""

from userhub.repositories.base import UserRepository
from userhub.repositories.memory import InMemoryUserRepository
from userhub.repositories.sql import SqlUserRepository

__all__ = [
    "InMemoryUserRepository",
    "SqlUserRepository",
    "UserRepository",
]

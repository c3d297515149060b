"""Base repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from userhub.models.domain import UserRecord
from userhub.utils.exceptions import ValidationError


class UserRepository(ABC):
    """
    Data access for users.

    Every implementation exposes the same async contract so services never
    care whether users live in process memory or in PostgreSQL. A miss is
    reported as ``None``/``False``; exceptions mean bad input or a store failure.
    """

    @abstractmethod
    async def find_all(self) -> list[UserRecord]:
        """List all users in store order."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> UserRecord | None:
        """Get user by ID."""

    @abstractmethod
    async def find_by_email(self, email: str) -> UserRecord | None:
        """Get user by email, ignoring case."""

    @abstractmethod
    async def search(self, query: str) -> list[UserRecord]:
        """Users whose name or email contains ``query``, ignoring case."""

    @abstractmethod
    async def create(self, data: Mapping[str, Any]) -> UserRecord:
        """Create a user from ``name`` and ``email``."""

    @abstractmethod
    async def update(self, user_id: int, data: Mapping[str, Any]) -> UserRecord | None:
        """Merge the given fields over an existing user."""

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete user by ID. Returns True if deleted, False if not found."""

    async def exists(self, user_id: int) -> bool:
        return await self.find_by_id(user_id) is not None

    @abstractmethod
    async def count(self) -> int:
        """Number of stored users."""


def required_fields(data: Mapping[str, Any]) -> tuple[str, str]:
    """Return (name, email) or raise ValidationError when either is missing."""
    name = data.get("name")
    email = data.get("email")
    if not isinstance(name, str) or not name.strip() or not isinstance(email, str) or not email.strip():
        raise ValidationError("Name and email are required")
    return name.strip(), email.strip()


def changed_fields(data: Mapping[str, Any]) -> dict[str, str]:
    """Updatable fields present in ``data``; unknown keys and None are ignored."""
    return {key: data[key] for key in ("name", "email") if data.get(key) is not None}

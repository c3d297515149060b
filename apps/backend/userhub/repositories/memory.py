"""User repository - in-process implementation."""

import asyncio
import time
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from userhub.models.base import utcnow
from userhub.models.domain import UserRecord
from userhub.repositories.base import UserRepository, changed_fields, required_fields
from userhub.utils.exceptions import ConflictError


class InMemoryUserRepository(UserRepository):
    """
    Users held in a dict owned by this instance.

    Mutations are serialised by an asyncio lock, and the email check happens
    inside the same critical section as the write, so the store behaves like a
    table with a unique index on lower(email).
    """

    def __init__(self, users: list[UserRecord] | None = None):
        self._users: dict[int, UserRecord] = {}
        self._emails: dict[str, int] = {}
        self._last_id = 0
        self._lock = asyncio.Lock()
        for user in users or []:
            self._store(user)

    async def find_all(self) -> list[UserRecord]:
        return list(self._users.values())

    async def find_by_id(self, user_id: int) -> UserRecord | None:
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> UserRecord | None:
        user_id = self._emails.get(email.lower())
        if user_id is None:
            return None
        return self._users.get(user_id)

    async def search(self, query: str) -> list[UserRecord]:
        needle = query.lower()
        return [
            user
            for user in self._users.values()
            if needle in user.name.lower() or needle in user.email.lower()
        ]

    async def create(self, data: Mapping[str, Any]) -> UserRecord:
        name, email = required_fields(data)
        async with self._lock:
            self._ensure_email_free(email)
            now = utcnow()
            user = UserRecord(
                id=self._next_id(),
                name=name,
                email=email,
                created_at=now,
                updated_at=now,
            )
            self._store(user)
            return user

    async def update(self, user_id: int, data: Mapping[str, Any]) -> UserRecord | None:
        changes = changed_fields(data)
        async with self._lock:
            existing = self._users.get(user_id)
            if existing is None:
                return None

            if "email" in changes:
                self._ensure_email_free(changes["email"], owner_id=user_id)

            now = utcnow()
            if now <= existing.updated_at:
                now = existing.updated_at + timedelta(microseconds=1)

            updated = existing.with_changes(**changes, updated_at=now)
            del self._emails[existing.email.lower()]
            self._store(updated)
            return updated

    async def delete(self, user_id: int) -> bool:
        async with self._lock:
            user = self._users.pop(user_id, None)
            if user is None:
                return False
            del self._emails[user.email.lower()]
            return True

    async def count(self) -> int:
        return len(self._users)

    def _store(self, user: UserRecord) -> None:
        self._users[user.id] = user
        self._emails[user.email.lower()] = user.id
        self._last_id = max(self._last_id, user.id)

    def _ensure_email_free(self, email: str, owner_id: int | None = None) -> None:
        holder = self._emails.get(email.lower())
        if holder is not None and holder != owner_id:
            raise ConflictError("User with this email already exists")

    def _next_id(self) -> int:
        # Millisecond clock, bumped so ids stay strictly increasing
        candidate = time.time_ns() // 1_000_000
        return max(candidate, self._last_id + 1)

"""User repository - SQLAlchemy implementation."""

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.logger import async_log_timing, get_logger
from userhub.models import User, UserRecord
from userhub.repositories.base import UserRepository, changed_fields, required_fields
from userhub.utils.exceptions import ConflictError

logger = get_logger(__name__)


def _as_aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on round-trip; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def to_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=_as_aware(user.created_at),
        updated_at=_as_aware(user.updated_at),
    )


class SqlUserRepository(UserRepository):
    """
    Users stored in the ``users`` table.

    Each mutating call commits on its own. Case-insensitive email uniqueness
    is enforced by the ``ux_users_email_lower`` index; a violation is rolled
    back and reported as ConflictError.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> list[UserRecord]:
        async with async_log_timing("users.find_all", logger=logger, level="debug"):
            result = await self.db.execute(select(User).order_by(User.id))
            return [to_record(user) for user in result.scalars().all()]

    async def find_by_id(self, user_id: int) -> UserRecord | None:
        user = await self.db.get(User, user_id)
        return to_record(user) if user else None

    async def find_by_email(self, email: str) -> UserRecord | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        user = result.scalar_one_or_none()
        return to_record(user) if user else None

    async def search(self, query: str) -> list[UserRecord]:
        async with async_log_timing("users.search", logger=logger, level="debug", query=query):
            result = await self.db.execute(
                select(User)
                .where(
                    or_(
                        User.name.icontains(query, autoescape=True),
                        User.email.icontains(query, autoescape=True),
                    )
                )
                .order_by(User.id)
            )
            return [to_record(user) for user in result.scalars().all()]

    async def create(self, data: Mapping[str, Any]) -> UserRecord:
        name, email = required_fields(data)
        now = datetime.now(UTC)
        user = User(name=name, email=email, created_at=now, updated_at=now)
        self.db.add(user)
        await self._commit()
        await self.db.refresh(user)
        return to_record(user)

    async def update(self, user_id: int, data: Mapping[str, Any]) -> UserRecord | None:
        user = await self.db.get(User, user_id)
        if user is None:
            return None

        for field, value in changed_fields(data).items():
            setattr(user, field, value)

        now = datetime.now(UTC)
        previous = _as_aware(user.updated_at)
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        user.updated_at = now

        await self._commit()
        await self.db.refresh(user)
        return to_record(user)

    async def delete(self, user_id: int) -> bool:
        user = await self.db.get(User, user_id)
        if user is None:
            return False
        await self.db.delete(user)
        await self.db.commit()
        return True

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(User.id)))
        return result.scalar_one()

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.warning(
                "Unique constraint violated on users",
                error=str(exc.orig),
                error_type=type(exc).__name__,
            )
            raise ConflictError("User with this email already exists") from exc

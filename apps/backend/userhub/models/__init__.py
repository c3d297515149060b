"""Models package: SQLAlchemy ORM tables and domain entities."""

from userhub.models.domain import UserRecord
from userhub.models.user import User

__all__ = [
    "User",
    "UserRecord",
]

"""Domain entities - store-agnostic representation returned by repositories."""

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class UserRecord:
    """User domain entity."""

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    def with_changes(self, **changes) -> "UserRecord":
        return replace(self, **changes)

"""Demo data for local development."""

from userhub.logger import get_logger
from userhub.repositories import UserRepository

logger = get_logger(__name__)

DEMO_USERS = (
    {"name": "John Doe", "email": "john@example.com"},
    {"name": "Jane Smith", "email": "jane@example.com"},
)


async def seed_demo_users(repository: UserRepository) -> int:
    """Insert the demo users that are not present yet. Returns how many were added."""
    added = 0
    for data in DEMO_USERS:
        if await repository.find_by_email(data["email"]):
            continue
        await repository.create(data)
        added += 1
    logger.info("Demo users seeded", added=added, total=len(DEMO_USERS))
    return added

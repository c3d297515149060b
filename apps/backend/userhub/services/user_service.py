"""User service - business rules for user management."""

from userhub.logger import Logger
from userhub.models import UserRecord
from userhub.repositories import UserRepository
from userhub.schemas.user import UserCreate, UserUpdate
from userhub.utils.exceptions import ConflictError


class UserService:
    """
    Business logic for users.

    Responsibilities:
    - Reject a second user with the same email (case-insensitive)
    - Log every operation and its outcome

    Does NOT:
    - Handle HTTP requests (that's the controller layer)
    - Touch storage directly (that's the repository layer)
    """

    def __init__(self, repository: UserRepository, logger: Logger | None = None):
        self.repository = repository
        self.logger = (logger or Logger()).child(module="UserService")

    async def get_all_users(self) -> list[UserRecord]:
        self.logger.debug("Fetching all users")
        users = await self.repository.find_all()
        self.logger.info("Fetched users", count=len(users))
        return users

    async def get_user_by_id(self, user_id: int) -> UserRecord | None:
        self.logger.debug("Fetching user", user_id=user_id)
        user = await self.repository.find_by_id(user_id)

        if user:
            self.logger.info("User found", user_id=user_id, email=user.email)
        else:
            self.logger.warn("User not found", user_id=user_id)

        return user

    async def get_user_by_email(self, email: str) -> UserRecord | None:
        self.logger.debug("Fetching user by email", email=email)
        return await self.repository.find_by_email(email)

    async def create_user(self, user_data: UserCreate) -> UserRecord:
        self.logger.debug("Creating user", email=user_data.email)

        existing = await self.repository.find_by_email(user_data.email)
        if existing:
            self.logger.warn("Attempted to create duplicate user", email=user_data.email)
            raise ConflictError("User with this email already exists")

        try:
            user = await self.repository.create(user_data.model_dump())
        except ConflictError:
            # Lost a race with a concurrent insert of the same email
            self.logger.warn("Duplicate user rejected by store", email=user_data.email)
            raise

        self.logger.info("User created", user_id=user.id, email=user.email)
        return user

    async def update_user(self, user_id: int, user_data: UserUpdate) -> UserRecord | None:
        self.logger.debug("Updating user", user_id=user_id)

        user = await self.repository.update(user_id, user_data.model_dump(exclude_none=True))

        if user:
            self.logger.info("User updated", user_id=user_id, email=user.email)
        else:
            self.logger.warn("Failed to update user - not found", user_id=user_id)

        return user

    async def delete_user(self, user_id: int) -> bool:
        self.logger.debug("Deleting user", user_id=user_id)

        deleted = await self.repository.delete(user_id)

        if deleted:
            self.logger.info("User deleted", user_id=user_id)
        else:
            self.logger.warn("Failed to delete user - not found", user_id=user_id)

        return deleted

    async def search_users(self, query: str) -> list[UserRecord]:
        self.logger.debug("Searching users", query=query)
        users = await self.repository.search(query)
        self.logger.info("Search finished", query=query, count=len(users))
        return users

    async def count_users(self) -> int:
        return await self.repository.count()

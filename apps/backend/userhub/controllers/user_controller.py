"""HTTP handlers for /api/users.

The controller is the single place where service outcomes and exceptions
become HTTP responses. Routers hand it raw path/query/body values; it
coerces and validates them, calls UserService, and renders envelopes.
"""

import re
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Response
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from userhub.logger import Logger
from userhub.models import UserRecord
from userhub.schemas.user import UserCreate, UserListData, UserResponse, UserUpdate
from userhub.services.user_service import UserService
from userhub.utils import http_response
from userhub.utils.exceptions import AppError, NotFoundError, ValidationError

REQUIRED_CREATE_FIELDS = ("name", "email")
USER_ID_PATTERN = re.compile(r"[0-9]+")
MAX_USER_ID = 2**63 - 1


def serialize_user(user: UserRecord) -> dict[str, Any]:
    return UserResponse.model_validate(user).model_dump(mode="json", by_alias=True)


def parse_user_id(raw_id: str | None) -> int:
    """Coerce a path parameter into a user id.

    Only plain ASCII digits are accepted. Ids beyond the 64-bit range of the
    ``users.id`` column cannot exist, so they are reported as a miss.
    """
    if raw_id is None or not raw_id.strip():
        raise ValidationError("User ID is required")
    if not USER_ID_PATTERN.fullmatch(raw_id):
        raise ValidationError(
            "Invalid user ID",
            errors=[{"field": "id", "message": "User ID must be an integer"}],
        )
    user_id = int(raw_id)
    if user_id > MAX_USER_ID:
        raise NotFoundError("User not found")
    return user_id


def _as_object(body: Any) -> dict[str, Any]:
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError(
            "Request body must be a JSON object",
            errors=[{"field": "body", "message": "Expected a JSON object"}],
        )
    return body


def _schema_errors(exc: SchemaValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "body",
            "message": err["msg"],
        }
        for err in exc.errors()
    ]


def _validate(schema: type[BaseModel], payload: dict[str, Any], message: str) -> Any:
    try:
        return schema.model_validate(payload)
    except SchemaValidationError as exc:
        raise ValidationError(message, errors=_schema_errors(exc)) from exc


class UserController:
    """Request handlers for the user resource."""

    def __init__(self, service: UserService, logger: Logger | None = None):
        self.service = service
        self.logger = (logger or Logger()).child(module="UserController")

    async def list_users(self, search: str | None = None) -> Response:
        async def handler() -> Response:
            if search and search.strip():
                users = await self.service.search_users(search.strip())
            else:
                users = await self.service.get_all_users()
            data = UserListData(
                users=[UserResponse.model_validate(user) for user in users],
                count=len(users),
            )
            return http_response.success(data.model_dump(mode="json", by_alias=True))

        return await self._handle("Listing users", handler, search=search)

    async def get_user(self, raw_id: str | None) -> Response:
        async def handler() -> Response:
            user_id = parse_user_id(raw_id)
            user = await self.service.get_user_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")
            return http_response.success(serialize_user(user))

        return await self._handle("Fetching user", handler, raw_id=raw_id)

    async def create_user(self, body: Any) -> Response:
        async def handler() -> Response:
            payload = _as_object(body)
            missing = [
                field
                for field in REQUIRED_CREATE_FIELDS
                if not isinstance(payload.get(field), str) or not payload[field].strip()
            ]
            if missing:
                raise ValidationError(
                    "Name and email are required",
                    errors=[{"field": field, "message": f"{field} is required"} for field in missing],
                )

            user_data: UserCreate = _validate(UserCreate, payload, "Invalid user data")
            user = await self.service.create_user(user_data)
            return http_response.created(serialize_user(user), "User created successfully")

        return await self._handle("Creating user", handler)

    async def update_user(self, raw_id: str | None, body: Any) -> Response:
        async def handler() -> Response:
            user_id = parse_user_id(raw_id)
            user_data: UserUpdate = _validate(UserUpdate, _as_object(body), "Invalid user data")
            user = await self.service.update_user(user_id, user_data)
            if user is None:
                raise NotFoundError("User not found")
            return http_response.success(serialize_user(user), "User updated successfully")

        return await self._handle("Updating user", handler, raw_id=raw_id)

    async def delete_user(self, raw_id: str | None) -> Response:
        async def handler() -> Response:
            user_id = parse_user_id(raw_id)
            if not await self.service.delete_user(user_id):
                raise NotFoundError("User not found")
            return http_response.success(None, "User deleted successfully")

        return await self._handle("Deleting user", handler, raw_id=raw_id)

    async def _handle(
        self,
        action: str,
        handler: Callable[[], Awaitable[Response]],
        **context: Any,
    ) -> Response:
        """Run one request; every exception is turned into an envelope here."""
        self.logger.info(action, **context)
        try:
            return await handler()
        except AppError as exc:
            self.logger.error(f"{action} failed", exc, status_code=exc.status_code, **context)
            return http_response.error_from_exception(exc)
        except Exception as exc:
            self.logger.error(f"{action} failed unexpectedly", exc, **context)
            return http_response.internal_error()

"""User management API router."""

from typing import Any

from fastapi import APIRouter, Body, Query, Response

from userhub.deps import UserControllerDep
from userhub.schemas import ApiResponse

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=ApiResponse)
async def list_users(
    controller: UserControllerDep,
    search: str | None = Query(None, description="Case-insensitive name/email filter"),
) -> Response:
    """List all users, or those matching ``search``."""
    return await controller.list_users(search)


@router.get("/{user_id}", response_model=ApiResponse)
async def get_user(user_id: str, controller: UserControllerDep) -> Response:
    """Get user by ID."""
    return await controller.get_user(user_id)


@router.post("", response_model=ApiResponse, status_code=201)
async def create_user(
    controller: UserControllerDep,
    body: Any = Body(None),
) -> Response:
    """Create a new user from ``name`` and ``email``."""
    return await controller.create_user(body)


@router.put("/{user_id}", response_model=ApiResponse)
async def update_user(
    user_id: str,
    controller: UserControllerDep,
    body: Any = Body(None),
) -> Response:
    """Update user details."""
    return await controller.update_user(user_id, body)


@router.delete("/{user_id}", response_model=ApiResponse)
async def delete_user(user_id: str, controller: UserControllerDep) -> Response:
    """Delete a user."""
    return await controller.delete_user(user_id)

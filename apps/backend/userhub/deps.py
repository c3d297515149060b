"""FastAPI dependency providers and type aliases.

Wiring order: repository -> service -> controller. Routers only ever ask for
a controller, so swapping the store never touches them.

Usage:
    from userhub.deps import UserControllerDep

    @router.get("")
    async def list_users(controller: UserControllerDep):
        ...
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from userhub.controllers import HelloController, UserController
from userhub.database import session_scope
from userhub.repositories import SqlUserRepository, UserRepository
from userhub.services import HelloService, UserService


async def get_user_repository(request: Request) -> AsyncGenerator[UserRepository, None]:
    """Process-wide in-memory store when one is installed, else a SQL store per request."""
    repository: UserRepository | None = getattr(request.app.state, "user_repository", None)
    if repository is not None:
        yield repository
        return

    async with session_scope() as session:
        yield SqlUserRepository(session)


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
) -> UserService:
    return UserService(repository)


def get_user_controller(
    service: UserService = Depends(get_user_service),
) -> UserController:
    return UserController(service)


def get_hello_controller() -> HelloController:
    return HelloController(HelloService())


UserControllerDep = Annotated[UserController, Depends(get_user_controller)]
HelloControllerDep = Annotated[HelloController, Depends(get_hello_controller)]

__all__ = [
    "HelloControllerDep",
    "UserControllerDep",
    "get_hello_controller",
    "get_user_controller",
    "get_user_repository",
    "get_user_service",
]

"""Services package."""

from userhub.services.hello_service import HelloService
from userhub.services.user_service import UserService

__all__ = [
    "HelloService",
    "UserService",
]

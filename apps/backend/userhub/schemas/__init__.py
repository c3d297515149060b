from userhub.schemas.base import ApiResponse, BaseResponse
from userhub.schemas.hello import HelloMessage, LanguagesData
from userhub.schemas.user import (
    UserCreate,
    UserListData,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "ApiResponse",
    "BaseResponse",
    "HelloMessage",
    "LanguagesData",
    "UserCreate",
    "UserListData",
    "UserResponse",
    "UserUpdate",
]

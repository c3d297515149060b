"""Controllers: translate HTTP input into service calls and envelopes."""

from userhub.controllers.hello_controller import HelloController
from userhub.controllers.user_controller import UserController

__all__ = [
    "HelloController",
    "UserController",
]

from .response import CreateUserRequest, ErrorResponse, HealthResponse, UserResponse
from .user import User

__all__ = [
    "CreateUserRequest",
    "ErrorResponse",
    "HealthResponse",
    "User",
    "UserResponse",
]

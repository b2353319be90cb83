"""Authentication Pydantic schemas for API validation."""

from .user import (
    UserLogin,
    UserRegistration,
    UserProfile,
    UserResponse,
    AuthResponse,
    ProfileResponse,
)

__all__ = [
    "UserLogin",
    "UserRegistration",
    "UserProfile",
    "UserResponse",
    "AuthResponse",
    "ProfileResponse",
]

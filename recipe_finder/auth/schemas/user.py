"""Pydantic schemas for authentication requests and responses."""

from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_core import PydanticCustomError


# ============================================================================
# Request Schemas
# ============================================================================


class UserLogin(BaseModel):
    """Login credentials. Both fields must be non-empty strings."""

    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Plaintext password")


class UserRegistration(BaseModel):
    """Registration data.

    Every constraint violation is reported in a single ValidationError,
    including a password confirmation mismatch alongside other field errors.
    """

    username: str = Field(..., min_length=3, max_length=20, description="Unique username")
    password: str = Field(..., min_length=8, max_length=100, description="Plaintext password")
    password_confirmation: str = Field(..., description="Must equal password")
    first_name: str = Field(..., min_length=1, description="First name")
    last_name: str = Field(..., min_length=1, description="Last name")

    @model_validator(mode="wrap")
    @classmethod
    def check_password_confirmation(cls, data: Any, handler):
        """Append a mismatch error to whatever field errors the model reports."""
        mismatch = _confirmation_mismatch(data)

        try:
            model = handler(data)
        except ValidationError as exc:
            if mismatch is None:
                raise
            line_errors = [_as_line_error(err) for err in exc.errors()]
            line_errors.append(mismatch)
            raise ValidationError.from_exception_data(cls.__name__, line_errors)

        if mismatch is not None:
            raise ValidationError.from_exception_data(cls.__name__, [mismatch])
        return model


def _confirmation_mismatch(data: Any) -> dict | None:
    """Build the mismatch line error, or None when nothing to report."""
    if not isinstance(data, dict):
        return None
    confirmation = data.get("password_confirmation")
    if not isinstance(confirmation, str) or confirmation == data.get("password"):
        return None
    return {
        "type": PydanticCustomError("password_mismatch", "passwords do not match"),
        "loc": ("password_confirmation",),
        "input": confirmation,
    }


def _as_line_error(err: dict) -> dict:
    """Convert a reported error back into a line error for re-raising."""
    line_error = {"type": err["type"], "loc": err["loc"], "input": err["input"]}
    if err.get("ctx"):
        line_error["ctx"] = err["ctx"]
    return line_error


# ============================================================================
# Response Schemas
# ============================================================================


class UserProfile(BaseModel):
    """Public profile fields of a user."""

    id: int
    username: str
    first_name: str
    last_name: str


class UserResponse(UserProfile):
    """User record as returned after login or registration (no password)."""

    created_at: str


class AuthResponse(BaseModel):
    """Response body for successful login or registration."""

    message: str
    user: UserResponse


class ProfileResponse(BaseModel):
    """Response body for profile retrieval."""

    user: UserProfile

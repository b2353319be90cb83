"""Authentication service: password hashing and the login/register/profile flows.

The flows are plain functions. They take the user store and the session
mapping as arguments, so they run the same under Flask (core.user and
flask.session) and in tests (an in-memory connection and a dict).

Store capabilities used:
- users.get_by_username(username) -> row | None
- users.get_by_id(user_id) -> row | None
- users.create(username, password_hash, first_name, last_name) -> user_id

Rows are mappings with id, username, password, first_name, last_name,
created_at keys.
"""

import logging
from collections.abc import MutableMapping

import bcrypt

from ..config import settings
from ..exceptions import DatabaseError, Forbidden, ResourceNotFound, ValidationError
from .schemas import UserLogin, UserProfile, UserRegistration, UserResponse

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"

# Same message for unknown username and wrong password
LOGIN_FAILED_MESSAGE = "Incorrect username or password"


# ============================================================================
# Password Hashing
# ============================================================================


def _password_bytes(password: str) -> bytes:
    # bcrypt only uses the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    """Hash a plaintext password with bcrypt using the configured work factor."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a bcrypt hash."""
    return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))


# ============================================================================
# Session Helpers
# ============================================================================


def establish_session(session: MutableMapping, user_id: int) -> None:
    """Bind the session to a user, dropping anything it held before."""
    session.clear()
    session[SESSION_USER_KEY] = user_id


def get_session_user_id(session: MutableMapping) -> int | None:
    """Return the user id bound to the session, if any."""
    return session.get(SESSION_USER_KEY)


def logout(session: MutableMapping) -> None:
    """Clear the session. Safe to call without an active session."""
    session.clear()


# ============================================================================
# Auth Flows
# ============================================================================


def _to_user_response(row) -> UserResponse:
    """Build the public user record, leaving the password hash behind."""
    return UserResponse(
        id=row["id"],
        username=row["username"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        created_at=row["created_at"],
    )


def login(users, session: MutableMapping, data: UserLogin) -> UserResponse:
    """
    Authenticate a user and establish a session.

    Args:
        users: User store
        session: Session mapping to bind on success
        data: Validated login credentials

    Returns:
        The user record without the password field

    Raises:
        ResourceNotFound: If the username is unknown
        Forbidden: If the password does not match
    """
    row = users.get_by_username(data.username)
    if row is None:
        logger.warning(f"Login attempt for unknown username: {data.username}")
        raise ResourceNotFound(LOGIN_FAILED_MESSAGE)

    if not verify_password(data.password, row["password"]):
        logger.warning(f"Password mismatch on login for username: {data.username}")
        raise Forbidden(LOGIN_FAILED_MESSAGE)

    establish_session(session, row["id"])
    logger.info(f"Successful login: {row['username']}")
    return _to_user_response(row)


def register(users, session: MutableMapping, data: UserRegistration) -> UserResponse:
    """
    Create a user, establish a session, and return the stored record.

    Args:
        users: User store
        session: Session mapping to bind on success
        data: Validated registration data

    Returns:
        The stored user record without the password field

    Raises:
        ValidationError: If the username is already taken
        DatabaseError: If the inserted record cannot be read back
    """
    if users.get_by_username(data.username) is not None:
        logger.warning(f"Registration attempt with taken username: {data.username}")
        raise ValidationError(
            "Invalid request data",
            {"model": "UserRegistration", "errors": [{
                "field": "username",
                "message": "username is already taken",
                "expected_type": "unique",
            }]}
        )

    user_id = users.create(
        username=data.username,
        password_hash=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
    )

    row = users.get_by_id(user_id)
    if row is None:
        raise DatabaseError("User record missing after insert", {"user_id": user_id})

    establish_session(session, row["id"])
    logger.info(f"User registered: {row['username']}")
    return _to_user_response(row)


def profile(users, user_id: int) -> UserProfile:
    """
    Get the public profile for the session's user.

    Raises:
        ResourceNotFound: If the user no longer exists
    """
    row = users.get_by_id(user_id)
    if row is None:
        raise ResourceNotFound("User not found", {"user_id": user_id})

    return UserProfile(
        id=row["id"],
        username=row["username"],
        first_name=row["first_name"],
        last_name=row["last_name"],
    )

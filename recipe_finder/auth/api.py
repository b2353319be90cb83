"""Authentication API endpoints for Recipe Finder Core.

Thin Flask adapters around auth.service: each view hands the service the
user store from Core and Flask's session, then serializes the result.
All endpoints return JSON responses.
"""

import logging

from flask import Blueprint, g, jsonify, session

from ..api.validation import validate_request
from ..db import get_core
from . import service
from .decorators import login_required
from .schemas import AuthResponse, ProfileResponse, UserLogin, UserRegistration

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["POST"])
@validate_request
def login(data: UserLogin):
    """
    Authenticate user and establish a session.

    Returns:
        200: {"message": "Logged in", "user": {...}}
        400: Validation error
        403: Password mismatch
        404: Unknown username

    Example request:
    ```json
    {
        "username": "alice",
        "password": "password123"
    }
    ```
    """
    core = get_core()
    user = service.login(core.user, session, data)

    return jsonify(
        AuthResponse(message="Logged in", user=user).model_dump()
    ), 200


@auth_bp.route("/register", methods=["POST"])
@validate_request
def register(data: UserRegistration):
    """
    Create an account and log the new user in.

    Returns:
        200: {"message": "User created and logged in", "user": {...}}
        400: Validation error (all field errors at once)
        500: Unexpected error

    Example request:
    ```json
    {
        "username": "alice",
        "password": "password123",
        "password_confirmation": "password123",
        "first_name": "A",
        "last_name": "L"
    }
    ```

    Example response:
    ```json
    {
        "message": "User created and logged in",
        "user": {
            "id": 1,
            "username": "alice",
            "first_name": "A",
            "last_name": "L",
            "created_at": "2026-10-18T10:30:00Z"
        }
    }
    ```
    """
    with get_core(atomic=True) as core:
        user = service.register(core.user, session, data)

    return jsonify(
        AuthResponse(message="User created and logged in", user=user).model_dump()
    ), 200


@auth_bp.route("/profile", methods=["GET"])
@login_required
def profile():
    """
    Get the profile of the logged-in user.

    Returns:
        200: {"user": {"id", "username", "first_name", "last_name"}}
        401: No active session
    """
    core = get_core()
    user = service.profile(core.user, g.user_id)

    return jsonify(ProfileResponse(user=user).model_dump()), 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Clear the session. Succeeds with or without an active session."""
    service.logout(session)
    return jsonify({"message": "Logged out"}), 200

"""Authentication module for Recipe Finder Core.

This module provides session-based authentication:
- Schema validation for auth operations
- Password hashing and verification
- Login, registration, profile, and logout flows
- Session gate for protected endpoints

Auth endpoints (top-level routes):
- POST /login - Authenticate and establish a session
- POST /register - Create account and establish a session
- GET /profile - Get current user's profile
- POST /logout - Clear the session
"""

from . import schemas, service

__all__ = ["schemas", "service"]

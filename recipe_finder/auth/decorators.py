"""Authentication decorators for protected endpoints.

- @login_required - Requires a session bound to a user
"""

import logging
from functools import wraps

from flask import g, session

from ..exceptions import AuthenticationError
from . import service

logger = logging.getLogger(__name__)


def login_required(f):
    """
    Decorator to require an authenticated session.

    Rejects the request before the view runs when the session holds no
    user id. Otherwise stores it as g.user_id.

    Raises:
        AuthenticationError: If no session is present

    Example:
    ```python
    @login_required
    def profile():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        user_id = service.get_session_user_id(session)
        if user_id is None:
            logger.warning("Unauthenticated request to protected endpoint")
            raise AuthenticationError(
                "Authentication required",
                {"code": "missing_session"}
            )

        g.user_id = user_id
        return f(*args, **kwargs)

    return wrapper

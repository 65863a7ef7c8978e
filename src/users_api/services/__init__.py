"""Service initialization and dependency injection."""

from fastapi import Request
from users_api.services.user_store import DEMO_USERS, NotFound, UserStore


def get_user_store(request: Request) -> UserStore:
    """Get the user store owned by the running application.

    Args:
        request: Incoming request

    Returns:
        UserStore created by ``create_app``
    """
    return request.app.state.user_store


__all__ = ["DEMO_USERS", "NotFound", "UserStore", "get_user_store"]

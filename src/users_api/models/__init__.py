"""Pydantic models for the User API."""

from users_api.models.health import HealthCheckResponse
from users_api.models.user import User, UserCreate, UserUpdate

__all__ = ["HealthCheckResponse", "User", "UserCreate", "UserUpdate"]

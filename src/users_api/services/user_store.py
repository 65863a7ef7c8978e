"""In-memory user store for the User API."""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

from users_api.models.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DEMO_USERS: tuple[UserCreate, ...] = (
    UserCreate(name="John Doe", email="john.doe@example.com", age=30),
    UserCreate(name="Jane Smith", email="jane.smith@example.com", age=25),
)


@dataclass(frozen=True)
class NotFound:
    """Result of an operation on an id the store does not hold."""

    user_id: int

    @property
    def message(self) -> str:
        """Human-readable description for logs."""
        return f"User with id {self.user_id} not found"


class UserStore:
    """Ordered in-memory collection of users.

    Identifiers come from a counter that only moves forward, so an id is never
    handed out twice, even after the user holding it is deleted. Every public
    method runs under a single lock. Records leave the store as copies.
    """

    def __init__(self, seed_users: Iterable[UserCreate] = ()) -> None:
        """Initialize the store.

        Args:
            seed_users: Users to add before the store is used
        """
        self._users: list[User] = []
        self._next_id = 1
        self._lock = threading.Lock()
        for user in seed_users:
            self.add_user(user)

    def list_users(self) -> list[User]:
        """List all users in insertion order."""
        with self._lock:
            return [user.model_copy() for user in self._users]

    def get_user(self, user_id: int) -> User | None:
        """Get a user by ID, or None if there is no such user."""
        with self._lock:
            user = self._find(user_id)
            return user.model_copy() if user is not None else None

    def add_user(self, user: UserCreate) -> User:
        """Add a user under a newly assigned ID.

        Args:
            user: User data, any client-supplied id is ignored

        Returns:
            The stored user
        """
        with self._lock:
            stored = User(id=self._next_id, name=user.name, email=user.email, age=user.age)
            self._next_id += 1
            self._users.append(stored)
            logger.debug("Added user %s", stored.id)
            return stored.model_copy()

    def update_user(self, user_id: int, changes: UserUpdate) -> User | NotFound:
        """Update a user in place.

        Empty or missing name and email keep their current values, as does
        an age of 0 or a missing age.

        Args:
            user_id: ID of the user to update
            changes: New field values

        Returns:
            The updated user, or NotFound
        """
        with self._lock:
            existing = self._find(user_id)
            if existing is None:
                return NotFound(user_id)
            if changes.name:
                existing.name = changes.name
            if changes.email:
                existing.email = changes.email
            if changes.age:
                existing.age = changes.age
            logger.debug("Updated user %s", user_id)
            return existing.model_copy()

    def delete_user(self, user_id: int) -> User | NotFound:
        """Delete a user.

        Returns:
            The removed user, or NotFound
        """
        with self._lock:
            existing = self._find(user_id)
            if existing is None:
                return NotFound(user_id)
            self._users.remove(existing)
            logger.debug("Deleted user %s", user_id)
            return existing

    def _find(self, user_id: int) -> User | None:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

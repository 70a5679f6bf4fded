from typing import Protocol
from domain.model.user import User


class UniqueViolation(Exception):
    """Raised by a repository when a write would duplicate a unique value."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Unique constraint violated on '{field}'")


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations raise UniqueViolation on duplicate unique keys and
    StoreError for any other backend failure.
    """
    def insert(self, name: str, email: str) -> User:
        """Insert a new user. The store assigns the id."""
        ...

    def find_by_id(self, user_id: int) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def find_many(self, skip: int, limit: int) -> list[User]:
        """Return up to `limit` users ordered by ascending id, skipping `skip`."""
        ...

    def count(self) -> int:
        """Return the total number of users."""
        ...

    def update(self, user_id: int, changes: dict) -> User | None:
        """Apply `changes` to a user. Return the updated User or None if it is gone."""
        ...

    def delete(self, user_id: int) -> bool:
        """Delete a user. Return True if a record was removed."""
        ...

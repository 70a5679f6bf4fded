"""In-memory implementation of UserRepository for testing."""

from dataclasses import replace

from domain.model.user import User
from port.user_repository import UniqueViolation


class FakeUserRepository:
    def __init__(self):
        self.store: dict[int, User] = {}
        self._next_id = 1

    def _email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        return any(u.email == email and u.id != exclude_id for u in self.store.values())

    # ── write operations ─────────────────────────────────────

    def insert(self, name: str, email: str) -> User:
        if self._email_taken(email):
            raise UniqueViolation('email')

        user = User(id=self._next_id, name=name, email=email)
        self._next_id += 1
        self.store[user.id] = user
        return replace(user)

    def update(self, user_id: int, changes: dict) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None
        if 'email' in changes and self._email_taken(changes['email'], exclude_id=user_id):
            raise UniqueViolation('email')

        updated = replace(user, **changes)
        self.store[user_id] = updated
        return replace(updated)

    def delete(self, user_id: int) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def find_by_id(self, user_id: int) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None

    def find_many(self, skip: int, limit: int) -> list[User]:
        ordered = sorted(self.store.values(), key=lambda u: u.id)
        return [replace(u) for u in ordered[skip:skip + limit]]

    def count(self) -> int:
        return len(self.store)

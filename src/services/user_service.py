"""User service — the five CRUD operations over a UserRepository.

Routes call these functions with a repository obtained per request; the
service keeps no state of its own. Every failure is raised as a DomainError
subclass for the caller to map:

- ValidationError: required field missing or empty, raised before any store access
- NotFoundError: no user with the given id
- ConflictError: the store reported a duplicate email
- StoreError: any other store failure (raised by the repository, passed through)
"""

import math

from domain.model.errors import ConflictError, NotFoundError, ValidationError
from domain.model.user import User, UserChanges, UserPage
from port.user_repository import UniqueViolation, UserRepository

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 1000

# Largest skip the store can encode (BSON int64)
MAX_SKIP = 2 ** 63 - 1


def coerce_page_param(value, default: int) -> int:
    """Coerce a raw query value to a positive int, falling back to `default`.

    Anything that is not a finite number, or truncates to less than 1,
    yields the default.

    Example:
        coerce_page_param('3', 1) → 3
        coerce_page_param('abc', 10) → 10
        coerce_page_param('-2', 1) → 1
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number < 1:
        return default
    return int(number)


def list_users(repo: UserRepository, page=None, limit=None) -> UserPage:
    """Return one page of users ordered by ascending id.

    The page read and the count are separate store calls, so `total`
    may be off by concurrent inserts/deletes. A page too far out for the
    store to address is empty.
    """
    page = coerce_page_param(page, DEFAULT_PAGE)
    limit = min(coerce_page_param(limit, DEFAULT_LIMIT), MAX_LIMIT)
    skip = (page - 1) * limit

    users = repo.find_many(skip, limit) if skip <= MAX_SKIP else []
    total = repo.count()
    return UserPage(data=users, total=total, page=page, limit=limit)


def get_user(repo: UserRepository, user_id: int) -> User:
    user = repo.find_by_id(user_id)
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return user


def create_user(repo: UserRepository, name: str | None, email: str | None) -> User:
    """Create a user. Both name and email are required."""
    if _is_blank(name) or _is_blank(email):
        raise ValidationError("Name and email are required")

    try:
        return repo.insert(name=name, email=email)
    except UniqueViolation as e:
        raise ConflictError(e.field, "Email already registered") from e


def update_user(repo: UserRepository, user_id: int, changes: UserChanges) -> User:
    """Apply the supplied fields to an existing user.

    Fields left as None are not touched. A field supplied as an empty
    string is rejected, since name and email can never be empty.
    Whitespace counts as a value.
    """
    updates = _collect_updates(changes)

    existing = repo.find_by_id(user_id)
    if not existing:
        raise NotFoundError(f"User {user_id} not found")
    if not updates:
        return existing

    try:
        user = repo.update(user_id, updates)
    except UniqueViolation as e:
        raise ConflictError(e.field, "Email already registered") from e

    # Deleted between the existence check and the write
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


def delete_user(repo: UserRepository, user_id: int) -> None:
    if not repo.find_by_id(user_id):
        raise NotFoundError(f"User {user_id} not found")
    if not repo.delete(user_id):
        raise NotFoundError(f"User {user_id} not found")


def _is_blank(value: str | None) -> bool:
    return value is None or value == ""


def _collect_updates(changes: UserChanges) -> dict:
    updates = {}
    for field_name in ('name', 'email'):
        value = getattr(changes, field_name)
        if value is None:
            continue
        if _is_blank(value):
            raise ValidationError(f"Field '{field_name}' cannot be empty")
        updates[field_name] = value
    return updates

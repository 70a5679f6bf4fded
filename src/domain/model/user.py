from dataclasses import dataclass, field


@dataclass
class User:
    """Domain model representing a user."""
    id: int
    name: str
    email: str


@dataclass
class UserChanges:
    """Fields to apply on update. None means the field was not supplied."""
    name: str | None = None
    email: str | None = None


@dataclass
class UserPage:
    """One page of users plus the collection total."""
    data: list[User] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        # ceil(total / limit), 0 for an empty collection
        return -(-self.total // self.limit)

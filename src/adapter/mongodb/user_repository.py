"""MongoDB implementation of UserRepository."""

from logging import getLogger
from pymongo import ASCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import COUNTERS_COLLECTION_NAME, USERS_COLLECTION_NAME
from domain.model.errors import StoreError
from domain.model.user import User
from port.user_repository import UniqueViolation

logger = getLogger(__name__)

EMAIL_INDEX_NAME = 'idx_users_email'


def _is_email_violation(error: DuplicateKeyError) -> bool:
    """True if the duplicate key came from the unique email index."""
    key_pattern = (error.details or {}).get('keyPattern') or {}
    if key_pattern:
        return 'email' in key_pattern
    return EMAIL_INDEX_NAME in str(error)


class MongoUserRepository:
    """Users stored as `{_id: int, name, email}` documents.

    Integer ids come from a per-collection sequence document in the
    counters collection, so they are monotonic and never reused.
    """

    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]
        self.counters = db[COUNTERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], EMAIL_INDEX_NAME, unique=True)
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(id=doc['_id'], name=doc['name'], email=doc['email'])

    def _next_id(self) -> int:
        counter = self.counters.find_one_and_update(
            {'_id': USERS_COLLECTION_NAME},
            {'$inc': {'seq': 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter['seq']

    # ── write operations ─────────────────────────────────────

    def insert(self, name: str, email: str) -> User:
        try:
            user_doc = {'_id': self._next_id(), 'name': name, 'email': email}
        except PyMongoError as e:
            logger.error("Failed to allocate user id", extra={"email": email, "error": str(e)})
            raise StoreError("Failed to create user") from e

        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            if not _is_email_violation(e):
                logger.error("Failed to create user", extra={"email": email, "error": str(e)})
                raise StoreError("Failed to create user") from e
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise UniqueViolation('email') from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise StoreError("Failed to create user") from e

        logger.debug("User inserted", extra={"userId": user_doc['_id']})
        return self._to_domain(user_doc)

    def update(self, user_id: int, changes: dict) -> User | None:
        if not changes:
            return self.find_by_id(user_id)
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            if not _is_email_violation(e):
                logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
                raise StoreError("Failed to update user") from e
            logger.warning("User update failed: email already exists", extra={"userId": user_id})
            raise UniqueViolation('email') from e
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to update user") from e
        return self._to_domain(doc) if doc else None

    def delete(self, user_id: int) -> bool:
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to delete user") from e
        return result.deleted_count > 0

    # ── read operations ──────────────────────────────────────

    def find_by_id(self, user_id: int) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def find_many(self, skip: int, limit: int) -> list[User]:
        try:
            cursor = self.collection.find({}).sort('_id', ASCENDING).skip(skip).limit(limit)
            return [self._to_domain(doc) for doc in cursor]
        except (PyMongoError, OverflowError) as e:
            logger.error("Failed to list users", extra={"skip": skip, "limit": limit, "error": str(e)})
            raise StoreError("Failed to list users") from e

    def count(self) -> int:
        try:
            return self.collection.count_documents({})
        except PyMongoError as e:
            logger.error("Failed to count users", extra={"error": str(e)})
            raise StoreError("Failed to count users") from e

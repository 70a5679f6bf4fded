"""MongoDB adapters."""

USERS_COLLECTION_NAME = 'users'
COUNTERS_COLLECTION_NAME = 'counters'

# =============================================================================
# Sync Ledger Index Setup
# =============================================================================
# Creates the MongoDB indexes used by the sync ledger collections. Safe to
# run repeatedly; existing indexes are left untouched.
# =============================================================================

import sys

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from netsync.models import MongoSettings


SYNC_RUNS = "sync_runs"
SYNC_ACTIONS = "sync_actions"


def ensure_indexes(db: Database) -> list[str]:
    """
    Create ledger indexes.

    Args:
        db: MongoDB database instance

    Returns:
        Names of the indexes ensured
    """
    return [
        db[SYNC_RUNS].create_index([("dagster_run_id", ASCENDING)], unique=True),
        db[SYNC_RUNS].create_index([("status", ASCENDING), ("started_at", ASCENDING)]),
        db[SYNC_ACTIONS].create_index([("dagster_run_id", ASCENDING), ("source_id", ASCENDING)]),
        db[SYNC_ACTIONS].create_index([("source_id", ASCENDING), ("timestamp", ASCENDING)]),
    ]


def main() -> int:
    """
    Index setup entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        settings = MongoSettings()
        client = MongoClient(settings.connection_string, serverSelectionTimeoutMS=10000)
        try:
            names = ensure_indexes(client[settings.database])
        finally:
            client.close()
    except Exception as e:
        print(f"Index setup failed: {e}", file=sys.stderr)
        return 1

    for name in names:
        print(f"Ensured index {name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

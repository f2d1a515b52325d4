from __future__ import annotations

from typing import Iterable, List

from pymongo import ASCENDING

from ..core.constants import ARCHIVE_COLLECTION, LATE_COMERS_COLLECTION, USERS_COLLECTION
from .connection import DatabaseConnection
from .mongo_base import store_errors

DEMO_ACCOUNTS = (
    ("scanner-cse", "CSE"),
    ("scanner-ece", "ECE"),
)


def apply_indexes(conn: DatabaseConnection) -> List[str]:
    """Create the indexes the report and settlement queries rely on (idempotent)."""

    db = conn.db()
    with store_errors("create indexes"):
        created = [
            db[ARCHIVE_COLLECTION].create_index(
                [("createdAt", ASCENDING), ("rollNumber", ASCENDING)],
                name="period_roll",
            ),
            db[ARCHIVE_COLLECTION].create_index([("accountKey", ASCENDING)], name="account_key"),
        ]
    return created


def list_collections(conn: DatabaseConnection) -> List[str]:
    with store_errors("list collections"):
        return sorted(conn.db().list_collection_names())


def ensure_demo_accounts(conn: DatabaseConnection, accounts: Iterable[tuple] = DEMO_ACCOUNTS) -> int:
    """Create demo scanning accounts and matching late-comers documents.

    Existing documents keep their ledgers; only missing ones are inserted.
    """

    db = conn.db()
    created = 0
    with store_errors("seed demo accounts"):
        for account_id, dept in accounts:
            res = db[USERS_COLLECTION].update_one(
                {"_id": account_id},
                {"$setOnInsert": {"dept": dept, "entries": {}}},
                upsert=True,
            )
            if res.upserted_id is not None:
                created += 1
            db[LATE_COMERS_COLLECTION].update_one(
                {"_id": dept},
                {"$setOnInsert": {"status": "", "reason": ""}},
                upsert=True,
            )
    return created

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from ..core.constants import USERS_COLLECTION
from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mongo_base import entry_path, get_entries, store_errors
from .model import Account, LedgerEntry


def build_mark_late_pipeline(roll_number: str, *, period_tag: str, threshold: int) -> List[Dict[str, Any]]:
    """Update pipeline for one late mark, evaluated server-side on one document.

    `count` and `fine` are derived from the stored values inside the same
    write, so concurrent marks for one roll number serialize on the document
    and the fine branch always sees the post-increment count.
    """

    current = f"${entry_path(roll_number)}"
    return [
        {
            "$set": {
                "dept": {"$ifNull": ["$dept", ""]},
                entry_path(roll_number): {
                    "$let": {
                        "vars": {
                            "prev": {"$ifNull": [current, {"$literal": {}}]},
                        },
                        "in": {
                            "$let": {
                                "vars": {
                                    "prevCount": {"$ifNull": ["$$prev.count", 0]},
                                    "nextCount": {"$add": [{"$ifNull": ["$$prev.count", 0]}, 1]},
                                },
                                "in": {
                                    "count": "$$nextCount",
                                    "fine": {
                                        "$add": [
                                            {"$ifNull": ["$$prev.fine", 0]},
                                            {"$cond": [{"$gt": ["$$nextCount", int(threshold)]}, 1, 0]},
                                        ]
                                    },
                                    "status": {"$literal": False},
                                    "createdAt": {
                                        "$cond": [
                                            {"$gt": ["$$prevCount", 0]},
                                            {"$ifNull": ["$$prev.createdAt", {"$literal": period_tag}]},
                                            {"$literal": period_tag},
                                        ]
                                    },
                                    "lastUpdated": "$$NOW",
                                },
                            }
                        },
                    }
                },
            }
        }
    ]


def entry_from_doc(roll_number: str, raw: Dict[str, Any]) -> LedgerEntry:
    return LedgerEntry(
        roll_number=str(roll_number),
        count=int(raw.get("count") or 0),
        fine=int(raw.get("fine") or 0),
        status=bool(raw.get("status", False)),
        created_at=raw.get("createdAt"),
        last_updated=raw.get("lastUpdated"),
    )


class MongoLedgerRepository:
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def _users(self):
        return self._conn.db()[USERS_COLLECTION]

    def get_account(self, account_id: str) -> Optional[Account]:
        with store_errors("load account"):
            doc = self._users().find_one({"_id": account_id})
        if not doc:
            return None

        entries = {roll: entry_from_doc(roll, raw) for roll, raw in get_entries(doc).items()}
        return Account(account_id=str(doc["_id"]), dept=str(doc.get("dept") or ""), entries=entries)

    def record_late(self, *, account_id: str, roll_number: str, period_tag: str, threshold: int) -> LedgerEntry:
        pipeline = build_mark_late_pipeline(roll_number, period_tag=period_tag, threshold=threshold)
        with store_errors("mark late"):
            doc = self._users().find_one_and_update(
                {"_id": account_id},
                pipeline,
                projection={entry_path(roll_number): 1},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )

        raw = get_entries(doc).get(roll_number)
        if raw is None:
            raise StoreError(f"mark late failed: entry {roll_number} missing after update")
        return entry_from_doc(roll_number, raw)

from __future__ import annotations

from typing import Any, Dict, List

from pymongo import ASCENDING

from ..core.constants import ARCHIVE_COLLECTION, USERS_COLLECTION
from ..core.exceptions import StoreError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mongo_base import entry_path, get_entries, run_in_transaction, store_errors
from .model import ArchiveRecord, account_key


def record_from_doc(doc: Dict[str, Any]) -> ArchiveRecord:
    return ArchiveRecord(
        archive_id=str(doc["_id"]),
        account_key=str(doc.get("accountKey") or ""),
        roll_number=str(doc.get("rollNumber") or ""),
        dept=str(doc.get("dept") or ""),
        count=int(doc.get("count") or 0),
        fine=int(doc.get("fine") or 0),
        total_amount=int(doc.get("totalAmount") or 0),
        status=bool(doc.get("status", False)),
        created_at=doc.get("createdAt"),
        archived_at=doc.get("archivedAt"),
    )


class MongoArchiveRepository:
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def settle(
        self,
        *,
        account_id: str,
        roll_number: str,
        archive_id: str,
        threshold: int,
        unit_price: int,
    ) -> ArchiveRecord:
        db = self._conn.db()
        users = db[USERS_COLLECTION]
        archive = db[ARCHIVE_COLLECTION]

        def txn(session) -> ArchiveRecord:
            doc = users.find_one({"_id": account_id}, {entry_path(roll_number): 1, "dept": 1}, session=session)
            raw = get_entries(doc).get(roll_number)
            if raw is None or int(raw.get("count") or 0) <= int(threshold):
                raise ValidationError(f"Roll No. {roll_number} has no outstanding fine")

            fine = int(raw.get("fine") or 0)
            snapshot = {
                "accountKey": account_key(account_id, roll_number),
                "rollNumber": roll_number,
                "dept": str(doc.get("dept") or ""),
                "count": int(raw.get("count") or 0),
                "fine": fine,
                "totalAmount": fine * int(unit_price),
                "status": True,
                "createdAt": raw.get("createdAt"),
            }
            # Archive first, then reset; both land in the same commit.
            inserted = archive.update_one(
                {"_id": archive_id},
                {"$setOnInsert": snapshot, "$currentDate": {"archivedAt": True}},
                upsert=True,
                session=session,
            )
            if inserted.upserted_id is None:
                raise StoreError(f"settle fine failed: archive record {archive_id} already exists")
            users.update_one(
                {"_id": account_id},
                {
                    "$set": {
                        entry_path(roll_number, "count"): 0,
                        entry_path(roll_number, "fine"): 0,
                        entry_path(roll_number, "status"): True,
                    },
                    "$currentDate": {entry_path(roll_number, "lastUpdated"): True},
                },
                session=session,
            )
            saved = archive.find_one({"_id": archive_id}, session=session)
            return record_from_doc(saved or {"_id": archive_id, **snapshot})

        return run_in_transaction(self._conn, txn, action="settle fine")

    def list_for_period(self, period_tag: str) -> List[ArchiveRecord]:
        with store_errors("load archive"):
            cursor = self._conn.db()[ARCHIVE_COLLECTION].find({"createdAt": period_tag}).sort("rollNumber", ASCENDING)
            return [record_from_doc(d) for d in cursor]

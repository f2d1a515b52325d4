from __future__ import annotations

from typing import Any, List, Optional, Sequence

from pymongo import ASCENDING, ReplaceOne

from ..core.constants import CLEARED_LATE_COMER_FIELDS, LATE_COMERS_COLLECTION
from ..database.connection import DatabaseConnection
from ..database.mongo_base import run_in_transaction, store_errors


class MongoLateComersRepository:
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def _collection(self):
        return self._conn.db()[LATE_COMERS_COLLECTION]

    def reset_all(self) -> int:
        coll = self._collection()

        def txn(session) -> int:
            ids = [d["_id"] for d in coll.find({}, {"_id": 1}, session=session)]
            if not ids:
                return 0
            # Replace, not merge: only _id survives.
            coll.bulk_write([ReplaceOne({"_id": _id}, {}) for _id in ids], ordered=False, session=session)
            return len(ids)

        return run_in_transaction(self._conn, txn, action="reset late-comers")

    def fetch_page_ids(self, *, after_id: Optional[Any], limit: int) -> List[Any]:
        query = {"_id": {"$gt": after_id}} if after_id is not None else {}
        with store_errors("list late-comers"):
            cursor = self._collection().find(query, {"_id": 1}).sort("_id", ASCENDING).limit(int(limit))
            return [d["_id"] for d in cursor]

    def clear_fields(self, ids: Sequence[Any]) -> int:
        coll = self._collection()
        ids = list(ids)

        def txn(session) -> int:
            res = coll.update_many({"_id": {"$in": ids}}, {"$set": dict(CLEARED_LATE_COMER_FIELDS)}, session=session)
            return int(res.matched_count)

        return run_in_transaction(self._conn, txn, action="clear late-comers fields")

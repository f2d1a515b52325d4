from __future__ import annotations

import copy
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest
from pymongo.errors import OperationFailure

from src.latecomers.latecomers.archive.model import ArchiveRecord, account_key
from src.latecomers.latecomers.core.exceptions import StoreError, ValidationError
from src.latecomers.latecomers.ledger.model import Account, LedgerEntry

FIXED_NOW = datetime(2025, 3, 14, 9, 5, 0, tzinfo=timezone.utc)


# --- Fake pymongo layer ----------------------------------------------------


def _set_path(doc: dict, path: str, value: Any) -> None:
    parts = path.split(".")
    for p in parts[:-1]:
        doc = doc.setdefault(p, {})
    doc[parts[-1]] = value


def _matches(doc: dict, query: Optional[dict]) -> bool:
    for key, cond in (query or {}).items():
        value = doc.get(key)
        if isinstance(cond, dict) and "$gt" in cond:
            if value is None or not value > cond["$gt"]:
                return False
        elif isinstance(cond, dict) and "$in" in cond:
            if value not in cond["$in"]:
                return False
        elif value != cond:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: List[dict]):
        self._docs = docs

    def sort(self, key: str, direction: int = 1):
        self._docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def limit(self, n: int):
        self._docs = self._docs[: int(n)]
        return self

    def __iter__(self):
        return iter(self._docs)


class FakeCollection:
    """Just enough of a pymongo Collection for the repositories.

    Writes issued inside a session are rolled back if that session aborts.
    """

    def __init__(self, docs: Optional[List[dict]] = None):
        self.docs: Dict[Any, dict] = {}
        for d in docs or []:
            self.docs[d["_id"]] = copy.deepcopy(d)
        self.reads = 0
        self.bulk_calls = 0

    def _write(self, session, op: Callable[[], None]) -> None:
        op()
        if session is not None:
            session.writes += 1

    def find(self, query=None, projection=None, session=None):
        self.reads += 1
        return FakeCursor([copy.deepcopy(d) for d in self.docs.values() if _matches(d, query)])

    def find_one(self, query=None, projection=None, session=None):
        for d in self.find(query, projection, session=session):
            return d
        return None

    def replace_one(self, query, replacement, session=None):
        _id = query["_id"]

        def op():
            self.docs[_id] = {"_id": _id, **copy.deepcopy(replacement)}

        self._write(session, op)
        return SimpleNamespace(matched_count=1 if _id in self.docs else 0)

    def bulk_write(self, requests, ordered=True, session=None):
        self.bulk_calls += 1
        replaced = [(r._filter["_id"], r._doc) for r in requests]

        def op():
            for _id, replacement in replaced:
                self.docs[_id] = {"_id": _id, **copy.deepcopy(replacement)}

        self._write(session, op)
        return SimpleNamespace(modified_count=len(replaced))

    def update_one(self, query, update, upsert=False, session=None):
        _id = query["_id"]
        exists = _id in self.docs

        def op():
            doc = self.docs.get(_id)
            inserted = False
            if doc is None:
                if not upsert:
                    return
                doc = {"_id": _id}
                self.docs[_id] = doc
                inserted = True
            for path, value in update.get("$set", {}).items():
                _set_path(doc, path, copy.deepcopy(value))
            if inserted:
                for path, value in update.get("$setOnInsert", {}).items():
                    _set_path(doc, path, copy.deepcopy(value))
            for path in update.get("$currentDate", {}):
                _set_path(doc, path, FIXED_NOW)

        self._write(session, op)
        return SimpleNamespace(matched_count=1 if exists else 0, upserted_id=None if exists else _id)

    def update_many(self, query, update, session=None):
        matched = [d["_id"] for d in self.docs.values() if _matches(d, query)]

        def op():
            for _id in matched:
                for path, value in update.get("$set", {}).items():
                    _set_path(self.docs[_id], path, copy.deepcopy(value))

        self._write(session, op)
        return SimpleNamespace(matched_count=len(matched))


class FakeSession:
    def __init__(self, conn: "FakeConnection"):
        self._conn = conn
        self.writes = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def with_transaction(self, callback):
        snapshot = {name: copy.deepcopy(c.docs) for name, c in self._conn.collections.items()}
        self.writes = 0
        try:
            result = callback(self)
            if self._conn.fail_commits:
                raise OperationFailure("Transaction commit failed")
        except Exception:
            for name, docs in snapshot.items():
                self._conn.collections[name].docs = docs
            raise
        self._conn.commits.append(self.writes)
        return result


class FakeConnection:
    """Stands in for DatabaseConnection: `.client.start_session()` and `.db()[name]`."""

    database_name = "late_comers_test"

    def __init__(self, collections: Optional[Dict[str, FakeCollection]] = None):
        self.collections: Dict[str, FakeCollection] = collections or {}
        self.commits: List[int] = []
        self.fail_commits = False
        self.closed = False

    @property
    def client(self):
        return self

    def start_session(self):
        return FakeSession(self)

    def db(self):
        return self.collections

    def close(self):
        self.closed = True


# --- In-memory repositories -------------------------------------------------


class InMemoryLedger:
    """Mirrors the single-write semantics of the Mongo pipeline update."""

    def __init__(self, accounts: Optional[Dict[str, dict]] = None):
        self.accounts: Dict[str, dict] = accounts or {}
        self.writes = 0

    def get_account(self, account_id: str) -> Optional[Account]:
        doc = self.accounts.get(account_id)
        if doc is None:
            return None
        entries = {roll: self._entry(roll, raw) for roll, raw in doc.get("entries", {}).items()}
        return Account(account_id=account_id, dept=doc.get("dept", ""), entries=entries)

    def record_late(self, *, account_id: str, roll_number: str, period_tag: str, threshold: int) -> LedgerEntry:
        self.writes += 1
        doc = self.accounts.setdefault(account_id, {"dept": "", "entries": {}})
        prev = doc["entries"].get(roll_number, {})
        prev_count = int(prev.get("count", 0))
        count = prev_count + 1
        doc["entries"][roll_number] = {
            "count": count,
            "fine": int(prev.get("fine", 0)) + (1 if count > threshold else 0),
            "status": False,
            "createdAt": prev.get("createdAt", period_tag) if prev_count > 0 else period_tag,
            "lastUpdated": FIXED_NOW,
        }
        return self._entry(roll_number, doc["entries"][roll_number])

    @staticmethod
    def _entry(roll: str, raw: dict) -> LedgerEntry:
        return LedgerEntry(
            roll_number=roll,
            count=raw.get("count", 0),
            fine=raw.get("fine", 0),
            status=raw.get("status", False),
            created_at=raw.get("createdAt"),
            last_updated=raw.get("lastUpdated"),
        )


class InMemoryArchive:
    def __init__(self, ledger: Optional[InMemoryLedger] = None, records: Optional[List[ArchiveRecord]] = None):
        self._ledger = ledger or InMemoryLedger()
        self.records: List[ArchiveRecord] = list(records or [])
        self.last_period = None

    def settle(self, *, account_id, roll_number, archive_id, threshold, unit_price) -> ArchiveRecord:
        doc = self._ledger.accounts.get(account_id, {"dept": "", "entries": {}})
        raw = doc["entries"].get(roll_number)
        if raw is None or raw["count"] <= threshold:
            raise ValidationError(f"Roll No. {roll_number} has no outstanding fine")

        rec = ArchiveRecord(
            archive_id=archive_id,
            account_key=account_key(account_id, roll_number),
            roll_number=roll_number,
            dept=doc.get("dept", ""),
            count=raw["count"],
            fine=raw["fine"],
            total_amount=raw["fine"] * unit_price,
            status=True,
            created_at=raw.get("createdAt"),
            archived_at=FIXED_NOW,
        )
        self.records.append(rec)
        raw.update({"count": 0, "fine": 0, "status": True})
        return rec

    def list_for_period(self, period_tag: str):
        self.last_period = period_tag
        rows = [r for r in self.records if r.created_at == period_tag]
        return sorted(rows, key=lambda r: r.roll_number)


class InMemoryLateComers:
    def __init__(self, count: int = 0):
        self.ids = [f"doc-{i:05d}" for i in range(count)]
        self.cleared_batches: List[int] = []
        self.reset_calls = 0
        self.fail_reset = False

    def reset_all(self) -> int:
        self.reset_calls += 1
        if self.fail_reset:
            raise StoreError("reset late-comers failed: boom")
        return len(self.ids)

    def fetch_page_ids(self, *, after_id, limit):
        ids = [i for i in self.ids if after_id is None or i > after_id]
        return ids[:limit]

    def clear_fields(self, ids) -> int:
        self.cleared_batches.append(len(ids))
        return len(ids)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW

from __future__ import annotations

import logging

import pytest

from conftest import FakeCollection, FakeConnection, InMemoryLateComers

from src.latecomers.latecomers.core.exceptions import StoreError
from src.latecomers.latecomers.maintenance.mongo_late_comers_repository import MongoLateComersRepository
from src.latecomers.latecomers.maintenance.service import MonthlyResetJob


def _conn(n):
    docs = [{"_id": f"DEPT{i}", "checkInTime": "09:12", "reason": "traffic", "21045": {"count": 2}} for i in range(n)]
    return FakeConnection({"late-comers": FakeCollection(docs)})


def test_reset_empties_every_document_in_one_batched_commit():
    conn = _conn(7)
    job = MonthlyResetJob(MongoLateComersRepository(conn))

    assert job.run() is None

    coll = conn.collections["late-comers"]
    assert len(coll.docs) == 7
    assert all(doc == {"_id": _id} for _id, doc in coll.docs.items())
    assert coll.bulk_calls == 1
    assert conn.commits == [1]


def test_reset_of_empty_collection_is_a_noop():
    conn = _conn(0)

    MonthlyResetJob(MongoLateComersRepository(conn)).run()

    assert conn.collections["late-comers"].docs == {}


def test_commit_failure_leaves_documents_unchanged_and_reraises():
    conn = _conn(5)
    conn.fail_commits = True
    job = MonthlyResetJob(MongoLateComersRepository(conn))

    with pytest.raises(StoreError):
        job.run()

    assert conn.commits == []
    for doc in conn.collections["late-comers"].docs.values():
        assert doc["checkInTime"] == "09:12"
        assert doc["21045"] == {"count": 2}


def test_failure_is_logged(caplog):
    repo = InMemoryLateComers(count=3)
    repo.fail_reset = True

    with caplog.at_level(logging.ERROR):
        with pytest.raises(StoreError):
            MonthlyResetJob(repo).run()

    assert "Error resetting late-comers collection" in caplog.text

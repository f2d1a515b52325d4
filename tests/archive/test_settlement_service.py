from __future__ import annotations

import pytest

from conftest import InMemoryArchive, InMemoryLedger

from src.latecomers.latecomers.archive.service import SettlementService
from src.latecomers.latecomers.core.exceptions import ValidationError


def _ledger_with(count: int, fine: int) -> InMemoryLedger:
    return InMemoryLedger(
        {
            "acc-1": {
                "dept": "CSE",
                "entries": {"21045": {"count": count, "fine": fine, "status": False, "createdAt": "3 2025"}},
            }
        }
    )


def test_settle_archives_snapshot_and_resets_entry(fixed_clock):
    ledger = _ledger_with(count=5, fine=2)
    archive = InMemoryArchive(ledger)
    svc = SettlementService(archive, clock=fixed_clock)

    result = svc.settle("acc-1", "21045", confirmed=True)

    assert len(archive.records) == 1
    rec = archive.records[0]
    assert rec.total_amount == 100
    assert (rec.count, rec.fine, rec.status) == (5, 2, True)
    assert rec.dept == "CSE"
    assert rec.created_at == "3 2025"
    assert rec.account_key == "acc-1_21045"
    assert rec.archive_id.startswith("acc-1_21045_")

    entry = ledger.get_account("acc-1").entries["21045"]
    assert (entry.count, entry.fine, entry.status) == (0, 0, True)

    assert result.amount == 100
    assert result.notice.description == "Payment of ₹100 recorded successfully for Roll No. 21045"


def test_settle_requires_confirmation(fixed_clock):
    archive = InMemoryArchive(_ledger_with(count=5, fine=2))
    svc = SettlementService(archive, clock=fixed_clock)

    with pytest.raises(ValidationError, match="confirm"):
        svc.settle("acc-1", "21045", confirmed=False)

    assert archive.records == []


def test_settle_twice_is_rejected_without_duplicate_archive(fixed_clock):
    archive = InMemoryArchive(_ledger_with(count=4, fine=1))
    svc = SettlementService(archive, clock=fixed_clock)

    svc.settle("acc-1", "21045", confirmed=True)
    with pytest.raises(ValidationError, match="no outstanding fine"):
        svc.settle("acc-1", "21045", confirmed=True)

    assert len(archive.records) == 1


def test_settle_rejects_entry_below_threshold(fixed_clock):
    archive = InMemoryArchive(_ledger_with(count=3, fine=0))
    svc = SettlementService(archive, clock=fixed_clock)

    with pytest.raises(ValidationError):
        svc.settle("acc-1", "21045", confirmed=True)

    assert archive.records == []

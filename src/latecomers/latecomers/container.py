from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any

from .archive.mongo_archive_repository import MongoArchiveRepository
from .archive.service import SettlementService
from .common.datetime_utils import now_local
from .core.constants import (
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_FINE_UNIT_PRICE,
    DEFAULT_LATE_THRESHOLD,
    DEFAULT_MAX_LEDGER_ENTRIES,
    DEFAULT_RESET_PAGE_SIZE,
    DEFAULT_RESET_TIMEZONE,
)
from .database.connection import DatabaseConnection, StoreConfig
from .ledger.mongo_ledger_repository import MongoLedgerRepository
from .ledger.policy import FinePolicy
from .ledger.service import LedgerService
from .maintenance.mongo_late_comers_repository import MongoLateComersRepository
from .maintenance.service import FieldClearService, MonthlyResetJob
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    conn: Any
    policy: FinePolicy

    ledger_service: LedgerService
    settlement_service: SettlementService
    monthly_reset_job: MonthlyResetJob
    field_clear_service: FieldClearService
    report_service: ReportService


def build_policy(settings: Any) -> FinePolicy:
    return FinePolicy(
        threshold=int(getattr(settings, "LATE_THRESHOLD", DEFAULT_LATE_THRESHOLD)),
        unit_price=int(getattr(settings, "FINE_UNIT_PRICE", DEFAULT_FINE_UNIT_PRICE)),
        currency=str(getattr(settings, "CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL)),
    )


def build_container(*, settings: Any, conn: DatabaseConnection | None = None) -> Container:
    """Wire repositories and services around one store connection.

    The caller owns `conn` (created here when omitted) and closes it on exit.
    """

    if conn is None:
        conn = DatabaseConnection(
            StoreConfig(
                uri=str(getattr(settings, "MONGODB_URI")),
                database=str(getattr(settings, "MONGODB_DB")),
            )
        )

    policy = build_policy(settings)
    clock = partial(now_local, str(getattr(settings, "RESET_TIMEZONE", DEFAULT_RESET_TIMEZONE)))

    ledger_repo = MongoLedgerRepository(conn)
    archive_repo = MongoArchiveRepository(conn)
    late_comers_repo = MongoLateComersRepository(conn)

    return Container(
        conn=conn,
        policy=policy,
        ledger_service=LedgerService(
            ledger_repo,
            policy=policy,
            max_entries=int(getattr(settings, "MAX_LEDGER_ENTRIES", DEFAULT_MAX_LEDGER_ENTRIES)),
            clock=clock,
        ),
        settlement_service=SettlementService(archive_repo, policy=policy, clock=clock),
        monthly_reset_job=MonthlyResetJob(late_comers_repo),
        field_clear_service=FieldClearService(
            late_comers_repo,
            secret_token=getattr(settings, "CRON_SECRET_TOKEN", ""),
            page_size=int(getattr(settings, "RESET_PAGE_SIZE", DEFAULT_RESET_PAGE_SIZE)),
        ),
        report_service=ReportService(archive_repo, policy=policy),
    )

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Optional

import pandas as pd
from openpyxl.utils import get_column_letter

from ..archive.model import ArchiveRecord
from ..archive.repository import ArchiveRepository
from ..common.datetime_utils import format_timestamp, month_key, period_tag
from ..common.validators import parse_month_key
from ..core.constants import EXPORT_COLUMNS, EXPORT_SHEET_NAME
from ..core.enums import PaymentStatus
from ..ledger.policy import FinePolicy

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass(frozen=True)
class MonthReport:
    month_key: str
    period_tag: str
    rows: list[dict]
    notice: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def filename(self) -> str:
        return f"Attendance_{self.month_key}.xlsx"


class ReportService:
    def __init__(self, archive: ArchiveRepository, *, policy: Optional[FinePolicy] = None):
        self._archive = archive
        self._policy = policy or FinePolicy()

    def build_month_report(self, month: str) -> MonthReport:
        m, y = parse_month_key(month)
        tag = period_tag(m, y)

        records = self._archive.list_for_period(tag)
        rows = [self._to_row(r) for r in records]
        notice = None if rows else f"No records found for {tag}."
        return MonthReport(month_key=month_key(m, y), period_tag=tag, rows=rows, notice=notice)

    def export_workbook(self, report: MonthReport) -> Optional[bytes]:
        """Serialize a report to xlsx bytes; empty reports produce no file."""

        if report.is_empty:
            return None

        df = pd.DataFrame(report.rows, columns=EXPORT_COLUMNS)
        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)
            sheet = writer.sheets[EXPORT_SHEET_NAME]
            for idx, column in enumerate(EXPORT_COLUMNS, start=1):
                widest = max([len(column)] + [len(str(v)) for v in df[column]])
                sheet.column_dimensions[get_column_letter(idx)].width = widest + 2
        return out.getvalue()

    def _to_row(self, r: ArchiveRecord) -> dict:
        return {
            "Roll Number": r.roll_number,
            "Department": r.dept,
            "Late Count": r.count,
            "Fine Amount": self._policy.format_amount(self._policy.amount_for(r.fine)),
            "Payment Status": PaymentStatus.from_flag(r.status).value,
            "Created Date": r.created_at or "",
            "Archived Date": format_timestamp(r.archived_at),
        }

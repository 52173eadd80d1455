# reporting/exporters.py
from __future__ import annotations

import csv
import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List

from core.reporting.contexts import ExpenseExportContext, ExpenseExportRow
from core.services.finance.analytics import UNCLASSIFIED
from core.services.finance.helpers import to_timestamp

CSV_HEADERS = ["Date", "Category", "Cost Type", "Amount", "Percentage of Total"]


def _raw_date(value) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value or "")


def _chronological_key(record) -> tuple:
    moment = to_timestamp(record.date)
    if moment is None:
        return (1, 0.0, record.id)
    return (0, moment.timestamp(), record.id)


def build_expense_rows(ctx: ExpenseExportContext) -> List[ExpenseExportRow]:
    """
    One row per expense record, each with its share of total expenses.
    Rows are chronological; records with unreadable dates sort last.
    """
    total = sum((float(r.amount) for r in ctx.records), 0.0)
    ordered = sorted(ctx.records, key=_chronological_key)
    return [
        ExpenseExportRow(
            date=_raw_date(r.date),
            category=r.category,
            cost_type=r.cost_type.value if r.cost_type is not None else UNCLASSIFIED,
            amount=float(r.amount),
            percentage=(float(r.amount) / total) * 100.0 if total > 0 else 0.0,
        )
        for r in ordered
    ]


def write_expenses_csv(ctx: ExpenseExportContext, output_path: Path) -> Path:
    rows = build_expense_rows(ctx)
    total = sum((row.amount for row in rows), 0.0)
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(CSV_HEADERS)
        for row in rows:
            writer.writerow([
                row.date,
                row.category,
                row.cost_type,
                f"{row.amount:.2f}",
                f"{row.percentage:.2f}%",
            ])
        writer.writerow([])
        writer.writerow(["Total Expenses", "", "", f"{total:.2f}", "100%" if rows else "0%"])
    return output_path


def write_expenses_json(
    ctx: ExpenseExportContext,
    output_path: Path,
    *,
    exported_at: datetime | None = None,
) -> Path:
    rows = build_expense_rows(ctx)
    payload = {
        "exportDate": (exported_at or datetime.now(timezone.utc)).isoformat(),
        "dateRange": {
            "start": ctx.start.isoformat() if ctx.start else "All",
            "end": ctx.end.isoformat() if ctx.end else "All",
        },
        "summary": {
            "totalExpenses": round(sum((row.amount for row in rows), 0.0), 2),
            "recordCount": len(rows),
        },
        "data": [
            {
                "date": row.date,
                "category": row.category,
                "costType": row.cost_type,
                "amount": row.amount,
                "percentage": round(row.percentage, 4),
            }
            for row in rows
        ],
    }
    output_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return output_path


__all__ = [
    "CSV_HEADERS",
    "build_expense_rows",
    "write_expenses_csv",
    "write_expenses_json",
]

from __future__ import annotations

from typing import Iterable

from core.models import CostType, FinancialRecord, RecordType
from core.services.finance.models import CategoryBreakdownRow, CostTypeShare

ALL = "all"
UNCLASSIFIED = "unclassified"

_COST_TYPE_LABELS: tuple[tuple[CostType | None, str], ...] = (
    (CostType.FIXED, "Fixed Costs"),
    (CostType.VARIABLE, "Variable Costs"),
    (None, "Unclassified Costs"),
)


def _expenses(records: Iterable[FinancialRecord]) -> list[FinancialRecord]:
    return [record for record in records if record.type == RecordType.EXPENSE]


def _share(amount: float, total: float) -> float:
    return (amount / total) * 100.0 if total > 0 else 0.0


def total_expenses(records: Iterable[FinancialRecord]) -> float:
    return sum((float(r.amount) for r in _expenses(records)), 0.0)


def build_category_breakdown(records: Iterable[FinancialRecord]) -> list[CategoryBreakdownRow]:
    expenses = _expenses(records)
    total = sum((float(r.amount) for r in expenses), 0.0)

    buckets: dict[str, dict[str, object]] = {}
    for record in expenses:
        bucket = buckets.get(record.category)
        if bucket is None:
            bucket = {"amount": 0.0, "cost_type": None}
            buckets[record.category] = bucket
        bucket["amount"] = float(bucket["amount"] or 0.0) + float(record.amount)
        # a category takes the cost type of its latest record
        bucket["cost_type"] = record.cost_type

    rows = [
        CategoryBreakdownRow(
            category=category,
            cost_type=bucket["cost_type"],  # type: ignore[arg-type]
            amount=float(bucket["amount"] or 0.0),
            percentage=_share(float(bucket["amount"] or 0.0), total),
        )
        for category, bucket in buckets.items()
    ]
    rows.sort(key=lambda row: (-row.amount, row.category.lower()))
    return rows


def build_cost_type_breakdown(records: Iterable[FinancialRecord]) -> list[CostTypeShare]:
    expenses = _expenses(records)
    total = sum((float(r.amount) for r in expenses), 0.0)
    shares: list[CostTypeShare] = []
    for cost_type, label in _COST_TYPE_LABELS:
        amount = sum((float(r.amount) for r in expenses if r.cost_type == cost_type), 0.0)
        shares.append(
            CostTypeShare(
                cost_type=cost_type,
                label=label,
                amount=amount,
                percentage=_share(amount, total),
            )
        )
    return shares


def filter_category_breakdown(
    rows: Iterable[CategoryBreakdownRow],
    *,
    cost_type: CostType | str = ALL,
    category: str = ALL,
) -> list[CategoryBreakdownRow]:
    wanted_type = cost_type.value if isinstance(cost_type, CostType) else str(cost_type).lower()
    out: list[CategoryBreakdownRow] = []
    for row in rows:
        row_type = row.cost_type.value if row.cost_type is not None else UNCLASSIFIED
        if wanted_type != ALL and row_type != wanted_type:
            continue
        if category != ALL and row.category != category:
            continue
        out.append(row)
    return out


__all__ = [
    "ALL",
    "UNCLASSIFIED",
    "total_expenses",
    "build_category_breakdown",
    "build_cost_type_breakdown",
    "filter_category_breakdown",
]

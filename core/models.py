"""Flat import surface for the finance domain types."""
from __future__ import annotations

from core.domain import (
    CostType,
    FinancialRecord,
    PeriodType,
    Project,
    RecordDate,
    RecordType,
    generate_id,
)

__all__ = [
    "generate_id",
    "RecordType",
    "CostType",
    "PeriodType",
    "FinancialRecord",
    "RecordDate",
    "Project",
]

from __future__ import annotations

from enum import Enum


class RecordType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    INVESTMENT = "investment"


class CostType(str, Enum):
    FIXED = "fixed"
    VARIABLE = "variable"


class PeriodType(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


__all__ = ["RecordType", "CostType", "PeriodType"]

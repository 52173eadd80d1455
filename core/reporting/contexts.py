from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from core.models import FinancialRecord
from core.services.finance.models import FinanceSnapshot


@dataclass
class FinanceReportContext:
    title: str
    snapshot: FinanceSnapshot
    as_of: date


@dataclass
class FinancePdfContext(FinanceReportContext):
    chart_png_path: str = ""


@dataclass
class ExpenseExportRow:
    date: str
    category: str
    cost_type: str
    amount: float
    percentage: float


@dataclass
class ExpenseExportContext:
    records: List[FinancialRecord]
    start: Optional[date] = None
    end: Optional[date] = None

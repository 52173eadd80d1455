from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.models import CostType, PeriodType


@dataclass(frozen=True)
class PeriodRange:
    start_date: datetime
    end_date: datetime
    label: str


@dataclass(frozen=True)
class FinancialPeriod:
    type: PeriodType
    start_date: str
    end_date: str
    label: str
    income: float
    expense: float

    @property
    def profit(self) -> float:
        return self.income - self.expense

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type.value,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "label": self.label,
            "income": self.income,
            "expense": self.expense,
            "profit": self.profit,
        }


@dataclass(frozen=True)
class ProjectFinancial:
    project_id: str
    project_name: str
    income: float
    fixed_costs: float
    variable_costs: float
    unclassified_costs: float = 0.0

    @property
    def total_costs(self) -> float:
        return self.fixed_costs + self.variable_costs

    @property
    def profit(self) -> float:
        return self.income - self.total_costs

    @property
    def margin(self) -> float:
        if self.income > 0:
            return (self.profit / self.income) * 100.0
        return 0.0


@dataclass(frozen=True)
class CategoryBreakdownRow:
    category: str
    cost_type: Optional[CostType]
    amount: float
    percentage: float


@dataclass(frozen=True)
class CostTypeShare:
    cost_type: Optional[CostType]
    label: str
    amount: float
    percentage: float


@dataclass(frozen=True)
class Anomaly:
    index: int
    series: str
    kind: str
    z_score: float


@dataclass(frozen=True)
class TrendPoint:
    label: str
    income: float
    expense: float
    profit: float
    income_growth: float = 0.0
    expense_growth: float = 0.0
    profit_growth: float = 0.0
    income_average: float = 0.0
    expense_average: float = 0.0
    profit_average: float = 0.0
    is_forecast: bool = False
    anomalies: tuple[str, ...] = ()

    @property
    def is_anomaly(self) -> bool:
        return bool(self.anomalies)


@dataclass(frozen=True)
class FinancialMetrics:
    cac: float
    ltv: float
    cash_runway: float
    burn_rate: float
    churn_rate: float


@dataclass(frozen=True)
class PeriodFilterState:
    period_type: PeriodType = PeriodType.MONTHLY
    selected_year: Optional[int] = None
    selected_quarter: Optional[int] = None


@dataclass(frozen=True)
class PeriodSummaryRow:
    period: str
    income: float
    expenses: float

    @property
    def profit(self) -> float:
        return self.income - self.expenses


@dataclass(frozen=True)
class FinanceSnapshot:
    period_type: PeriodType
    months_back: int
    generated_at: datetime
    periods: list[FinancialPeriod]
    projects: list[ProjectFinancial]
    by_category: list[CategoryBreakdownRow]
    by_cost_type: list[CostTypeShare]
    consistent: bool
    notes: list[str] = field(default_factory=list)

    @property
    def income(self) -> float:
        return sum((p.income for p in self.periods), 0.0)

    @property
    def expense(self) -> float:
        return sum((p.expense for p in self.periods), 0.0)

    @property
    def profit(self) -> float:
        return self.income - self.expense


__all__ = [
    "PeriodRange",
    "FinancialPeriod",
    "ProjectFinancial",
    "CategoryBreakdownRow",
    "CostTypeShare",
    "Anomaly",
    "TrendPoint",
    "FinancialMetrics",
    "PeriodFilterState",
    "PeriodSummaryRow",
    "FinanceSnapshot",
]

from .aggregation import aggregate_financial_data
from .consistency import validate_period_consistency
from .models import (
    Anomaly,
    CategoryBreakdownRow,
    CostTypeShare,
    FinanceSnapshot,
    FinancialMetrics,
    FinancialPeriod,
    PeriodFilterState,
    PeriodRange,
    PeriodSummaryRow,
    ProjectFinancial,
    TrendPoint,
)
from .periods import get_period_ranges
from .profitability import calculate_portfolio_financials, calculate_project_financials
from .service import FinanceService

__all__ = [
    "FinanceService",
    "get_period_ranges",
    "aggregate_financial_data",
    "validate_period_consistency",
    "calculate_project_financials",
    "calculate_portfolio_financials",
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

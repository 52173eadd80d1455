from __future__ import annotations

import math

from core.services.finance.models import FinancialMetrics


def calculate_cac(marketing_spend: float, new_customers: int) -> float:
    """Customer acquisition cost; infinite when nobody was acquired."""
    if new_customers == 0:
        return math.inf
    return marketing_spend / new_customers


def calculate_ltv(average_revenue_per_customer: float, retention_rate: float) -> float:
    if retention_rate <= 0 or retention_rate > 1:
        return 0.0
    if retention_rate == 1:
        return math.inf
    return average_revenue_per_customer / (1 - retention_rate)


def calculate_cash_runway(cash_balance: float, monthly_burn_rate: float) -> float:
    """Months of cash left at the current burn."""
    if monthly_burn_rate <= 0:
        return math.inf
    return cash_balance / monthly_burn_rate


def calculate_burn_rate(total_expenses: float, month_count: int) -> float:
    if month_count <= 0:
        return 0.0
    return total_expenses / month_count


def calculate_churn_rate(lost_customers: int, starting_customers: int) -> float:
    if starting_customers == 0:
        return 0.0
    return (lost_customers / starting_customers) * 100.0


def _finite_or_unbounded(value: object) -> bool:
    return isinstance(value, (int, float)) and not math.isnan(value) and value != -math.inf


def validate_financial_metrics(metrics: FinancialMetrics) -> bool:
    if not all(_finite_or_unbounded(v) for v in (metrics.cac, metrics.ltv, metrics.cash_runway)):
        return False
    burn = metrics.burn_rate
    if not isinstance(burn, (int, float)) or not math.isfinite(burn) or burn < 0:
        return False
    churn = metrics.churn_rate
    return isinstance(churn, (int, float)) and math.isfinite(churn) and 0 <= churn <= 100


__all__ = [
    "calculate_cac",
    "calculate_ltv",
    "calculate_cash_runway",
    "calculate_burn_rate",
    "calculate_churn_rate",
    "validate_financial_metrics",
]

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from core.models import FinancialRecord
from core.services.finance.helpers import is_effectively_equal, to_timestamp
from core.services.finance.models import FinancialPeriod

logger = logging.getLogger(__name__)

MONTHS_PER_QUARTER = 3


def months_within(
    quarter: FinancialPeriod,
    monthly_periods: Sequence[FinancialPeriod],
) -> list[FinancialPeriod]:
    start = to_timestamp(quarter.start_date)
    end = to_timestamp(quarter.end_date)
    if start is None or end is None:
        return []
    within = []
    for month in monthly_periods:
        month_start = to_timestamp(month.start_date)
        month_end = to_timestamp(month.end_date)
        if month_start is not None and month_end is not None and start <= month_start and month_end <= end:
            within.append(month)
    return within


def validate_period_consistency(
    records: Iterable[FinancialRecord] | None,
    monthly_periods: Sequence[FinancialPeriod],
    quarterly_periods: Sequence[FinancialPeriod],
) -> bool:
    """True when every fully covered quarter equals the sum of its three months.

    Quarters only partly covered by the monthly window are not checked.
    ``records`` is not re-aggregated.
    """
    for quarter in quarterly_periods:
        months = months_within(quarter, monthly_periods)
        if len(months) < MONTHS_PER_QUARTER:
            continue
        monthly_income = sum((m.income for m in months), 0.0)
        monthly_expense = sum((m.expense for m in months), 0.0)
        if not (
            is_effectively_equal(quarter.income, monthly_income)
            and is_effectively_equal(quarter.expense, monthly_expense)
        ):
            logger.warning(
                "Quarter %s does not match its months: income %.2f vs %.2f, expense %.2f vs %.2f",
                quarter.label,
                quarter.income,
                monthly_income,
                quarter.expense,
                monthly_expense,
            )
            return False
    return True


__all__ = ["validate_period_consistency", "months_within"]

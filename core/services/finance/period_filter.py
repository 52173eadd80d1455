from __future__ import annotations

from dataclasses import replace
from datetime import date, timezone
from typing import Iterable

from core.exceptions import ValidationError
from core.models import FinancialRecord, PeriodType, RecordType
from core.services.finance.helpers import (
    MONTH_ABBREVIATIONS,
    normalize_period_type,
    quarter_of,
    to_timestamp,
)
from core.services.finance.models import PeriodFilterState, PeriodSummaryRow


def _dated(records: Iterable[FinancialRecord]):
    for record in records:
        moment = to_timestamp(record.date, timezone.utc)
        if moment is not None:
            yield moment, record


def available_years(records: Iterable[FinancialRecord]) -> list[int]:
    return sorted({moment.year for moment, _ in _dated(records)}, reverse=True)


def default_filter_state(
    records: Iterable[FinancialRecord],
    *,
    today: date | None = None,
) -> PeriodFilterState:
    years = available_years(records)
    year = years[0] if years else (today or date.today()).year
    return PeriodFilterState(period_type=PeriodType.MONTHLY, selected_year=year)


def select_period(
    state: PeriodFilterState,
    *,
    period_type: PeriodType | str | None = None,
    year: int | None = None,
    quarter: int | None = None,
) -> PeriodFilterState:
    if quarter is not None and not 1 <= quarter <= 4:
        raise ValidationError("Quarter must be between 1 and 4.", code="INVALID_QUARTER")
    return replace(
        state,
        period_type=normalize_period_type(period_type) if period_type is not None else state.period_type,
        selected_year=year if year is not None else state.selected_year,
        selected_quarter=quarter,
    )


def filter_records(
    records: Iterable[FinancialRecord],
    state: PeriodFilterState,
) -> list[FinancialRecord]:
    kept: list[FinancialRecord] = []
    for moment, record in _dated(records):
        if moment.year != state.selected_year:
            continue
        if (
            state.period_type == PeriodType.QUARTERLY
            and state.selected_quarter is not None
            and quarter_of(moment.month) != state.selected_quarter
        ):
            continue
        kept.append(record)
    return kept


def summarize_periods(
    records: Iterable[FinancialRecord],
    state: PeriodFilterState,
) -> list[PeriodSummaryRow]:
    buckets: dict[tuple[int, int], dict[str, object]] = {}
    for moment, record in _dated(filter_records(records, state)):
        if state.period_type == PeriodType.MONTHLY:
            key = (moment.year, moment.month)
            label = f"{MONTH_ABBREVIATIONS[moment.month - 1]} {moment.year}"
        elif state.period_type == PeriodType.QUARTERLY:
            key = (moment.year, quarter_of(moment.month))
            label = f"Q{key[1]} {moment.year}"
        else:
            key = (moment.year, 0)
            label = str(state.selected_year)

        bucket = buckets.setdefault(key, {"label": label, "income": 0.0, "expenses": 0.0})
        # investment records land with expenses here, as in the period filter view
        field = "income" if record.type == RecordType.INCOME else "expenses"
        bucket[field] = float(bucket[field] or 0.0) + float(record.amount)

    return [
        PeriodSummaryRow(
            period=str(bucket["label"]),
            income=float(bucket["income"] or 0.0),
            expenses=float(bucket["expenses"] or 0.0),
        )
        for _, bucket in sorted(buckets.items())
    ]


def summarize_totals(rows: Iterable[PeriodSummaryRow]) -> PeriodSummaryRow:
    income = 0.0
    expenses = 0.0
    for row in rows:
        income += row.income
        expenses += row.expenses
    return PeriodSummaryRow(period="Total", income=income, expenses=expenses)


__all__ = [
    "available_years",
    "default_filter_state",
    "select_period",
    "filter_records",
    "summarize_periods",
    "summarize_totals",
]

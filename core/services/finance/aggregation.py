from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Iterable

from core.models import FinancialRecord, PeriodType, RecordType
from core.services.finance.helpers import normalize_period_type, resolve_now, to_timestamp
from core.services.finance.models import FinancialPeriod, PeriodRange
from core.services.finance.periods import DEFAULT_MONTHS_BACK, get_period_ranges

logger = logging.getLogger(__name__)


def stamp_records(
    records: Iterable[FinancialRecord],
    tz: tzinfo,
) -> list[tuple[datetime, FinancialRecord]]:
    stamped: list[tuple[datetime, FinancialRecord]] = []
    for record in records:
        moment = to_timestamp(record.date, tz)
        if moment is None:
            logger.debug("Skipping record %s with unparseable date %r", record.id, record.date)
            continue
        stamped.append((moment, record))
    return stamped


def sum_period(
    stamped: list[tuple[datetime, FinancialRecord]],
    period_range: PeriodRange,
    period_type: PeriodType,
) -> FinancialPeriod:
    income = 0.0
    expense = 0.0
    for moment, record in stamped:
        if not period_range.start_date <= moment <= period_range.end_date:
            continue
        if record.type == RecordType.INCOME:
            income += float(record.amount)
        elif record.type == RecordType.EXPENSE:
            expense += float(record.amount)
    return FinancialPeriod(
        type=period_type,
        start_date=period_range.start_date.isoformat(),
        end_date=period_range.end_date.isoformat(),
        label=period_range.label,
        income=income,
        expense=expense,
    )


def aggregate_financial_data(
    records: Iterable[FinancialRecord],
    period_type: PeriodType | str,
    months_back: int = DEFAULT_MONTHS_BACK,
    *,
    now: datetime | None = None,
) -> list[FinancialPeriod]:
    """Income/expense totals per range of the lookback window.

    Every range is returned, even when no record falls into it.
    """
    kind = normalize_period_type(period_type)
    now = resolve_now(now)
    ranges = get_period_ranges(kind, months_back, now=now)
    stamped = stamp_records(records, now.tzinfo)
    return [sum_period(stamped, period_range, kind) for period_range in ranges]


__all__ = ["aggregate_financial_data", "stamp_records", "sum_period"]

from __future__ import annotations

import math
from datetime import MAXYEAR, MINYEAR, datetime, timedelta

from core.exceptions import ValidationError
from core.models import PeriodType
from core.services.finance.helpers import (
    month_label,
    normalize_period_type,
    quarter_of,
    resolve_now,
    shift_month,
)
from core.services.finance.models import PeriodRange

DEFAULT_MONTHS_BACK = 12
_ONE_TICK = timedelta(microseconds=1)


def validate_months_back(months_back: int) -> int:
    if isinstance(months_back, bool) or not isinstance(months_back, int) or months_back <= 0:
        raise ValidationError(
            f"Lookback window must be a positive number of months, got {months_back!r}.",
            code="INVALID_LOOKBACK",
        )
    return months_back


def _oldest_start(kind: PeriodType, months_back: int, now: datetime) -> tuple[int, int]:
    if kind == PeriodType.MONTHLY:
        return shift_month(now.year, now.month, -(months_back - 1))
    if kind == PeriodType.QUARTERLY:
        quarter_start_month = (quarter_of(now.month) - 1) * 3 + 1
        return shift_month(now.year, quarter_start_month, -3 * (math.ceil(months_back / 3) - 1))
    return now.year - (math.ceil(months_back / 12) - 1), 1


def _month_range(start: datetime, months: int, label: str) -> PeriodRange:
    next_year, next_month = shift_month(start.year, start.month, months)
    if next_year > MAXYEAR:
        return PeriodRange(start_date=start, end_date=datetime.max.replace(tzinfo=start.tzinfo), label=label)
    next_start = start.replace(year=next_year, month=next_month)
    return PeriodRange(start_date=start, end_date=next_start - _ONE_TICK, label=label)


def get_period_ranges(
    period_type: PeriodType | str,
    months_back: int = DEFAULT_MONTHS_BACK,
    *,
    now: datetime | None = None,
) -> list[PeriodRange]:
    """Contiguous ranges covering the lookback window, oldest first.

    The last range is the one containing ``now`` and may be partial.
    """
    kind = normalize_period_type(period_type)
    months_back = validate_months_back(months_back)
    now = resolve_now(now)
    oldest_year, _ = _oldest_start(kind, months_back, now)
    if oldest_year < MINYEAR:
        raise ValidationError(
            f"Lookback window of {months_back} months reaches before year {MINYEAR}.",
            code="INVALID_LOOKBACK",
        )

    def first_of(year: int, month: int) -> datetime:
        return datetime(year, month, 1, tzinfo=now.tzinfo)

    ranges: list[PeriodRange] = []
    if kind == PeriodType.MONTHLY:
        for i in range(months_back - 1, -1, -1):
            year, month = shift_month(now.year, now.month, -i)
            ranges.append(_month_range(first_of(year, month), 1, month_label(year, month)))
    elif kind == PeriodType.QUARTERLY:
        quarter_start_month = (quarter_of(now.month) - 1) * 3 + 1
        for i in range(math.ceil(months_back / 3) - 1, -1, -1):
            year, month = shift_month(now.year, quarter_start_month, -3 * i)
            ranges.append(_month_range(first_of(year, month), 3, f"Q{quarter_of(month)} {year}"))
    else:
        for i in range(math.ceil(months_back / 12) - 1, -1, -1):
            year = now.year - i
            ranges.append(_month_range(first_of(year, 1), 12, str(year)))
    return ranges


__all__ = ["DEFAULT_MONTHS_BACK", "get_period_ranges", "validate_months_back"]

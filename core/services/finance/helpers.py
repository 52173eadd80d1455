from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo

from core.exceptions import ValidationError
from core.models import PeriodType

CURRENCY_TOLERANCE = 0.01

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_PERIOD_ALIASES = {
    "monthly": PeriodType.MONTHLY,
    "month": PeriodType.MONTHLY,
    "quarterly": PeriodType.QUARTERLY,
    "quarter": PeriodType.QUARTERLY,
    "annual": PeriodType.ANNUAL,
    "annually": PeriodType.ANNUAL,
    "year": PeriodType.ANNUAL,
    "yearly": PeriodType.ANNUAL,
}


def is_effectively_equal(lhs: float, rhs: float, tolerance: float = CURRENCY_TOLERANCE) -> bool:
    return abs(lhs - rhs) <= tolerance


def normalize_period_type(value: PeriodType | str) -> PeriodType:
    if isinstance(value, PeriodType):
        return value
    token = (value or "").strip().lower()
    period_type = _PERIOD_ALIASES.get(token)
    if period_type is None:
        raise ValidationError(
            f"Unsupported period type: {value!r}.",
            code="INVALID_PERIOD_TYPE",
        )
    return period_type


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def quarter_of(month: int) -> int:
    return (month - 1) // 3 + 1


def month_label(year: int, month: int) -> str:
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year % 100:02d}"


def resolve_now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def to_timestamp(value: object, tz: tzinfo = timezone.utc) -> datetime | None:
    """Interpret a record date as an aware instant; None when it cannot be parsed.

    Date-only and naive values are read in ``tz``.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


__all__ = [
    "CURRENCY_TOLERANCE",
    "MONTH_ABBREVIATIONS",
    "is_effectively_equal",
    "normalize_period_type",
    "shift_month",
    "quarter_of",
    "month_label",
    "resolve_now",
    "to_timestamp",
]

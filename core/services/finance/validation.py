from __future__ import annotations

import math
from dataclasses import replace
from typing import Any

from core.exceptions import BusinessRuleError, ValidationError
from core.models import CostType, FinancialRecord, RecordType
from core.services.finance.helpers import to_timestamp

_LEDGER_TYPES = (RecordType.INCOME, RecordType.EXPENSE)
_UPDATABLE_FIELDS = {
    "date",
    "type",
    "category",
    "amount",
    "project_id",
    "cost_type",
    "description",
    "user_id",
}


def _require_text(value: Any, label: str, code: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValidationError(f"Financial record {label} is required.", code=code)
    return text


def validate_date(value: Any) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Financial record date is required.", code="DATE_REQUIRED")
    if to_timestamp(value) is None:
        raise ValidationError(f"Invalid financial record date: {value!r}.", code="INVALID_DATE")


def validate_type(value: Any) -> RecordType:
    try:
        record_type = value if isinstance(value, RecordType) else RecordType(str(value or "").strip().lower())
    except ValueError:
        record_type = None
    if record_type not in _LEDGER_TYPES:
        raise ValidationError(
            'Financial record type must be "income" or "expense".',
            code="INVALID_RECORD_TYPE",
        )
    return record_type


def validate_amount(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("Financial record amount must be a number.", code="INVALID_AMOUNT")
    amount = float(value)
    if not math.isfinite(amount) or amount < 0:
        raise ValidationError(
            "Financial record amount must be a non-negative number.",
            code="INVALID_AMOUNT",
        )
    return amount


def validate_cost_type(value: Any, record_type: RecordType) -> CostType | None:
    if value is None or value == "":
        return None
    try:
        cost_type = value if isinstance(value, CostType) else CostType(str(value).strip().lower())
    except ValueError as exc:
        raise ValidationError(
            'Cost type must be "fixed" or "variable".',
            code="INVALID_COST_TYPE",
        ) from exc
    if record_type != RecordType.EXPENSE:
        raise BusinessRuleError(
            "Only expense records carry a cost type.",
            code="COST_TYPE_ON_NON_EXPENSE",
        )
    return cost_type


def validate_new_record(
    *,
    date: Any,
    type: Any,
    category: Any,
    amount: Any,
    project_id: Any,
    description: Any,
    cost_type: Any = None,
) -> dict[str, Any]:
    """Validate a new record's fields and return them normalized."""
    validate_date(date)
    record_type = validate_type(type)
    return {
        "date": date,
        "type": record_type,
        "amount": validate_amount(amount),
        "category": _require_text(category, "category", "CATEGORY_REQUIRED"),
        "project_id": _require_text(project_id, "project id", "PROJECT_REQUIRED"),
        "description": _require_text(description, "description", "DESCRIPTION_REQUIRED"),
        "cost_type": validate_cost_type(cost_type, record_type),
    }


def apply_record_update(record: FinancialRecord, **changes: Any) -> FinancialRecord:
    unknown = set(changes) - _UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(
            f"Unknown financial record fields: {', '.join(sorted(unknown))}.",
            code="UNKNOWN_FIELD",
        )

    updates = dict(changes)
    if "date" in updates:
        validate_date(updates["date"])
    if "type" in updates:
        updates["type"] = validate_type(updates["type"])
    if "amount" in updates:
        updates["amount"] = validate_amount(updates["amount"])
    for key, label, code in (
        ("category", "category", "CATEGORY_REQUIRED"),
        ("project_id", "project id", "PROJECT_REQUIRED"),
        ("description", "description", "DESCRIPTION_REQUIRED"),
    ):
        if key in updates:
            updates[key] = _require_text(updates[key], label, code)

    record_type = updates.get("type", record.type)
    if "cost_type" in updates:
        updates["cost_type"] = validate_cost_type(updates["cost_type"], record_type)
    elif record_type != RecordType.EXPENSE:
        updates["cost_type"] = None
    return replace(record, **updates)


def is_valid_record(record: FinancialRecord) -> bool:
    if not (record.id and record.user_id):
        return False
    try:
        validate_new_record(
            date=record.date,
            type=record.type,
            category=record.category,
            amount=record.amount,
            project_id=record.project_id,
            description=record.description,
            cost_type=record.cost_type,
        )
    except (ValidationError, BusinessRuleError):
        return False
    return True


__all__ = [
    "validate_date",
    "validate_type",
    "validate_amount",
    "validate_cost_type",
    "validate_new_record",
    "apply_record_update",
    "is_valid_record",
]

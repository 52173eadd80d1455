from __future__ import annotations

from datetime import date, datetime

from core.models import CostType, FinancialRecord, RecordType
from infra.db.models import FinancialRecordORM


def _date_text(value: object) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value or "")


def record_to_orm(record: FinancialRecord) -> FinancialRecordORM:
    return FinancialRecordORM(
        id=record.id,
        project_id=record.project_id,
        occurred_on=_date_text(record.date),
        record_type=(record.type.value if hasattr(record.type, "value") else str(record.type)),
        category=record.category,
        amount=float(record.amount),
        cost_type=(None if record.cost_type is None else record.cost_type.value),
        description=record.description,
        user_id=record.user_id,
    )


def record_from_orm(obj: FinancialRecordORM) -> FinancialRecord:
    return FinancialRecord(
        id=obj.id,
        date=obj.occurred_on,
        type=RecordType(obj.record_type),
        category=obj.category,
        amount=float(obj.amount or 0.0),
        project_id=obj.project_id,
        cost_type=CostType(obj.cost_type) if obj.cost_type else None,
        description=obj.description or "",
        user_id=obj.user_id or "",
    )


def record_values(record: FinancialRecord) -> dict[str, object]:
    orm = record_to_orm(record)
    return {
        "project_id": orm.project_id,
        "occurred_on": orm.occurred_on,
        "record_type": orm.record_type,
        "category": orm.category,
        "amount": orm.amount,
        "cost_type": orm.cost_type,
        "description": orm.description,
        "user_id": orm.user_id,
    }

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from core.domain.enums import CostType, RecordType
from core.domain.identifiers import generate_id

RecordDate = Union[str, date, datetime]


def _as_record_type(value: Any) -> RecordType:
    if isinstance(value, RecordType):
        return value
    return RecordType(str(value or "").strip().lower())


def _as_cost_type(value: Any) -> Optional[CostType]:
    if value is None or isinstance(value, CostType):
        return value
    token = str(value).strip().lower()
    return CostType(token) if token else None


@dataclass(frozen=True)
class FinancialRecord:
    id: str
    date: RecordDate
    type: RecordType
    category: str
    amount: float
    project_id: str
    cost_type: Optional[CostType] = None
    description: str = ""
    user_id: str = ""

    @staticmethod
    def create(
        date: RecordDate,
        type: RecordType | str,
        category: str,
        amount: float,
        project_id: str,
        cost_type: CostType | str | None = None,
        description: str = "",
        user_id: str = "",
    ) -> "FinancialRecord":
        return FinancialRecord(
            id=generate_id("record"),
            date=date,
            type=_as_record_type(type),
            category=category,
            amount=float(amount),
            project_id=project_id,
            cost_type=_as_cost_type(cost_type),
            description=description,
            user_id=user_id,
        )

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "FinancialRecord":
        """Build a record from the camelCase shape used by the web client."""
        return FinancialRecord(
            id=str(data.get("id") or generate_id("record")),
            date=data.get("date") or "",
            type=_as_record_type(data.get("type")),
            category=str(data.get("category") or ""),
            amount=float(data.get("amount") or 0.0),
            project_id=str(data.get("projectId", data.get("project_id")) or ""),
            cost_type=_as_cost_type(data.get("costType", data.get("cost_type"))),
            description=str(data.get("description") or ""),
            user_id=str(data.get("userId", data.get("user_id")) or ""),
        )

    def to_mapping(self) -> dict[str, Any]:
        raw_date = self.date.isoformat() if isinstance(self.date, (date, datetime)) else self.date
        return {
            "id": self.id,
            "date": raw_date,
            "type": self.type.value if hasattr(self.type, "value") else str(self.type),
            "category": self.category,
            "amount": float(self.amount),
            "projectId": self.project_id,
            "costType": None if self.cost_type is None else self.cost_type.value,
            "description": self.description,
            "userId": self.user_id,
        }


__all__ = ["FinancialRecord", "RecordDate"]

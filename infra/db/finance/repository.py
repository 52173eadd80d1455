from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.interfaces import FinancialRecordRepository
from core.models import FinancialRecord
from infra.db.finance.mapper import record_from_orm, record_to_orm, record_values
from infra.db.models import FinancialRecordORM


class SqlAlchemyFinancialRecordRepository(FinancialRecordRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, record: FinancialRecord) -> None:
        self.session.add(record_to_orm(record))

    def update(self, record: FinancialRecord) -> None:
        result = self.session.execute(
            update(FinancialRecordORM)
            .where(FinancialRecordORM.id == record.id)
            .values(**record_values(record))
        )
        if result.rowcount == 0:
            raise NotFoundError("Financial record not found.", code="RECORD_NOT_FOUND")

    def delete(self, record_id: str) -> None:
        self.session.query(FinancialRecordORM).filter_by(id=record_id).delete()

    def get(self, record_id: str) -> Optional[FinancialRecord]:
        obj = self.session.get(FinancialRecordORM, record_id)
        return record_from_orm(obj) if obj else None

    def list_all(self) -> List[FinancialRecord]:
        stmt = select(FinancialRecordORM).order_by(FinancialRecordORM.occurred_on, FinancialRecordORM.id)
        rows = self.session.execute(stmt).scalars().all()
        return [record_from_orm(row) for row in rows]

    def list_by_project(self, project_id: str) -> List[FinancialRecord]:
        stmt = (
            select(FinancialRecordORM)
            .where(FinancialRecordORM.project_id == project_id)
            .order_by(FinancialRecordORM.occurred_on, FinancialRecordORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [record_from_orm(row) for row in rows]

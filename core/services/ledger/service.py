# core/services/ledger/service.py
from __future__ import annotations

import logging
from typing import Any, List

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError
from core.interfaces import FinancialRecordRepository, ProjectRepository
from core.models import CostType, FinancialRecord, RecordDate, RecordType
from core.services.finance.validation import apply_record_update, validate_new_record

logger = logging.getLogger(__name__)


class LedgerService:
    """Create, change and remove financial records."""

    def __init__(
        self,
        session: Session,
        record_repo: FinancialRecordRepository,
        project_repo: ProjectRepository,
    ):
        self._session: Session = session
        self._record_repo: FinancialRecordRepository = record_repo
        self._project_repo: ProjectRepository = project_repo

    def add_record(
        self,
        project_id: str,
        date: RecordDate,
        type: RecordType | str,
        category: str,
        amount: float,
        description: str,
        cost_type: CostType | str | None = None,
        user_id: str = "",
    ) -> FinancialRecord:
        fields = validate_new_record(
            date=date,
            type=type,
            category=category,
            amount=amount,
            project_id=project_id,
            description=description,
            cost_type=cost_type,
        )
        project_id = fields["project_id"]
        if not self._project_repo.get(project_id):
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

        record = FinancialRecord.create(**fields, user_id=user_id)

        try:
            self._record_repo.add(record)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            raise e

        logger.info("Recorded %s of %.2f on project %s", record.type.value, record.amount, project_id)
        domain_events.records_changed.emit(project_id)
        return record

    def update_record(self, record_id: str, **changes: Any) -> FinancialRecord:
        record = self._record_repo.get(record_id)
        if not record:
            raise NotFoundError("Financial record not found.", code="RECORD_NOT_FOUND")

        updated = apply_record_update(record, **changes)
        if updated.project_id != record.project_id and not self._project_repo.get(updated.project_id):
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

        try:
            self._record_repo.update(updated)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            raise e

        domain_events.records_changed.emit(updated.project_id)
        if updated.project_id != record.project_id:
            domain_events.records_changed.emit(record.project_id)
        return updated

    def delete_record(self, record_id: str) -> None:
        record = self._record_repo.get(record_id)
        if not record:
            raise NotFoundError("Financial record not found.", code="RECORD_NOT_FOUND")
        try:
            self._record_repo.delete(record_id)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            raise e

        logger.info("Deleted financial record %s", record_id)
        domain_events.records_changed.emit(record.project_id)

    def list_records(self, project_id: str | None = None) -> List[FinancialRecord]:
        if project_id:
            return self._record_repo.list_by_project(project_id)
        return self._record_repo.list_all()


__all__ = ["LedgerService"]

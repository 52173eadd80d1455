from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from core.interfaces import PreferencesStore
from core.services.finance import FinanceService
from core.services.ledger import LedgerService
from core.services.project import ProjectService
from infra.db.repositories import (
    SqlAlchemyFinancialRecordRepository,
    SqlAlchemyProjectRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    project_service: ProjectService
    ledger_service: LedgerService
    finance_service: FinanceService
    preferences: PreferencesStore | None = None
    engine: Engine | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "project_service": self.project_service,
            "ledger_service": self.ledger_service,
            "finance_service": self.finance_service,
            "preferences": self.preferences,
        }

    def close(self) -> None:
        """Close the session; dispose the engine when the graph owns one."""
        self.session.close()
        if self.engine is not None:
            self.engine.dispose()


def build_service_graph(
    session: Session,
    *,
    preferences: PreferencesStore | None = None,
    engine: Engine | None = None,
) -> ServiceGraph:
    project_repo = SqlAlchemyProjectRepository(session)
    record_repo = SqlAlchemyFinancialRecordRepository(session)

    project_service = ProjectService(session, project_repo)
    ledger_service = LedgerService(session, record_repo, project_repo)
    finance_service = FinanceService(record_repo=record_repo, project_repo=project_repo)

    return ServiceGraph(
        session=session,
        project_service=project_service,
        ledger_service=ledger_service,
        finance_service=finance_service,
        preferences=preferences,
        engine=engine,
    )


def build_service_dict(session: Session, **kwargs: Any) -> dict[str, Any]:
    return build_service_graph(session, **kwargs).as_dict()

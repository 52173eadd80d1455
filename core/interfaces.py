# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from core.models import FinancialRecord, Project


class FinancialRecordRepository(ABC):
    @abstractmethod
    def add(self, record: FinancialRecord) -> None: ...

    @abstractmethod
    def update(self, record: FinancialRecord) -> None: ...

    @abstractmethod
    def delete(self, record_id: str) -> None: ...

    @abstractmethod
    def get(self, record_id: str) -> Optional[FinancialRecord]: ...

    @abstractmethod
    def list_all(self) -> List[FinancialRecord]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[FinancialRecord]: ...


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...

    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...

    @abstractmethod
    def list_all(self) -> List[Project]: ...


@dataclass(frozen=True)
class FinanceViewState:
    """Persisted selection of the finance views (period, window, filters)."""

    period_type: str = "monthly"
    months_back: int = 12
    selected_year: Optional[int] = None
    selected_quarter: Optional[int] = None
    project_id: Optional[str] = None


class PreferencesStore(ABC):
    @abstractmethod
    def load(self) -> FinanceViewState: ...

    @abstractmethod
    def save(self, state: FinanceViewState) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...


__all__ = [
    "FinancialRecordRepository",
    "ProjectRepository",
    "FinanceViewState",
    "PreferencesStore",
]

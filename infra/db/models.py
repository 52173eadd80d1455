# infra/db/models.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import (
    String,
    Float,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    client_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    budget: Mapped[Optional[float]] = mapped_column(Float, nullable=True)


class FinancialRecordORM(Base):
    __tablename__ = "financial_records"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    # raw ISO text as entered; parsed by the finance engine
    occurred_on: Mapped[str] = mapped_column(String(40), nullable=False)
    record_type: Mapped[str] = mapped_column(String(16), nullable=False)  # income, expense, investment
    category: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    cost_type: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)  # fixed, variable or NULL
    description: Mapped[str] = mapped_column(String, default="")
    user_id: Mapped[str] = mapped_column(String, default="")

Index("idx_records_project", FinancialRecordORM.project_id)
Index("idx_records_occurred_on", FinancialRecordORM.occurred_on)
Index("idx_records_type", FinancialRecordORM.record_type)

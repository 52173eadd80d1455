# infra/app.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator

from core.interfaces import FinanceViewState, PreferencesStore
from core.reporting import api as reporting_api
from core.services.finance.helpers import normalize_period_type
from infra.db.base import build_engine, build_session_factory
from infra.operational_support import bind_trace_id
from infra.path import default_reports_dir
from infra.services import ServiceGraph, build_service_graph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinanceReportBundle:
    trace_id: str
    workbook: Path
    pdf: Path
    expenses_csv: Path
    expenses_json: Path


def build_services(
    db_url: str | None = None,
    *,
    preferences: PreferencesStore | None = None,
) -> ServiceGraph:
    """Open the ledger database (creating the schema if needed) and wire the services.

    The caller owns the graph and must ``close()`` it; ``service_scope`` does that.
    """
    engine = build_engine(db_url)
    session = build_session_factory(engine)()
    return build_service_graph(session, preferences=preferences, engine=engine)


@contextmanager
def service_scope(
    db_url: str | None = None,
    *,
    preferences: PreferencesStore | None = None,
) -> Iterator[ServiceGraph]:
    graph = build_services(db_url, preferences=preferences)
    try:
        yield graph
    finally:
        graph.close()


def resolve_view_state(graph: ServiceGraph, state: FinanceViewState | None = None) -> FinanceViewState:
    if state is not None:
        return state
    if graph.preferences is not None:
        return graph.preferences.load()
    return FinanceViewState()


def export_finance_reports(
    graph: ServiceGraph,
    output_dir: Path | None = None,
    *,
    state: FinanceViewState | None = None,
    now: datetime | None = None,
    trace_id: str | None = None,
) -> FinanceReportBundle:
    """Write the workbook, PDF and expense exports for one finance view."""
    view = resolve_view_state(graph, state)
    output_dir = output_dir or default_reports_dir()
    finance = graph.finance_service
    kind = normalize_period_type(view.period_type)
    stem = f"finance_{kind.value}_{view.project_id or 'all'}"

    with bind_trace_id(trace_id, operation="export") as active_trace:
        logger.info("Exporting %s finance reports to %s", kind.value, output_dir)
        workbook = reporting_api.generate_finance_excel_report(
            finance,
            output_dir / f"{stem}.xlsx",
            kind,
            view.months_back,
            now=now,
            project_id=view.project_id,
        )
        pdf = reporting_api.generate_finance_pdf_report(
            finance,
            output_dir / f"{stem}.pdf",
            kind,
            view.months_back,
            now=now,
            project_id=view.project_id,
            temp_dir=output_dir / "tmp_reports",
        )
        expenses_csv = reporting_api.export_expenses_csv(
            finance,
            output_dir / f"{stem}_expenses.csv",
            project_id=view.project_id,
        )
        expenses_json = reporting_api.export_expenses_json(
            finance,
            output_dir / f"{stem}_expenses.json",
            project_id=view.project_id,
            exported_at=now,
        )
        logger.info("Finance reports exported")

    return FinanceReportBundle(
        trace_id=active_trace,
        workbook=workbook,
        pdf=pdf,
        expenses_csv=expenses_csv,
        expenses_json=expenses_json,
    )


__all__ = [
    "FinanceReportBundle",
    "build_services",
    "export_finance_reports",
    "resolve_view_state",
    "service_scope",
]

"""Reporting API wrappers around renderer classes."""

import logging
from contextlib import suppress
from datetime import date, datetime
from pathlib import Path

from core.models import PeriodType
from core.reporting.contexts import (
    ExpenseExportContext,
    FinancePdfContext,
    FinanceReportContext,
)
from core.reporting.exporters import write_expenses_csv, write_expenses_json
from core.reporting.renderers.chart import PeriodChartRenderer
from core.reporting.renderers.excel import FinanceExcelRenderer
from core.reporting.renderers.pdf import FinancePdfRenderer
from core.services.finance import FinanceService
from core.services.finance.periods import DEFAULT_MONTHS_BACK

logger = logging.getLogger(__name__)


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _cleanup_temp_artifact(path: Path | None, temp_dir: Path | None = None) -> None:
    if path:
        with suppress(FileNotFoundError, PermissionError, OSError):
            path.unlink()

    parent = temp_dir if temp_dir is not None else (path.parent if path else None)
    if parent is None:
        return
    if parent.exists():
        with suppress(FileNotFoundError, PermissionError, OSError):
            if not any(parent.iterdir()):
                parent.rmdir()


def _report_title(finance_service: FinanceService, project_id: str | None) -> str:
    if not project_id:
        return "All projects"
    return finance_service.get_project_financials(project_id).project_name


def generate_period_chart_png(
    finance_service: FinanceService,
    output_path: str | Path,
    period_type: PeriodType | str = PeriodType.MONTHLY,
    months_back: int = DEFAULT_MONTHS_BACK,
    *,
    now: datetime | None = None,
    project_id: str | None = None,
) -> Path:
    periods = finance_service.get_period_summary(period_type, months_back, now=now, project_id=project_id)
    return PeriodChartRenderer().render(periods, _ensure_parent(Path(output_path)))


def generate_finance_excel_report(
    finance_service: FinanceService,
    output_path: str | Path,
    period_type: PeriodType | str = PeriodType.MONTHLY,
    months_back: int = DEFAULT_MONTHS_BACK,
    *,
    now: datetime | None = None,
    project_id: str | None = None,
) -> Path:
    snapshot = finance_service.get_finance_snapshot(period_type, months_back, now=now, project_id=project_id)
    ctx = FinanceReportContext(
        title=_report_title(finance_service, project_id),
        snapshot=snapshot,
        as_of=snapshot.generated_at.date(),
    )
    path = FinanceExcelRenderer().render(ctx, _ensure_parent(Path(output_path)))
    logger.info("Finance workbook written to %s", path)
    return path


def generate_finance_pdf_report(
    finance_service: FinanceService,
    output_path: str | Path,
    period_type: PeriodType | str = PeriodType.MONTHLY,
    months_back: int = DEFAULT_MONTHS_BACK,
    *,
    now: datetime | None = None,
    project_id: str | None = None,
    temp_dir: str | Path = "tmp_reports",
) -> Path:
    snapshot = finance_service.get_finance_snapshot(period_type, months_back, now=now, project_id=project_id)
    temp_dir = Path(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    chart_path: Path | None = temp_dir / f"finance_{project_id or 'all'}.png"
    try:
        PeriodChartRenderer().render(snapshot.periods, chart_path)
    except ValueError:
        chart_path = None

    ctx = FinancePdfContext(
        title=_report_title(finance_service, project_id),
        snapshot=snapshot,
        as_of=snapshot.generated_at.date(),
        chart_png_path=str(chart_path) if chart_path else "",
    )
    try:
        path = FinancePdfRenderer().render(ctx, _ensure_parent(Path(output_path)))
    finally:
        _cleanup_temp_artifact(chart_path, temp_dir=temp_dir)
    logger.info("Finance PDF written to %s", path)
    return path


def _expense_context(
    finance_service: FinanceService,
    project_id: str | None,
    start: date | None,
    end: date | None,
) -> ExpenseExportContext:
    records = finance_service.list_expense_records(project_id=project_id, start=start, end=end)
    return ExpenseExportContext(records=records, start=start, end=end)


def export_expenses_csv(
    finance_service: FinanceService,
    output_path: str | Path,
    *,
    project_id: str | None = None,
    start: date | None = None,
    end: date | None = None,
) -> Path:
    ctx = _expense_context(finance_service, project_id, start, end)
    return write_expenses_csv(ctx, _ensure_parent(Path(output_path)))


def export_expenses_json(
    finance_service: FinanceService,
    output_path: str | Path,
    *,
    project_id: str | None = None,
    start: date | None = None,
    end: date | None = None,
    exported_at: datetime | None = None,
) -> Path:
    ctx = _expense_context(finance_service, project_id, start, end)
    return write_expenses_json(ctx, _ensure_parent(Path(output_path)), exported_at=exported_at)

from __future__ import annotations

import logging
from datetime import date, datetime

from core.exceptions import NotFoundError, ValidationError
from core.interfaces import FinancialRecordRepository, ProjectRepository
from core.models import FinancialRecord, PeriodType, RecordType
from core.services.finance.aggregation import aggregate_financial_data
from core.services.finance.analytics import (
    build_category_breakdown,
    build_cost_type_breakdown,
    total_expenses,
)
from core.services.finance.consistency import validate_period_consistency
from core.services.finance.helpers import normalize_period_type, resolve_now, to_timestamp
from core.services.finance.metrics import (
    calculate_burn_rate,
    calculate_cac,
    calculate_cash_runway,
    calculate_churn_rate,
    calculate_ltv,
)
from core.services.finance.models import (
    CategoryBreakdownRow,
    CostTypeShare,
    FinanceSnapshot,
    FinancialMetrics,
    FinancialPeriod,
    PeriodFilterState,
    PeriodRange,
    PeriodSummaryRow,
    ProjectFinancial,
    TrendPoint,
)
from core.services.finance.period_filter import summarize_periods
from core.services.finance.periods import DEFAULT_MONTHS_BACK, get_period_ranges
from core.services.finance.profitability import (
    calculate_portfolio_financials,
    calculate_project_financials,
)
from core.services.finance.trends import build_trend_series

logger = logging.getLogger(__name__)


class FinanceService:
    """Finance read models over the record ledger."""

    def __init__(
        self,
        *,
        record_repo: FinancialRecordRepository,
        project_repo: ProjectRepository | None = None,
    ) -> None:
        self._record_repo: FinancialRecordRepository = record_repo
        self._project_repo: ProjectRepository | None = project_repo

    def list_records(self, project_id: str | None = None) -> list[FinancialRecord]:
        if project_id:
            return self._record_repo.list_by_project(project_id)
        return self._record_repo.list_all()

    def get_period_ranges(
        self,
        period_type: PeriodType | str = PeriodType.MONTHLY,
        months_back: int = DEFAULT_MONTHS_BACK,
        *,
        now: datetime | None = None,
    ) -> list[PeriodRange]:
        return get_period_ranges(period_type, months_back, now=now)

    def get_period_summary(
        self,
        period_type: PeriodType | str = PeriodType.MONTHLY,
        months_back: int = DEFAULT_MONTHS_BACK,
        *,
        now: datetime | None = None,
        project_id: str | None = None,
    ) -> list[FinancialPeriod]:
        records = self.list_records(project_id)
        periods = aggregate_financial_data(records, period_type, months_back, now=now)
        logger.debug(
            "Aggregated %d records into %d %s periods",
            len(records),
            len(periods),
            normalize_period_type(period_type).value,
        )
        return periods

    def check_period_consistency(
        self,
        months_back: int = DEFAULT_MONTHS_BACK,
        *,
        now: datetime | None = None,
        project_id: str | None = None,
    ) -> bool:
        now = resolve_now(now)
        records = self.list_records(project_id)
        monthly = aggregate_financial_data(records, PeriodType.MONTHLY, months_back, now=now)
        quarterly = aggregate_financial_data(records, PeriodType.QUARTERLY, months_back, now=now)
        return validate_period_consistency(records, monthly, quarterly)

    def _project_name(self, project_id: str) -> str | None:
        if self._project_repo is None:
            return None
        project = self._project_repo.get(project_id)
        if project is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project.name

    def _project_names(self) -> dict[str, str]:
        if self._project_repo is None:
            return {}
        return {project.id: project.name for project in self._project_repo.list_all()}

    def get_project_financials(self, project_id: str) -> ProjectFinancial:
        name = self._project_name(project_id)
        report = calculate_project_financials(
            self._record_repo.list_by_project(project_id),
            project_id,
            project_name=name,
        )
        if report.unclassified_costs > 0:
            logger.info(
                "Project %s has %.2f of expenses without a cost type; excluded from profit.",
                project_id,
                report.unclassified_costs,
            )
        return report

    def get_portfolio_financials(self) -> list[ProjectFinancial]:
        return calculate_portfolio_financials(self._record_repo.list_all(), self._project_names())

    def _records_between(
        self,
        project_id: str | None,
        start: date | None,
        end: date | None,
    ) -> list[FinancialRecord]:
        if start and end and start > end:
            raise ValidationError("Start date must be on or before end date.", code="INVALID_DATE_RANGE")
        kept: list[FinancialRecord] = []
        for record in self.list_records(project_id):
            moment = to_timestamp(record.date)
            if moment is None:
                continue
            day = moment.date()
            if start and day < start:
                continue
            if end and day > end:
                continue
            kept.append(record)
        return kept

    def get_cost_breakdown(
        self,
        *,
        project_id: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> dict[str, list]:
        records = self._records_between(project_id, start, end)
        return {
            "category": build_category_breakdown(records),
            "cost_type": build_cost_type_breakdown(records),
        }

    def list_expense_records(
        self,
        *,
        project_id: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[FinancialRecord]:
        return [
            record
            for record in self._records_between(project_id, start, end)
            if record.type == RecordType.EXPENSE
        ]

    def get_trend_analysis(
        self,
        period_type: PeriodType | str = PeriodType.MONTHLY,
        months_back: int = DEFAULT_MONTHS_BACK,
        *,
        now: datetime | None = None,
        forecast_periods: int = 3,
        project_id: str | None = None,
    ) -> list[TrendPoint]:
        periods = self.get_period_summary(period_type, months_back, now=now, project_id=project_id)
        return build_trend_series(periods, forecast_periods=forecast_periods)

    def get_financial_metrics(
        self,
        *,
        cash_balance: float,
        marketing_spend: float = 0.0,
        new_customers: int = 0,
        average_revenue_per_customer: float = 0.0,
        retention_rate: float = 0.0,
        lost_customers: int = 0,
        starting_customers: int = 0,
        months_back: int = DEFAULT_MONTHS_BACK,
        now: datetime | None = None,
    ) -> FinancialMetrics:
        monthly = self.get_period_summary(PeriodType.MONTHLY, months_back, now=now)
        burn_rate = calculate_burn_rate(sum((p.expense for p in monthly), 0.0), len(monthly))
        return FinancialMetrics(
            cac=calculate_cac(marketing_spend, new_customers),
            ltv=calculate_ltv(average_revenue_per_customer, retention_rate),
            cash_runway=calculate_cash_runway(cash_balance, burn_rate),
            burn_rate=burn_rate,
            churn_rate=calculate_churn_rate(lost_customers, starting_customers),
        )

    def get_period_filter_summary(
        self,
        state: PeriodFilterState,
        *,
        project_id: str | None = None,
    ) -> list[PeriodSummaryRow]:
        return summarize_periods(self.list_records(project_id), state)

    def get_finance_snapshot(
        self,
        period_type: PeriodType | str = PeriodType.MONTHLY,
        months_back: int = DEFAULT_MONTHS_BACK,
        *,
        now: datetime | None = None,
        project_id: str | None = None,
    ) -> FinanceSnapshot:
        kind = normalize_period_type(period_type)
        now = resolve_now(now)
        records = self.list_records(project_id)

        periods = aggregate_financial_data(records, kind, months_back, now=now)
        monthly = aggregate_financial_data(records, PeriodType.MONTHLY, months_back, now=now)
        quarterly = aggregate_financial_data(records, PeriodType.QUARTERLY, months_back, now=now)
        consistent = validate_period_consistency(records, monthly, quarterly)

        if project_id:
            projects = [self.get_project_financials(project_id)]
        else:
            projects = calculate_portfolio_financials(records, self._project_names())

        by_category: list[CategoryBreakdownRow] = build_category_breakdown(records)
        by_cost_type: list[CostTypeShare] = build_cost_type_breakdown(records)

        notes = [
            f"Periods cover the last {months_back} month(s) up to {now.date().isoformat()}.",
            "Profit excludes expenses without a fixed/variable cost type; they are listed separately.",
        ]
        if not consistent:
            notes.append("Quarterly totals do not match the sum of their months.")
        if total_expenses(records) == 0:
            notes.append("No expense records in scope.")

        return FinanceSnapshot(
            period_type=kind,
            months_back=months_back,
            generated_at=now,
            periods=periods,
            projects=projects,
            by_category=by_category,
            by_cost_type=by_cost_type,
            consistent=consistent,
            notes=notes,
        )


__all__ = ["FinanceService"]

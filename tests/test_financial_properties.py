"""
Property-based checks for the finance engine.

Verifies:
- profit identity on periods and project reports
- monthly/quarterly consistency for any record set and any "now"
- deterministic aggregation and idempotent view switching
- cost segregation and full accounting of expenses
"""
from __future__ import annotations

from datetime import datetime, timezone

from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from core.models import CostType, FinancialRecord, PeriodType, RecordType
from core.services.finance.aggregation import aggregate_financial_data
from core.services.finance.analytics import build_cost_type_breakdown, total_expenses
from core.services.finance.consistency import validate_period_consistency
from core.services.finance.helpers import is_effectively_equal
from core.services.finance.period_filter import (
    default_filter_state,
    select_period,
    summarize_periods,
    summarize_totals,
)
from core.services.finance.profitability import calculate_project_financials
from core.services.finance.trends import forecast_linear_trend

NOW = datetime(2024, 12, 15, 12, 0, tzinfo=timezone.utc)
PROJECTS = ("p-1", "p-2")


@composite
def amounts(draw):
    return round(draw(st.floats(min_value=0, max_value=1_000_000, allow_nan=False, allow_infinity=False)), 2)


@composite
def record_dates(draw):
    moment = draw(
        st.datetimes(
            min_value=datetime(2022, 6, 1),
            max_value=datetime(2025, 6, 30),
            timezones=st.just(timezone.utc),
        )
    )
    if draw(st.booleans()):
        return moment.date().isoformat()
    return moment.isoformat()


@composite
def financial_records(draw, *, cost_types=(None, CostType.FIXED, CostType.VARIABLE)):
    rows = []
    for i in range(draw(st.integers(min_value=0, max_value=30))):
        record_type = draw(st.sampled_from(list(RecordType)))
        cost_type = draw(st.sampled_from(cost_types)) if record_type == RecordType.EXPENSE else None
        rows.append(
            FinancialRecord(
                id=f"r-{i}",
                date=draw(record_dates()),
                type=record_type,
                category=draw(st.sampled_from(["Payroll", "Hosting", "Sales", "Travel"])),
                amount=draw(amounts()),
                project_id=draw(st.sampled_from(PROJECTS)),
                cost_type=cost_type,
                description="generated",
                user_id="u-1",
            )
        )
    return rows


@given(records=financial_records(), kind=st.sampled_from(list(PeriodType)))
@settings(max_examples=100, deadline=None)
def test_profit_identity_holds_for_periods(records, kind):
    for period in aggregate_financial_data(records, kind, 12, now=NOW):
        assert is_effectively_equal(period.profit, period.income - period.expense)


@given(records=financial_records())
@settings(max_examples=100, deadline=None)
def test_profit_identity_holds_for_projects(records):
    for project_id in PROJECTS:
        report = calculate_project_financials(records, project_id)
        assert is_effectively_equal(report.profit, report.income - report.total_costs)


@given(
    records=financial_records(),
    now=st.datetimes(
        min_value=datetime(2023, 1, 1),
        max_value=datetime(2025, 12, 31),
        timezones=st.just(timezone.utc),
    ),
    months_back=st.integers(min_value=1, max_value=36),
)
@settings(max_examples=100, deadline=None)
def test_monthly_and_quarterly_views_agree(records, now, months_back):
    monthly = aggregate_financial_data(records, PeriodType.MONTHLY, months_back, now=now)
    quarterly = aggregate_financial_data(records, PeriodType.QUARTERLY, months_back, now=now)
    assert validate_period_consistency(records, monthly, quarterly)


@given(records=financial_records())
@settings(max_examples=50, deadline=None)
def test_view_switching_is_idempotent(records):
    first = aggregate_financial_data(records, PeriodType.MONTHLY, 12, now=NOW)
    aggregate_financial_data(records, PeriodType.QUARTERLY, 12, now=NOW)
    again = aggregate_financial_data(records, PeriodType.MONTHLY, 12, now=NOW)
    assert first == again


@given(records=financial_records(cost_types=(CostType.FIXED, CostType.VARIABLE)))
@settings(max_examples=100, deadline=None)
def test_classified_costs_add_up_to_total_expense(records):
    for project_id in PROJECTS:
        report = calculate_project_financials(records, project_id)
        expenses = sum(
            r.amount for r in records if r.project_id == project_id and r.type == RecordType.EXPENSE
        )
        assert report.unclassified_costs == 0.0
        assert is_effectively_equal(report.fixed_costs + report.variable_costs, expenses)


@given(records=financial_records())
@settings(max_examples=100, deadline=None)
def test_every_expense_is_accounted_for(records):
    for project_id in PROJECTS:
        report = calculate_project_financials(records, project_id)
        expenses = sum(
            r.amount for r in records if r.project_id == project_id and r.type == RecordType.EXPENSE
        )
        assert is_effectively_equal(
            report.fixed_costs + report.variable_costs + report.unclassified_costs,
            expenses,
        )

    shares = build_cost_type_breakdown(records)
    assert is_effectively_equal(sum(s.amount for s in shares), total_expenses(records))


@given(values=st.lists(st.floats(min_value=-1e6, max_value=1e6, allow_nan=False), max_size=24))
def test_forecasts_are_never_negative(values):
    assert all(v >= 0 for v in forecast_linear_trend(values, 4))


@given(records=financial_records(), kind=st.sampled_from(list(PeriodType)))
@settings(max_examples=50, deadline=None)
def test_period_filter_totals_match_rows(records, kind):
    state = select_period(default_filter_state(records, today=NOW.date()), period_type=kind)
    rows = summarize_periods(records, state)
    totals = summarize_totals(rows)
    assert is_effectively_equal(totals.income, sum(r.income for r in rows))
    assert is_effectively_equal(totals.expenses, sum(r.expenses for r in rows))

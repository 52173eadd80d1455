from __future__ import annotations

from datetime import date

import pytest

from core.exceptions import ValidationError
from core.models import PeriodType
from core.services.finance.models import PeriodFilterState
from core.services.finance.period_filter import (
    available_years,
    default_filter_state,
    filter_records,
    select_period,
    summarize_periods,
    summarize_totals,
)


@pytest.fixture
def records(make_record):
    return [
        make_record("2023-11-03", "income", 50),
        make_record("2024-01-10", "income", 1000),
        make_record("2024-01-20", "expense", 400, cost_type="fixed"),
        make_record("2024-02-02", "investment", 300),
        make_record("2024-05-05", "income", 700),
        make_record("garbage", "income", 1),
    ]


def test_available_years_newest_first(records):
    assert available_years(records) == [2024, 2023]


def test_default_state_picks_latest_year(records):
    state = default_filter_state(records)
    assert state == PeriodFilterState(period_type=PeriodType.MONTHLY, selected_year=2024)
    assert default_filter_state([], today=date(2030, 6, 1)).selected_year == 2030


def test_monthly_summary(records):
    rows = summarize_periods(records, PeriodFilterState(selected_year=2024))
    assert [r.period for r in rows] == ["Jan 2024", "Feb 2024", "May 2024"]
    assert (rows[0].income, rows[0].expenses, rows[0].profit) == (1000.0, 400.0, 600.0)
    # investments are listed with expenses in this view
    assert rows[1].expenses == 300.0


def test_quarterly_summary_and_quarter_selection(records):
    state = select_period(PeriodFilterState(selected_year=2024), period_type="quarterly")
    rows = summarize_periods(records, state)
    assert [r.period for r in rows] == ["Q1 2024", "Q2 2024"]

    q2 = select_period(state, quarter=2)
    assert [r.amount for r in filter_records(records, q2)] == [700.0]
    assert [r.period for r in summarize_periods(records, q2)] == ["Q2 2024"]


def test_annual_summary_and_totals(records):
    state = PeriodFilterState(period_type=PeriodType.ANNUAL, selected_year=2024)
    rows = summarize_periods(records, state)
    assert [r.period for r in rows] == ["2024"]

    totals = summarize_totals(rows)
    assert totals.period == "Total"
    assert (totals.income, totals.expenses) == (1700.0, 700.0)


def test_invalid_quarter_is_rejected():
    with pytest.raises(ValidationError) as exc:
        select_period(PeriodFilterState(selected_year=2024), quarter=5)
    assert exc.value.code == "INVALID_QUARTER"

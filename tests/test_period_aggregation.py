from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from core.models import PeriodType
from core.services.finance.aggregation import aggregate_financial_data


def _by_label(periods):
    return {p.label: p for p in periods}


def test_boundary_scenario_monthly_and_quarterly(now, make_record):
    records = [
        make_record("2024-01-15", "income", 5000),
        make_record("2024-02-10", "expense", 2000),
        make_record("2024-04-20", "income", 6000),
    ]

    monthly = _by_label(aggregate_financial_data(records, PeriodType.MONTHLY, 12, now=now))
    assert (monthly["Jan 24"].income, monthly["Jan 24"].expense) == (5000.0, 0.0)
    assert (monthly["Feb 24"].income, monthly["Feb 24"].expense) == (0.0, 2000.0)
    assert monthly["Apr 24"].income == 6000.0
    assert sum(p.income for p in monthly.values()) == 11000.0

    quarterly = _by_label(aggregate_financial_data(records, PeriodType.QUARTERLY, 12, now=now))
    q1 = quarterly["Q1 2024"]
    assert (q1.income, q1.expense, q1.profit) == (5000.0, 2000.0, 3000.0)
    assert quarterly["Q2 2024"].income == 6000.0


def test_empty_records_still_produce_every_period(now):
    for kind, expected in ((PeriodType.MONTHLY, 12), (PeriodType.QUARTERLY, 4), (PeriodType.ANNUAL, 1)):
        periods = aggregate_financial_data([], kind, 12, now=now)
        assert len(periods) == expected
        assert all(p.income == 0 and p.expense == 0 and p.profit == 0 for p in periods)
        assert all(p.type == kind for p in periods)


def test_boundary_instant_belongs_to_range_it_ends(now, make_record):
    end_of_january = datetime(2024, 1, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)
    records = [
        make_record(end_of_january, "income", 100),
        make_record(end_of_january + timedelta(microseconds=1), "income", 7),
    ]
    monthly = _by_label(aggregate_financial_data(records, "monthly", 12, now=now))
    assert monthly["Jan 24"].income == 100.0
    assert monthly["Feb 24"].income == 7.0


def test_records_outside_window_and_bad_dates_are_excluded(now, make_record):
    records = [
        make_record("2023-12-31", "income", 999),
        make_record("2025-01-01", "income", 999),
        make_record("not-a-date", "expense", 999),
        make_record("", "expense", 999),
        make_record("2024-06-01", "income", 10),
    ]
    periods = aggregate_financial_data(records, PeriodType.MONTHLY, 12, now=now)
    assert sum(p.income for p in periods) == 10.0
    assert sum(p.expense for p in periods) == 0.0


def test_investments_count_as_neither_income_nor_expense(now, make_record):
    records = [
        make_record("2024-03-03", "investment", 50000),
        make_record("2024-03-04", "expense", 20),
    ]
    march = _by_label(aggregate_financial_data(records, PeriodType.MONTHLY, 12, now=now))["Mar 24"]
    assert (march.income, march.expense) == (0.0, 20.0)


def test_date_objects_and_offsets_are_supported(now, make_record):
    records = [
        make_record(date(2024, 5, 5), "income", 1),
        make_record(datetime(2024, 5, 6, 9, 30), "income", 2),
        # 04:30 UTC on the 1st of February
        make_record("2024-01-31T23:30:00-05:00", "income", 4),
        make_record("2024-07-01T00:00:00Z", "expense", 8),
    ]
    monthly = _by_label(aggregate_financial_data(records, PeriodType.MONTHLY, 12, now=now))
    assert monthly["May 24"].income == 3.0
    assert monthly["Jan 24"].income == 0.0
    assert monthly["Feb 24"].income == 4.0
    assert monthly["Jul 24"].expense == 8.0


def test_periods_serialize_with_iso_bounds(now, make_record):
    period = aggregate_financial_data([make_record("2024-12-01", "income", 3)], "monthly", 1, now=now)[0]
    data = period.to_dict()
    assert data["label"] == "Dec 24"
    assert data["startDate"] == "2024-12-01T00:00:00+00:00"
    assert data["endDate"] == "2024-12-31T23:59:59.999999+00:00"
    assert data["profit"] == 3.0
    assert data["type"] == "monthly"


def test_aggregation_is_deterministic(now, make_record):
    records = [make_record("2024-0%d-1%d" % (m, m), "income" if m % 2 else "expense", m * 10.5) for m in range(1, 10)]
    first = aggregate_financial_data(records, PeriodType.QUARTERLY, 12, now=now)
    second = aggregate_financial_data(list(records), PeriodType.QUARTERLY, 12, now=now)
    assert first == second

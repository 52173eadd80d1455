from __future__ import annotations

import pytest

from core.models import CostType
from core.services.finance.analytics import (
    UNCLASSIFIED,
    build_category_breakdown,
    build_cost_type_breakdown,
    filter_category_breakdown,
    total_expenses,
)


@pytest.fixture
def expenses(make_record):
    return [
        make_record("2024-01-01", "expense", 600, category="Payroll", cost_type="fixed"),
        make_record("2024-01-05", "expense", 200, category="Hosting", cost_type="variable"),
        make_record("2024-02-05", "expense", 100, category="Hosting", cost_type="variable"),
        make_record("2024-02-07", "expense", 100, category="Misc"),
        make_record("2024-02-08", "income", 5000, category="Sales"),
    ]


def test_category_breakdown_sorted_by_amount(expenses):
    rows = build_category_breakdown(expenses)

    assert [r.category for r in rows] == ["Payroll", "Hosting", "Misc"]
    assert rows[0].amount == 600.0 and rows[0].percentage == pytest.approx(60.0)
    assert rows[1].amount == 300.0 and rows[1].cost_type == CostType.VARIABLE
    assert rows[2].cost_type is None
    assert sum(r.percentage for r in rows) == pytest.approx(100.0)


def test_cost_type_shares_include_unclassified(expenses):
    shares = {s.label: s for s in build_cost_type_breakdown(expenses)}

    assert shares["Fixed Costs"].amount == 600.0
    assert shares["Variable Costs"].amount == 300.0
    assert shares["Unclassified Costs"].amount == 100.0
    assert shares["Unclassified Costs"].cost_type is None
    assert sum(s.amount for s in shares.values()) == total_expenses(expenses) == 1000.0


def test_no_expenses_give_zero_percentages(make_record):
    records = [make_record("2024-01-01", "income", 10)]
    assert build_category_breakdown(records) == []
    assert all(s.amount == 0 and s.percentage == 0 for s in build_cost_type_breakdown(records))


def test_filter_by_cost_type_and_category(expenses):
    rows = build_category_breakdown(expenses)

    assert [r.category for r in filter_category_breakdown(rows, cost_type="fixed")] == ["Payroll"]
    assert [r.category for r in filter_category_breakdown(rows, cost_type=CostType.VARIABLE)] == ["Hosting"]
    assert [r.category for r in filter_category_breakdown(rows, cost_type=UNCLASSIFIED)] == ["Misc"]
    assert [r.category for r in filter_category_breakdown(rows, category="Hosting")] == ["Hosting"]
    assert filter_category_breakdown(rows, cost_type="fixed", category="Hosting") == []
    assert filter_category_breakdown(rows) == rows

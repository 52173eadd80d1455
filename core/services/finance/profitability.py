from __future__ import annotations

from typing import Iterable, Mapping

from core.models import CostType, FinancialRecord, RecordType
from core.services.finance.models import ProjectFinancial


def default_project_name(project_id: str) -> str:
    return f"Project {project_id[:8]}"


def calculate_project_financials(
    records: Iterable[FinancialRecord],
    project_id: str,
    *,
    project_name: str | None = None,
) -> ProjectFinancial:
    income = 0.0
    fixed_costs = 0.0
    variable_costs = 0.0
    unclassified_costs = 0.0
    for record in records:
        if record.project_id != project_id:
            continue
        amount = float(record.amount)
        if record.type == RecordType.INCOME:
            income += amount
        elif record.type == RecordType.EXPENSE:
            if record.cost_type == CostType.FIXED:
                fixed_costs += amount
            elif record.cost_type == CostType.VARIABLE:
                variable_costs += amount
            else:
                # Kept out of the fixed/variable split and out of profit.
                unclassified_costs += amount

    return ProjectFinancial(
        project_id=project_id,
        project_name=project_name or default_project_name(project_id),
        income=income,
        fixed_costs=fixed_costs,
        variable_costs=variable_costs,
        unclassified_costs=unclassified_costs,
    )


def calculate_portfolio_financials(
    records: Iterable[FinancialRecord],
    project_names: Mapping[str, str] | None = None,
) -> list[ProjectFinancial]:
    records = list(records)
    names = project_names or {}
    project_ids = list(dict.fromkeys(record.project_id for record in records))
    rows = [
        calculate_project_financials(records, pid, project_name=names.get(pid))
        for pid in project_ids
    ]
    rows.sort(key=lambda row: (-row.profit, row.project_name.lower()))
    return rows


__all__ = [
    "calculate_project_financials",
    "calculate_portfolio_financials",
    "default_project_name",
]

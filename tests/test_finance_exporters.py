from __future__ import annotations

import csv
import json
from datetime import date, datetime, timezone

import pytest
from openpyxl import load_workbook

from core.reporting import api as reporting_api

NOW = datetime(2024, 12, 15, tzinfo=timezone.utc)


@pytest.fixture
def seeded(services):
    ps = services["project_service"]
    ls = services["ledger_service"]

    project = ps.create_project("Export Project")
    ls.add_record(project.id, "2024-01-15", "income", "Sales", 5000, "Milestone")
    ls.add_record(project.id, "2024-02-10", "expense", "Payroll", 600, "Team", cost_type="fixed")
    ls.add_record(project.id, "2024-03-01", "expense", "Hosting", 300, "Cloud", cost_type="variable")
    ls.add_record(project.id, "2024-03-02", "expense", "Misc", 100, "Receipt")
    return services["finance_service"], project.id


def test_excel_report_has_finance_sheets(seeded, tmp_path):
    finance_service, pid = seeded
    out = reporting_api.generate_finance_excel_report(
        finance_service, tmp_path / "reports" / "finance.xlsx", "monthly", 12, now=NOW
    )

    wb = load_workbook(out)
    assert wb.sheetnames == ["Finance", "Periods", "Projects", "Cost Breakdown"]
    assert wb["Finance"]["A1"].value == "Finance Summary"
    assert wb["Finance"]["A2"].value == "All projects"

    periods = wb["Periods"]
    assert periods["A1"].value == "Period"
    assert periods["A2"].value == "Jan 24"
    assert periods["D2"].value == 5000.0
    assert periods.max_row == 13

    projects = wb["Projects"]
    assert projects["B2"].value == "Export Project"
    assert projects["F2"].value == 100.0
    assert projects["G2"].value == 4100.0

    costs = wb["Cost Breakdown"]
    assert [costs.cell(row=r, column=1).value for r in range(2, 5)] == ["Payroll", "Hosting", "Misc"]
    assert costs["B4"].value == "unclassified"


def test_excel_report_for_one_project_uses_its_name(seeded, tmp_path):
    finance_service, pid = seeded
    out = reporting_api.generate_finance_excel_report(
        finance_service, tmp_path / "project.xlsx", "quarterly", 12, now=NOW, project_id=pid
    )
    wb = load_workbook(out)
    assert wb["Finance"]["A2"].value == "Export Project"
    assert wb["Periods"]["A2"].value == "Q1 2024"


def test_pdf_report_is_written_and_chart_is_cleaned_up(seeded, tmp_path):
    finance_service, _pid = seeded
    temp_dir = tmp_path / "tmp"
    out = reporting_api.generate_finance_pdf_report(
        finance_service, tmp_path / "finance.pdf", "quarterly", 12, now=NOW, temp_dir=temp_dir
    )

    assert out.read_bytes()[:4] == b"%PDF"
    assert not temp_dir.exists()


def test_period_chart_png(seeded, tmp_path):
    finance_service, _pid = seeded
    out = reporting_api.generate_period_chart_png(finance_service, tmp_path / "chart.png", now=NOW)
    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_expense_csv_export(seeded, tmp_path):
    finance_service, _pid = seeded
    out = reporting_api.export_expenses_csv(finance_service, tmp_path / "expenses.csv")

    with out.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))

    assert rows[0] == ["Date", "Category", "Cost Type", "Amount", "Percentage of Total"]
    assert rows[1] == ["2024-02-10", "Payroll", "fixed", "600.00", "60.00%"]
    assert rows[3] == ["2024-03-02", "Misc", "unclassified", "100.00", "10.00%"]
    assert rows[-1] == ["Total Expenses", "", "", "1000.00", "100%"]


def test_expense_json_export_honours_date_window(seeded, tmp_path):
    finance_service, _pid = seeded
    out = reporting_api.export_expenses_json(
        finance_service,
        tmp_path / "expenses.json",
        start=date(2024, 3, 1),
        end=date(2024, 3, 31),
        exported_at=NOW,
    )

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["exportDate"] == NOW.isoformat()
    assert payload["dateRange"] == {"start": "2024-03-01", "end": "2024-03-31"}
    assert payload["summary"] == {"totalExpenses": 400.0, "recordCount": 2}
    assert [row["costType"] for row in payload["data"]] == ["variable", "unclassified"]
    assert payload["data"][0]["percentage"] == 75.0


def test_empty_expense_export(services, tmp_path):
    out = reporting_api.export_expenses_csv(services["finance_service"], tmp_path / "empty.csv")
    with out.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert rows[-1] == ["Total Expenses", "", "", "0.00", "0%"]

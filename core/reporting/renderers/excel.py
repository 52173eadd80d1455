from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.reporting.contexts import FinanceReportContext


class FinanceExcelRenderer:
    def render(self, ctx: FinanceReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        snapshot = ctx.snapshot
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")

        def header_row(sheet, headers):
            for col_index, h in enumerate(headers, start=1):
                cell = sheet.cell(row=1, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        def body_row(sheet, row_index, values):
            for col_index, v in enumerate(values, start=1):
                sheet.cell(row=row_index, column=col_index, value=v).border = thin_border

        # ---------------- Finance ----------------
        ws = wb.active
        ws.title = "Finance"

        ws["A1"] = "Finance Summary"
        ws["A1"].font = title_font
        ws["A2"] = ctx.title

        row = 4

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        kv("As of", ctx.as_of.isoformat())
        kv("Period type", snapshot.period_type.value)
        kv("Months back", snapshot.months_back)
        kv("Total income", round(snapshot.income, 2))
        kv("Total expenses", round(snapshot.expense, 2))
        kv("Profit", round(snapshot.profit, 2))
        kv("Months match quarters", "Yes" if snapshot.consistent else "No")

        if snapshot.notes:
            row += 1
            ws[f"A{row}"] = "Notes"
            ws[f"A{row}"].font = header_font
            row += 1
            for note in snapshot.notes:
                ws[f"A{row}"] = note
                row += 1

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 25

        # ---------------- Periods ----------------
        ws_p = wb.create_sheet("Periods")
        header_row(ws_p, ["Period", "Start", "End", "Income", "Expenses", "Profit"])
        for r_i, p in enumerate(snapshot.periods, start=2):
            body_row(ws_p, r_i, [p.label, p.start_date, p.end_date, p.income, p.expense, p.profit])

        ws_p.column_dimensions["A"].width = 14
        for col_letter in ("B", "C"):
            ws_p.column_dimensions[col_letter].width = 34
        for col_letter in ("D", "E", "F"):
            ws_p.column_dimensions[col_letter].width = 15

        # ---------------- Projects ----------------
        ws_pr = wb.create_sheet("Projects")
        header_row(
            ws_pr,
            ["Project ID", "Project", "Income", "Fixed", "Variable", "Unclassified", "Profit", "Margin %"],
        )
        for r_i, pf in enumerate(snapshot.projects, start=2):
            body_row(
                ws_pr,
                r_i,
                [
                    pf.project_id,
                    pf.project_name,
                    pf.income,
                    pf.fixed_costs,
                    pf.variable_costs,
                    pf.unclassified_costs,
                    pf.profit,
                    round(pf.margin, 2),
                ],
            )

        ws_pr.column_dimensions["A"].width = 36
        ws_pr.column_dimensions["B"].width = 28
        for col_letter in ("C", "D", "E", "F", "G", "H"):
            ws_pr.column_dimensions[col_letter].width = 14

        # ---------------- Cost Breakdown ----------------
        ws_c = wb.create_sheet("Cost Breakdown")
        header_row(ws_c, ["Category", "Cost Type", "Amount", "% of Expenses"])
        r_i = 2
        for line in snapshot.by_category:
            kind = line.cost_type.value if line.cost_type is not None else "unclassified"
            body_row(ws_c, r_i, [line.category, kind, line.amount, round(line.percentage, 2)])
            r_i += 1

        r_i += 1
        for share in snapshot.by_cost_type:
            body_row(ws_c, r_i, [share.label, "", share.amount, round(share.percentage, 2)])
            ws_c.cell(row=r_i, column=1).font = header_font
            r_i += 1

        ws_c.column_dimensions["A"].width = 28
        ws_c.column_dimensions["B"].width = 14
        ws_c.column_dimensions["C"].width = 14
        ws_c.column_dimensions["D"].width = 16

        wb.save(output_path)
        return output_path

from pathlib import Path
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib import colors
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    Image,
)
from reportlab.lib.styles import getSampleStyleSheet

from core.reporting.contexts import FinancePdfContext

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0,0), (-1,0), colors.lightgrey),
    ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
    ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ("ALIGN", (1,1), (-1,-1), "RIGHT"),
])


class FinancePdfRenderer:
    def render(self, ctx: FinancePdfContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        snapshot = ctx.snapshot
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=landscape(A4),
            leftMargin=40,
            rightMargin=40,
            topMargin=40,
            bottomMargin=40,
        )

        styles = getSampleStyleSheet()
        story = []

        # ---------------- Title ----------------
        story.append(Paragraph(f"Finance Report - {ctx.title}", styles["Title"]))
        story.append(Spacer(1, 12))

        # ---------------- Summary ----------------
        info = [
            f"As of: {ctx.as_of.isoformat()}",
            f"Period type: {snapshot.period_type.value} ({snapshot.months_back} month window)",
            f"Total income: {snapshot.income:.2f}",
            f"Total expenses: {snapshot.expense:.2f}",
            f"Profit: {snapshot.profit:.2f}",
        ]
        info.extend(snapshot.notes)

        for line in info:
            story.append(Paragraph(line, styles["Normal"]))

        story.append(Spacer(1, 16))

        # ---------------- Chart ----------------
        if ctx.chart_png_path:
            story.append(Paragraph("Income, Expenses and Profit", styles["Heading2"]))
            story.append(Spacer(1, 8))

            img = Image(ctx.chart_png_path)
            img._restrictSize(720, 280)
            story.append(img)
            story.append(Spacer(1, 16))

        # ---------------- Periods ----------------
        story.append(Paragraph("Periods", styles["Heading2"]))
        story.append(Spacer(1, 8))
        data = [["Period", "Income", "Expenses", "Profit"]]
        for p in snapshot.periods:
            data.append([p.label, f"{p.income:.2f}", f"{p.expense:.2f}", f"{p.profit:.2f}"])
        table = Table(data, colWidths=[160, 120, 120, 120])
        table.setStyle(_TABLE_STYLE)
        story.append(table)
        story.append(Spacer(1, 16))

        # ---------------- Projects ----------------
        if snapshot.projects:
            story.append(Paragraph("Project Profitability", styles["Heading2"]))
            story.append(Spacer(1, 8))

            data = [["Project", "Income", "Fixed", "Variable", "Unclassified", "Profit", "Margin %"]]
            for pf in snapshot.projects:
                data.append([
                    pf.project_name,
                    f"{pf.income:.2f}",
                    f"{pf.fixed_costs:.2f}",
                    f"{pf.variable_costs:.2f}",
                    f"{pf.unclassified_costs:.2f}",
                    f"{pf.profit:.2f}",
                    f"{pf.margin:.1f}",
                ])

            table = Table(data, colWidths=[200, 80, 80, 80, 90, 80, 70])
            table.setStyle(_TABLE_STYLE)
            story.append(table)

        doc.build(story)
        return output_path

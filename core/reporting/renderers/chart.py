from pathlib import Path
from typing import List

import matplotlib.pyplot as plt

from core.services.finance.models import FinancialPeriod


class PeriodChartRenderer:
    """Income/expense bars per period with the profit line on top."""

    def render(self, periods: List[FinancialPeriod], output_path: Path) -> Path:
        if not periods:
            raise ValueError("No periods available for the finance chart.")
        output_path.parent.mkdir(parents=True, exist_ok=True)

        labels = [p.label for p in periods]
        income = [float(p.income) for p in periods]
        expense = [float(p.expense) for p in periods]
        profit = [float(p.profit) for p in periods]
        xs = list(range(len(periods)))
        width = 0.4

        fig, ax = plt.subplots(figsize=(10, 4))
        ax.bar([x - width / 2 for x in xs], income, width=width, label="Income", color="#4caf50")
        ax.bar([x + width / 2 for x in xs], expense, width=width, label="Expenses", color="#e57373")
        ax.plot(xs, profit, label="Profit", color="#1e3a8a", marker="o", linewidth=1.5)
        ax.axhline(0, color="black", linewidth=0.6)

        ax.set_xticks(xs)
        ax.set_xticklabels(labels, rotation=45, ha="right", fontsize=8)
        ax.legend()
        ax.grid(True, axis="y", linestyle=":", linewidth=0.6)

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path

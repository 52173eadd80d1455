"""Period-over-period trend analysis for aggregated financial periods.

Growth is expressed in percent. Forecasts come from an ordinary least-squares
line over the period index and are floored at zero. Anomalies are values whose
population z-score exceeds the threshold.
"""
from __future__ import annotations

import math
from typing import Sequence

from core.services.finance.models import Anomaly, FinancialPeriod, TrendPoint

SPIKE = "spike"
DIP = "dip"


def calculate_growth(current: float, previous: float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return ((current - previous) / abs(previous)) * 100.0


def calculate_year_over_year_growth(
    current_periods: Sequence[FinancialPeriod],
    previous_periods: Sequence[FinancialPeriod],
) -> list[dict[str, float]]:
    return [
        {
            "income": calculate_growth(current.income, previous.income),
            "expense": calculate_growth(current.expense, previous.expense),
            "profit": calculate_growth(current.profit, previous.profit),
        }
        for current, previous in zip(current_periods, previous_periods)
    ]


def moving_average(values: Sequence[float], window: int = 3) -> list[float]:
    half = max(1, window) // 2
    averages: list[float] = []
    for i in range(len(values)):
        chunk = values[max(0, i - half): min(len(values), i + half + 1)]
        averages.append(sum(chunk, 0.0) / len(chunk))
    return averages


def forecast_linear_trend(values: Sequence[float], periods: int = 3) -> list[float]:
    if len(values) < 2:
        last = max(0.0, float(values[-1])) if values else 0.0
        return [last] * periods

    n = len(values)
    x_mean = (n - 1) / 2.0
    y_mean = sum(values, 0.0) / n
    numerator = sum((i - x_mean) * (values[i] - y_mean) for i in range(n))
    denominator = sum((i - x_mean) ** 2 for i in range(n))
    slope = numerator / denominator if denominator else 0.0
    intercept = y_mean - slope * x_mean
    return [max(0.0, slope * (n + i) + intercept) for i in range(periods)]


def detect_anomalies(
    values: Sequence[float],
    threshold: float = 2.0,
    *,
    series: str = "",
) -> list[Anomaly]:
    if len(values) < 3:
        return []
    mean = sum(values, 0.0) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    std_dev = math.sqrt(variance) or 1.0

    anomalies: list[Anomaly] = []
    for index, value in enumerate(values):
        z_score = (value - mean) / std_dev
        if abs(z_score) > threshold:
            anomalies.append(
                Anomaly(
                    index=index,
                    series=series,
                    kind=SPIKE if z_score > 0 else DIP,
                    z_score=z_score,
                )
            )
    return anomalies


def build_trend_series(
    periods: Sequence[FinancialPeriod],
    *,
    forecast_periods: int = 3,
    anomaly_threshold: float = 2.0,
) -> list[TrendPoint]:
    if not periods:
        return []

    series = {
        "income": [p.income for p in periods],
        "expense": [p.expense for p in periods],
        "profit": [p.profit for p in periods],
    }
    averages = {name: moving_average(values) for name, values in series.items()}
    flagged: dict[int, list[str]] = {}
    for name, values in series.items():
        for anomaly in detect_anomalies(values, anomaly_threshold, series=name):
            flagged.setdefault(anomaly.index, []).append(name)

    points: list[TrendPoint] = []
    for i, period in enumerate(periods):
        previous = periods[i - 1] if i > 0 else None
        points.append(
            TrendPoint(
                label=period.label,
                income=period.income,
                expense=period.expense,
                profit=period.profit,
                income_growth=calculate_growth(period.income, previous.income) if previous else 0.0,
                expense_growth=calculate_growth(period.expense, previous.expense) if previous else 0.0,
                profit_growth=calculate_growth(period.profit, previous.profit) if previous else 0.0,
                income_average=averages["income"][i],
                expense_average=averages["expense"][i],
                profit_average=averages["profit"][i],
                anomalies=tuple(flagged.get(i, ())),
            )
        )

    income_forecast = forecast_linear_trend(series["income"], forecast_periods)
    expense_forecast = forecast_linear_trend(series["expense"], forecast_periods)
    for step in range(forecast_periods):
        income = income_forecast[step]
        expense = expense_forecast[step]
        points.append(
            TrendPoint(
                label=f"Forecast +{step + 1}",
                income=income,
                expense=expense,
                profit=income - expense,
                is_forecast=True,
            )
        )
    return points


__all__ = [
    "SPIKE",
    "DIP",
    "calculate_growth",
    "calculate_year_over_year_growth",
    "moving_average",
    "forecast_linear_trend",
    "detect_anomalies",
    "build_trend_series",
]

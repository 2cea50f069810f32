"""
Accuracy Domain Models - Exact-instant alignment and forecast error statistics.
"""

import math
from dataclasses import dataclass
from datetime import datetime

import numpy as np

from outlook.core.domain.series import NO_DATA, AggregatedSeries


@dataclass(frozen=True)
class AlignedPair:
    """Forecast and actual values sharing one canonical instant."""

    instant: datetime
    forecast: float | None
    actual: float | None

    @property
    def is_complete(self) -> bool:
        """Both sides present and finite."""
        return (
            self.forecast is not None
            and self.actual is not None
            and math.isfinite(self.forecast)
            and math.isfinite(self.actual)
        )

    @property
    def abs_error(self) -> float | None:
        if not self.is_complete:
            return None
        return abs(self.forecast - self.actual)


@dataclass(frozen=True)
class ErrorMetrics:
    """Forecast error statistics over the complete pairs of a comparison."""

    mae: float = 0.0
    rmse: float = 0.0
    bias: float = 0.0  # signed: positive means over-forecast
    mape: float = 0.0  # percent, over pairs with non-zero actuals
    sample_count: int = 0


def align(forecast: AggregatedSeries, actual: AggregatedSeries) -> list[AlignedPair]:
    """
    Full outer join of two series on exact instant, ascending.

    Instants present on one side only get NO_DATA on the other.
    """
    instants = sorted(set(forecast.points) | set(actual.points))
    return [
        AlignedPair(
            instant=instant,
            forecast=forecast.points.get(instant, NO_DATA),
            actual=actual.points.get(instant, NO_DATA),
        )
        for instant in instants
    ]


def compute_metrics(pairs: list[AlignedPair]) -> ErrorMetrics:
    """
    Compute MAE, RMSE, bias and MAPE over the complete pairs.

    An empty complete subset yields all-zero metrics rather than NaN.
    """
    complete = [p for p in pairs if p.is_complete]
    if not complete:
        return ErrorMetrics()

    forecast = np.array([p.forecast for p in complete], dtype="float64")
    actual = np.array([p.actual for p in complete], dtype="float64")
    errors = forecast - actual

    nonzero = actual != 0
    if nonzero.any():
        mape = float(np.mean(np.abs(errors[nonzero]) / np.abs(actual[nonzero])) * 100)
    else:
        mape = 0.0

    return ErrorMetrics(
        mae=float(np.mean(np.abs(errors))),
        rmse=float(np.sqrt(np.mean(errors ** 2))),
        bias=float(np.mean(errors)),
        mape=mape,
        sample_count=len(complete),
    )

"""
JSON serialization of accuracy runs and the scenario calendar.
"""

import math
from datetime import datetime

from pydantic import BaseModel, Field

from outlook.core.domain.accuracy import ErrorMetrics
from outlook.core.domain.scenario import ScenarioDate
from outlook.core.services.accuracy_service import AccuracyRun


class AccuracyRequest(BaseModel):
    """Body of an accuracy request."""

    selected_hours: list[int] = Field(default_factory=list)  # hour-ending, 1-24
    scenario_id: int | None = None


def _iso(instant: datetime) -> str:
    return instant.isoformat().replace("+00:00", "Z")


def _finite(value: float | None) -> float | None:
    """JSON has no inf/nan; non-finite values go out as null."""
    if value is None or not math.isfinite(value):
        return None
    return value


def serialize_metrics(metrics: ErrorMetrics) -> dict:
    return {
        "mae": _finite(metrics.mae),
        "rmse": _finite(metrics.rmse),
        "mape": _finite(metrics.mape),
        "bias": _finite(metrics.bias),
        "sample_count": metrics.sample_count,
    }


def serialize_run(run: AccuracyRun) -> dict:
    """Full response body for one evaluated view."""
    comparisons = []
    for result in run.report.results:
        comparisons.append({
            "name": result.name,
            "metrics": serialize_metrics(result.metrics),
            "series": [
                {"datetime": _iso(p.instant), "forecast": _finite(p.forecast), "actual": _finite(p.actual)}
                for p in result.pairs
            ],
        })

    timeline = []
    for row in run.report.error_timeline():
        entry = {"datetime": _iso(row.pop("instant"))}
        entry.update({name: _finite(error) for name, error in row.items()})
        timeline.append(entry)

    return {
        "success": True,
        "view": run.view,
        "scenario": {
            "scenario_id": run.scenario.scenario_id,
            "name": run.scenario.name,
            "simulation_date": run.scenario.simulation_date,
        },
        "date_range": {
            "start": run.window.start.isoformat(),
            "end": run.window.end.isoformat(),
        },
        "selected_hours": list(run.selected_hours),
        "comparisons": comparisons,
        "error_timeline": timeline,
    }


def serialize_calendar(dates: list[ScenarioDate], default: ScenarioDate | None) -> dict:
    available = [
        {
            "date": d.date.isoformat(),
            "scenario_id": d.scenario_id,
            "scenario_name": d.scenario_name,
            "has_previous_week": d.has_previous_week,
        }
        for d in dates
    ]
    return {
        "success": True,
        "available_dates": available,
        "default_date": default.date.isoformat() if default else None,
        "metadata": {
            "total_dates": len(dates),
            "date_range": {
                "earliest": dates[-1].date.isoformat() if dates else None,
                "latest": dates[0].date.isoformat() if dates else None,
            },
            "dates_with_previous_week": sum(1 for d in dates if d.has_previous_week),
        },
    }

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from outlook.core.domain.accuracy import AlignedPair, ErrorMetrics
from outlook.core.domain.errors import ConventionMismatch, InvalidSelection, ScenarioNotFound
from outlook.core.domain.report import AccuracyReport, Comparison, ComparisonResult, build_report
from outlook.core.domain.scenario import DateWindow, Scenario, ScenarioDate
from outlook.core.domain.series import AggregatedSeries, RawSample, SeriesBatch, aggregate
from outlook.core.domain.view import AccuracyView
from outlook.core.services.accuracy_service import AccuracyRun
from outlook.main import app, get_accuracy_service, get_view_store

H0 = datetime(2025, 6, 30, 0, tzinfo=timezone.utc)

VIEW = AccuracyView(
    name="load",
    description="Load forecasts",
    comparisons=[
        {
            "name": "dayzer_load_vs_realtime",
            "forecast": {"source": "dayzer", "convention": "hour_ending", "table": "zone_demand", "measure": "demandmw"},
            "actual": {"source": "fundamentals", "convention": "hour_beginning", "policy": "mean", "attribute": "RTLOAD"},
        }
    ],
)

RUN = AccuracyRun(
    view="load",
    scenario=Scenario(13, "CAISO_WEEK_13", "June 30, 2025"),
    window=DateWindow(date(2025, 6, 30), date(2025, 7, 6)),
    selected_hours=(1,),
    report=AccuracyReport(
        results=(
            ComparisonResult(
                name="dayzer_load_vs_realtime",
                metrics=ErrorMetrics(mae=2.0, rmse=2.0, bias=-2.0, mape=2.0, sample_count=1),
                pairs=(AlignedPair(H0, 98.0, 100.0),),
            ),
        )
    ),
)


@pytest.fixture
def store():
    store = MagicMock()
    store.list_views = AsyncMock(return_value=[VIEW])
    store.get_view = AsyncMock(side_effect=lambda name: VIEW if name == "load" else None)
    return store


@pytest.fixture
def service():
    service = MagicMock()
    service.evaluate = AsyncMock(return_value=RUN)
    service.scenario_dates = AsyncMock(return_value=[])
    return service


@pytest.fixture
def client(store, service):
    app.dependency_overrides[get_view_store] = lambda: store
    app.dependency_overrides[get_accuracy_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_views(client):
    response = client.get("/views")
    assert response.status_code == 200
    assert response.json() == {
        "views": [
            {"name": "load", "description": "Load forecasts", "comparisons": ["dayzer_load_vs_realtime"]}
        ]
    }


def test_evaluate_view(client, service):
    response = client.post("/accuracy/load", json={"selected_hours": [1], "scenario_id": 13})

    assert response.status_code == 200
    service.evaluate.assert_awaited_once_with(VIEW, [1], scenario_id=13)

    body = response.json()
    assert body["success"] is True
    assert body["scenario"] == {"scenario_id": 13, "name": "CAISO_WEEK_13", "simulation_date": "June 30, 2025"}
    assert body["date_range"] == {"start": "2025-06-30", "end": "2025-07-06"}
    assert body["selected_hours"] == [1]

    comparison = body["comparisons"][0]
    assert comparison["name"] == "dayzer_load_vs_realtime"
    assert comparison["metrics"] == {"mae": 2.0, "rmse": 2.0, "mape": 2.0, "bias": -2.0, "sample_count": 1}
    assert comparison["series"] == [{"datetime": "2025-06-30T00:00:00Z", "forecast": 98.0, "actual": 100.0}]
    assert body["error_timeline"] == [{"datetime": "2025-06-30T00:00:00Z", "dayzer_load_vs_realtime": 2.0}]


def test_unknown_view(client, service):
    response = client.post("/accuracy/prices", json={"selected_hours": [1]})
    assert response.status_code == 404
    assert response.json()["error"] == "ViewNotFound"
    service.evaluate.assert_not_called()


@pytest.mark.parametrize(
    "error, status_code",
    [
        (InvalidSelection("No hours selected for analysis"), 400),
        (ScenarioNotFound("Requested scenario 999 not found"), 404),
        (ConventionMismatch("mixed"), 500),
    ],
)
def test_domain_errors_map_to_status(client, service, error, status_code):
    service.evaluate.side_effect = error

    response = client.post("/accuracy/load", json={"selected_hours": []})

    assert response.status_code == status_code
    assert response.json() == {"error": type(error).__name__, "details": str(error)}


def test_unexpected_failure(client, service):
    service.evaluate.side_effect = RuntimeError("connection refused")

    response = client.post("/accuracy/load", json={"selected_hours": [1]})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to calculate forecast accuracy", "details": "connection refused"}


def test_scenario_dates(client, service):
    service.scenario_dates.return_value = [
        ScenarioDate(date(2025, 7, 6), 4, "CAISO_WEEK_4", has_previous_week=True),
        ScenarioDate(date(2025, 6, 29), 1, "CAISO_WEEK_1"),
    ]

    response = client.get("/scenarios/dates")

    assert response.status_code == 200
    body = response.json()
    assert [d["date"] for d in body["available_dates"]] == ["2025-07-06", "2025-06-29"]
    assert body["default_date"] == "2025-07-06"
    assert body["metadata"] == {
        "total_dates": 2,
        "date_range": {"earliest": "2025-06-29", "latest": "2025-07-06"},
        "dates_with_previous_week": 1,
    }


def test_scenario_dates_empty(client):
    body = client.get("/scenarios/dates").json()
    assert body["available_dates"] == []
    assert body["default_date"] is None


def test_scenario_dates_failure(client, service):
    service.scenario_dates.side_effect = RuntimeError("boom")
    response = client.get("/scenarios/dates")
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to fetch available scenario dates"


def test_non_finite_values_serialize_as_null(client, service):
    day = date(2025, 6, 30)
    forecast = aggregate(SeriesBatch(
        "forecast",
        "hour_ending",
        "sum",
        [RawSample(day, 1, "hour_ending", float("inf")), RawSample(day, 2, "hour_ending", 10.0)],
    ))
    h1 = datetime(2025, 6, 30, 1, tzinfo=timezone.utc)
    actual = AggregatedSeries("actual", {H0: 5.0, h1: 12.0})
    report = build_report([Comparison("dayzer_load_vs_realtime", forecast, actual)])
    service.evaluate.return_value = AccuracyRun(
        view="load",
        scenario=Scenario(13, "CAISO_WEEK_13"),
        window=DateWindow(day, day),
        selected_hours=(1, 2),
        report=report,
    )

    response = client.post("/accuracy/load", json={"selected_hours": [1, 2]})

    assert response.status_code == 200
    comparison = response.json()["comparisons"][0]
    assert comparison["metrics"]["sample_count"] == 1
    assert comparison["metrics"]["mae"] == pytest.approx(2.0)
    assert comparison["series"] == [
        {"datetime": "2025-06-30T00:00:00Z", "forecast": None, "actual": 5.0},
        {"datetime": "2025-06-30T01:00:00Z", "forecast": 10.0, "actual": 12.0},
    ]
    assert response.json()["error_timeline"][0]["dayzer_load_vs_realtime"] is None

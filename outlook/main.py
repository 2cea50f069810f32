import logging
from datetime import date

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import create_engine

from outlook.adapters.config.settings_loader import load_settings
from outlook.adapters.config.yaml_store import YamlViewStore
from outlook.adapters.http.serializers import (
    AccuracyRequest,
    serialize_calendar,
    serialize_run,
)
from outlook.adapters.sources.dayzer import DayzerAdapter
from outlook.adapters.sources.fundamentals import FundamentalsAdapter
from outlook.core.domain.errors import (
    InvalidSelection,
    NoScenarioData,
    OutlookError,
    ScenarioNotFound,
    ViewNotFound,
)
from outlook.core.domain.scenario import default_date
from outlook.core.ports.view_store import ViewStore
from outlook.core.services.accuracy_service import AccuracyService

__version__ = "0.1.0"

# Configuration (Load from YAML with Env Overrides)
settings = load_settings()

# Logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# FastAPI Application
app = FastAPI(title="Short Term Outlook")

_STATUS_BY_ERROR = {
    InvalidSelection: 400,
    ViewNotFound: 404,
    ScenarioNotFound: 404,
    NoScenarioData: 404,
}


@app.exception_handler(OutlookError)
async def outlook_error_handler(request: Request, exc: OutlookError):
    status_code = next(
        (code for error_type, code in _STATUS_BY_ERROR.items() if isinstance(exc, error_type)),
        500,
    )
    if status_code == 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "details": str(exc)},
    )


def get_view_store() -> ViewStore:
    return YamlViewStore(config_path=settings.views_file)


def get_accuracy_service():
    """
    Build the service with fresh database engines for this request.
    Engines are disposed once the response is sent.
    """
    primary = create_engine(settings.primary_database_url, pool_pre_ping=True)
    secondary = create_engine(
        settings.secondary_database_url,
        pool_pre_ping=True,
        connect_args=settings.secondary_connect_args(),
    )
    dayzer = DayzerAdapter(primary)
    try:
        yield AccuracyService(
            scenarios=dayzer,
            sources={"dayzer": dayzer, "fundamentals": FundamentalsAdapter(secondary)},
        )
    finally:
        primary.dispose()
        secondary.dispose()


@app.get("/health")
def health_check():
    return {"status": "ok", "version": __version__}


@app.get("/views")
async def list_views(store: ViewStore = Depends(get_view_store)):
    """
    List the configured accuracy views.
    """
    views = await store.list_views()
    return {
        "views": [
            {
                "name": v.name,
                "description": v.description,
                "comparisons": [c.name for c in v.comparisons],
            }
            for v in views
        ]
    }


@app.post("/accuracy/{view_name}")
async def evaluate_view(
    view_name: str,
    body: AccuracyRequest,
    store: ViewStore = Depends(get_view_store),
    service: AccuracyService = Depends(get_accuracy_service),
):
    """
    Compute forecast accuracy for every comparison of a view.
    """
    view = await store.get_view(view_name)
    if view is None:
        raise ViewNotFound(f"View '{view_name}' not found")

    try:
        run = await service.evaluate(view, body.selected_hours, scenario_id=body.scenario_id)
    except OutlookError:
        raise
    except Exception as e:
        logger.exception(f"Accuracy calculation failed for view '{view_name}'")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to calculate forecast accuracy", "details": str(e)},
        )
    return serialize_run(run)


@app.get("/scenarios/dates")
async def scenario_dates(service: AccuracyService = Depends(get_accuracy_service)):
    """
    Simulation dates available for the date picker, newest first.
    """
    try:
        dates = await service.scenario_dates(settings.scenario_name_filter)
    except Exception as e:
        logger.exception("Failed to fetch available scenario dates")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch available scenario dates", "details": str(e)},
        )
    return serialize_calendar(dates, default_date(dates, date.today()))

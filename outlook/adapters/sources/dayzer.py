"""
Dayzer Adapter - Scenario metadata and results from the primary database.

Uses the SQLAlchemy ORM over the Dayzer tables. Dayzer labels hours
hour-ending (``Hour`` 1-24).
"""

import asyncio
import logging
from datetime import date, datetime

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from outlook.adapters.sources.dayzer_models import TABLES, ScenarioMapping
from outlook.core.domain.scenario import DateWindow, Scenario
from outlook.core.domain.series import RawSample
from outlook.core.domain.view import SeriesConfig
from outlook.core.ports.scenario_source import ScenarioSource
from outlook.core.ports.series_source import SeriesSource

logger = logging.getLogger(__name__)


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def _to_scenario(row: ScenarioMapping) -> Scenario:
    return Scenario(
        scenario_id=row.scenarioid,
        name=row.scenarioname or "",
        simulation_date=row.simulation_date,
    )


class DayzerAdapter(ScenarioSource, SeriesSource):
    """
    Primary DB adapter. Blocking ORM calls run in a worker thread.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    # --- ScenarioSource ---

    async def latest_scenario(self) -> Scenario | None:
        return await asyncio.to_thread(self._latest_scenario)

    def _latest_scenario(self) -> Scenario | None:
        with Session(self.engine) as session:
            row = session.scalars(
                select(ScenarioMapping).order_by(ScenarioMapping.scenarioid.desc()).limit(1)
            ).first()
            return _to_scenario(row) if row else None

    async def get_scenario(self, scenario_id: int) -> Scenario | None:
        return await asyncio.to_thread(self._get_scenario, scenario_id)

    def _get_scenario(self, scenario_id: int) -> Scenario | None:
        with Session(self.engine) as session:
            row = session.get(ScenarioMapping, scenario_id)
            return _to_scenario(row) if row else None

    async def list_scenarios(self, name_contains: str | None = None) -> list[Scenario]:
        return await asyncio.to_thread(self._list_scenarios, name_contains)

    def _list_scenarios(self, name_contains: str | None) -> list[Scenario]:
        stmt = select(ScenarioMapping).where(ScenarioMapping.simulation_date.is_not(None))
        if name_contains:
            stmt = stmt.where(ScenarioMapping.scenarioname.contains(name_contains))
        stmt = stmt.order_by(ScenarioMapping.scenarioid.desc())
        with Session(self.engine) as session:
            return [_to_scenario(row) for row in session.scalars(stmt)]

    async def date_bounds(self, scenario_id: int, table: str) -> tuple[date, date] | None:
        return await asyncio.to_thread(self._date_bounds, scenario_id, table)

    def _date_bounds(self, scenario_id: int, table: str) -> tuple[date, date] | None:
        model = self._model(table)
        stmt = select(func.min(model.date), func.max(model.date)).where(model.scenarioid == scenario_id)
        with Session(self.engine) as session:
            low, high = session.execute(stmt).one()
        if low is None or high is None:
            return None
        return _as_date(low), _as_date(high)

    # --- SeriesSource ---

    async def fetch_samples(
        self,
        series: SeriesConfig,
        window: DateWindow,
        hours: list[int],
        scenario_id: int | None = None,
    ) -> list[RawSample]:
        if scenario_id is None:
            raise ValueError("Dayzer series are scenario-scoped; scenario_id is required")
        return await asyncio.to_thread(self._fetch_samples, series, window, hours, scenario_id)

    def _fetch_samples(
        self,
        series: SeriesConfig,
        window: DateWindow,
        hours: list[int],
        scenario_id: int,
    ) -> list[RawSample]:
        model = self._model(series.table)
        _, measures, group_column = TABLES[series.table]
        if series.measure not in measures:
            raise ValueError(f"'{series.measure}' is not a measure of table '{series.table}'")

        value_col = getattr(model, series.measure)
        group_col = getattr(model, group_column)

        stmt = select(model.date, model.hour, value_col, group_col).where(
            model.scenarioid == scenario_id,
            model.date >= window.start,
            model.date <= window.end,
            model.hour.in_(hours),
        )
        if series.fuels:
            if not hasattr(model, "fuelname"):
                raise ValueError(f"Table '{series.table}' has no fuel column")
            stmt = stmt.where(model.fuelname.in_(series.fuels))
        if series.unit_id is not None:
            if not hasattr(model, "unitid"):
                raise ValueError(f"Table '{series.table}' has no unit column")
            stmt = stmt.where(model.unitid == series.unit_id)

        with Session(self.engine) as session:
            rows = session.execute(stmt).all()

        logger.info(f"Fetched {len(rows)} rows for {series.label} (scenario {scenario_id})")
        return [
            RawSample(
                calendar_date=_as_date(day),
                hour_index=hour,
                convention=series.convention,
                value=None if value is None else float(value),
                group_key=None if group is None else str(group),
            )
            for day, hour, value, group in rows
        ]

    @staticmethod
    def _model(table: str | None):
        if table not in TABLES:
            raise ValueError(f"Unknown Dayzer table: {table!r}")
        return TABLES[table][0]

"""
Fundamentals Adapter - ISO forecasts and real-time actuals from the secondary database.

Reads ``yes_fundamentals`` with a raw parameterized query into a DataFrame.
Rows are stamped with their local hour-beginning datetime and may be
sub-hourly (5-minute RT data); each keeps its wall-clock hour so an hour's
samples collapse onto one canonical instant downstream.
"""

import asyncio
import logging

import pandas as pd
from sqlalchemy import bindparam, text
from sqlalchemy.engine import Engine

from outlook.core.domain.scenario import DateWindow
from outlook.core.domain.series import RawSample
from outlook.core.domain.view import SeriesConfig
from outlook.core.ports.series_source import SeriesSource

logger = logging.getLogger(__name__)

FUNDAMENTALS_QUERY = text(
    """
    SELECT local_datetime_ib, value
    FROM yes_fundamentals
    WHERE entity = :entity
      AND attribute = :attribute
      AND local_datetime_ib >= :start
      AND local_datetime_ib < :end
      AND EXTRACT(hour FROM local_datetime_ib) IN :hours
    ORDER BY local_datetime_ib ASC
    """
).bindparams(bindparam("hours", expanding=True))


class FundamentalsAdapter(SeriesSource):
    """
    Secondary DB adapter. Not scenario-scoped: ``scenario_id`` is ignored.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    async def fetch_samples(
        self,
        series: SeriesConfig,
        window: DateWindow,
        hours: list[int],
        scenario_id: int | None = None,
    ) -> list[RawSample]:
        df = await asyncio.to_thread(self._query, series, window, hours)
        logger.info(f"Fetched {len(df)} rows for {series.label} ({window.start} to {window.end})")
        return self._to_samples(df, series)

    def _query(self, series: SeriesConfig, window: DateWindow, hours: list[int]) -> pd.DataFrame:
        if not hours:
            return pd.DataFrame(columns=["local_datetime_ib", "value"])

        params = {
            "entity": series.entity,
            "attribute": series.attribute,
            "start": window.start,
            "end": window.end_exclusive,
            "hours": list(hours),
        }
        with self.engine.connect() as conn:
            return pd.read_sql(FUNDAMENTALS_QUERY, conn, params=params)

    @staticmethod
    def _to_samples(df: pd.DataFrame, series: SeriesConfig) -> list[RawSample]:
        if df.empty:
            return []

        stamps = pd.to_datetime(df["local_datetime_ib"])
        values = pd.to_numeric(df["value"], errors="coerce")

        samples = []
        for ts, value in zip(stamps, values):
            if pd.isna(ts):
                continue
            samples.append(
                RawSample(
                    calendar_date=ts.date(),
                    hour_index=ts.hour,
                    convention=series.convention,
                    value=None if pd.isna(value) else float(value),
                )
            )
        return samples

"""
SeriesSource Port - Interface for fetching raw samples of one declared series.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from outlook.core.domain.scenario import DateWindow
    from outlook.core.domain.series import RawSample
    from outlook.core.domain.view import SeriesConfig


class SeriesSource(ABC):
    """
    Abstract interface for series data access.

    Implementations:
    - DayzerAdapter: scenario results in the primary DB (ORM)
    - FundamentalsAdapter: ISO forecasts and actuals in the secondary DB (raw SQL)
    """

    @abstractmethod
    async def fetch_samples(
        self,
        series: "SeriesConfig",
        window: "DateWindow",
        hours: list[int],
        scenario_id: int | None = None,
    ) -> list["RawSample"]:
        """
        Fetch the raw samples of a series.

        Args:
            series: Series declaration (source-specific selectors, convention)
            window: Inclusive calendar-day range to fetch
            hours: Hour indices to keep, already in the series' convention
            scenario_id: Forecast run, for scenario-scoped sources

        Returns:
            Samples labelled with ``series.convention``, already filtered to
            window and hours
        """
        ...

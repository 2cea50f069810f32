"""
ScenarioSource Port - Interface for looking up forecast runs and their data ranges.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from outlook.core.domain.scenario import Scenario


class ScenarioSource(ABC):
    """
    Abstract interface for scenario metadata.
    """

    @abstractmethod
    async def latest_scenario(self) -> "Scenario | None":
        """Scenario with the highest id, or None if there are none."""
        ...

    @abstractmethod
    async def get_scenario(self, scenario_id: int) -> "Scenario | None":
        """
        Get a scenario by id.

        Returns:
            Scenario if found, None otherwise
        """
        ...

    @abstractmethod
    async def list_scenarios(self, name_contains: str | None = None) -> list["Scenario"]:
        """
        List scenarios that carry a simulation date.

        Args:
            name_contains: Optional substring the scenario name must contain
        """
        ...

    @abstractmethod
    async def date_bounds(self, scenario_id: int, table: str) -> tuple[date, date] | None:
        """
        Earliest and latest calendar day with rows for a scenario in ``table``.

        Returns:
            (min_date, max_date), or None when the scenario has no rows
        """
        ...

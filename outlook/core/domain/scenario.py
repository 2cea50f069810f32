"""
Scenario Domain Models - Forecast runs, date windows and the scenario calendar.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

import pandas as pd


@dataclass(frozen=True)
class Scenario:
    """One Dayzer forecast run."""

    scenario_id: int
    name: str = ""
    simulation_date: str | None = None  # free text, e.g. "June 30, 2025"

    def simulation_day(self) -> date | None:
        """Parsed simulation date, or None when absent or unparseable."""
        if not self.simulation_date:
            return None
        parsed = pd.to_datetime(self.simulation_date, errors="coerce")
        if pd.isna(parsed):
            return None
        return parsed.date()


@dataclass(frozen=True)
class DateWindow:
    """Inclusive range of calendar days."""

    start: date
    end: date

    @classmethod
    def trailing(cls, end: date, days: int = 7) -> "DateWindow":
        """The ``days`` calendar days ending on ``end``."""
        if isinstance(end, datetime):
            end = end.date()
        return cls(start=end - timedelta(days=days - 1), end=end)

    @property
    def end_exclusive(self) -> date:
        return self.end + timedelta(days=1)


@dataclass(frozen=True)
class ScenarioDate:
    """A simulation date available in the date picker."""

    date: date
    scenario_id: int
    scenario_name: str
    has_previous_week: bool = False


def scenario_calendar(scenarios: list[Scenario]) -> list[ScenarioDate]:
    """
    Latest scenario per simulation date, newest date first.

    Scenarios without a parseable simulation date are ignored. A date has a
    previous week when a scenario exists for the date seven days earlier.
    """
    latest: dict[date, Scenario] = {}
    for scenario in scenarios:
        day = scenario.simulation_day()
        if day is None:
            continue
        current = latest.get(day)
        if current is None or scenario.scenario_id > current.scenario_id:
            latest[day] = scenario

    return [
        ScenarioDate(
            date=day,
            scenario_id=scenario.scenario_id,
            scenario_name=scenario.name or f"Scenario {scenario.scenario_id}",
            has_previous_week=(day - timedelta(days=7)) in latest,
        )
        for day, scenario in sorted(latest.items(), reverse=True)
    ]


def default_date(dates: list[ScenarioDate], today: date) -> ScenarioDate | None:
    """Newest entry not after ``today``, falling back to the newest entry."""
    for entry in dates:
        if entry.date <= today:
            return entry
    return dates[0] if dates else None

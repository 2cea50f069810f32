"""
Accuracy Service - The core engine of the Short Term Outlook.

This service orchestrates the fetch-aggregate-score cycle for one view:
1. Resolve the scenario (requested, or latest minus the view's offset)
2. Derive the trailing date window from the scenario's data
3. Fetch and aggregate the forecast and actual series of every comparison
4. Align, score and package the results as an AccuracyReport
"""

import logging
from dataclasses import dataclass

from outlook.core.domain.errors import (
    InvalidSelection,
    NoScenarioData,
    ScenarioNotFound,
    UnknownSource,
)
from outlook.core.domain.report import AccuracyReport, Comparison, build_report
from outlook.core.domain.scenario import DateWindow, Scenario, ScenarioDate, scenario_calendar
from outlook.core.domain.series import AggregatedSeries, SeriesBatch, aggregate
from outlook.core.domain.timekey import hours_for
from outlook.core.domain.view import AccuracyView, SeriesConfig
from outlook.core.ports.scenario_source import ScenarioSource
from outlook.core.ports.series_source import SeriesSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccuracyRun:
    """Result of evaluating one view."""

    view: str
    scenario: Scenario
    window: DateWindow
    selected_hours: tuple[int, ...]
    report: AccuracyReport


class AccuracyService:
    """
    Core service that evaluates accuracy views against injected data sources.
    """

    def __init__(
        self,
        scenarios: ScenarioSource,
        sources: dict[str, SeriesSource],
    ):
        """
        Initialize the accuracy service.

        Args:
            scenarios: Port to look up scenarios and their date ranges
            sources: Series ports keyed by source name ("dayzer", "fundamentals")
        """
        self.scenarios = scenarios
        self.sources = sources

    async def evaluate(
        self,
        view: AccuracyView,
        selected_hours: list[int],
        scenario_id: int | None = None,
    ) -> AccuracyRun:
        """
        Evaluate every comparison of a view.

        Args:
            view: View configuration
            selected_hours: Hour-ending hours (1-24) to include
            scenario_id: Explicit scenario; defaults to latest minus ``view.scenario_offset``

        Raises:
            InvalidSelection: empty or out-of-range hour selection
            ScenarioNotFound: the scenario does not exist
            NoScenarioData: the scenario has no rows in ``view.window_table``
            ConventionMismatch: a source returned samples in another convention
        """
        hours = self._check_selection(selected_hours)

        # 1. Resolve Scenario
        scenario = await self._resolve_scenario(view, scenario_id)

        # 2. Calculate Date Window
        bounds = await self.scenarios.date_bounds(scenario.scenario_id, view.window_table)
        if bounds is None:
            raise NoScenarioData(
                f"No data found for scenario {scenario.scenario_id} in '{view.window_table}'"
            )
        window = DateWindow.trailing(bounds[1], days=view.window_days)
        logger.info(
            f"Evaluating view '{view.name}' for scenario {scenario.scenario_id} "
            f"window={window.start}..{window.end} hours={hours}"
        )

        # 3. Fetch & Aggregate
        comparisons = []
        for config in view.comparisons:
            forecast = await self._load_series(
                f"{config.name}.forecast", config.forecast, window, hours, scenario.scenario_id
            )
            actual = await self._load_series(
                f"{config.name}.actual", config.actual, window, hours, scenario.scenario_id
            )
            comparisons.append(Comparison(name=config.name, forecast=forecast, actual=actual))

        # 4. Score
        report = build_report(comparisons)

        return AccuracyRun(
            view=view.name,
            scenario=scenario,
            window=window,
            selected_hours=tuple(hours),
            report=report,
        )

    async def scenario_dates(self, name_contains: str | None = None) -> list[ScenarioDate]:
        """Scenario calendar: latest run per simulation date, newest first."""
        scenarios = await self.scenarios.list_scenarios(name_contains)
        return scenario_calendar(scenarios)

    async def _resolve_scenario(self, view: AccuracyView, scenario_id: int | None) -> Scenario:
        if scenario_id is not None:
            scenario = await self.scenarios.get_scenario(scenario_id)
            if scenario is None:
                raise ScenarioNotFound(f"Requested scenario {scenario_id} not found")
            return scenario

        latest = await self.scenarios.latest_scenario()
        if latest is None:
            raise ScenarioNotFound("No scenarios found")

        target_id = latest.scenario_id - view.scenario_offset
        scenario = await self.scenarios.get_scenario(target_id)
        if scenario is None:
            raise ScenarioNotFound(
                f"Scenario {target_id} (latest - {view.scenario_offset}) not found"
            )
        return scenario

    async def _load_series(
        self,
        name: str,
        config: SeriesConfig,
        window: DateWindow,
        selected_hours: list[int],
        scenario_id: int,
    ) -> AggregatedSeries:
        source = self.sources.get(config.source)
        if source is None:
            raise UnknownSource(f"No data source configured for '{config.source}'")

        samples = await source.fetch_samples(
            config,
            window,
            hours_for(selected_hours, config.convention),
            scenario_id=scenario_id,
        )
        series = aggregate(
            SeriesBatch(name=name, convention=config.convention, policy=config.policy, samples=samples)
        )
        if series.dropped:
            logger.warning(f"Series '{name}' dropped {series.dropped} malformed samples")

        if config.subtract is not None:
            subtrahend = await self._load_series(
                f"{name}.subtract", config.subtract, window, selected_hours, scenario_id
            )
            series = series.minus(subtrahend, name=name)
        return series

    @staticmethod
    def _check_selection(selected_hours: list[int]) -> list[int]:
        if not selected_hours:
            raise InvalidSelection("No hours selected for analysis")
        invalid = [h for h in selected_hours if isinstance(h, bool) or not isinstance(h, int) or not 1 <= h <= 24]
        if invalid:
            raise InvalidSelection(f"Hours must be hour-ending values 1-24, got {invalid}")
        return sorted(set(selected_hours))

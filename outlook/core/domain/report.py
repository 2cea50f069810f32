"""
Report Domain Models - Data structures for accuracy comparison results.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from outlook.core.domain.accuracy import AlignedPair, ErrorMetrics, align, compute_metrics
from outlook.core.domain.series import AggregatedSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Comparison:
    """A named forecast series paired with the actuals it is judged against."""

    name: str
    forecast: AggregatedSeries
    actual: AggregatedSeries


@dataclass(frozen=True)
class ComparisonResult:
    """Metrics plus the full aligned series of one comparison."""

    name: str
    metrics: ErrorMetrics
    pairs: tuple[AlignedPair, ...] = ()


@dataclass(frozen=True)
class AccuracyReport:
    """Results of every comparison, in the order the caller declared them."""

    results: tuple[ComparisonResult, ...] = field(default_factory=tuple)

    @property
    def names(self) -> list[str]:
        return [r.name for r in self.results]

    def get(self, name: str) -> ComparisonResult | None:
        for result in self.results:
            if result.name == name:
                return result
        return None

    def error_timeline(self) -> list[dict]:
        """
        Absolute error per comparison at every instant seen by any comparison.

        Returns:
            Rows like ``{"instant": datetime, "<comparison>": float | None, ...}``,
            ascending by instant
        """
        by_comparison: dict[str, dict[datetime, float | None]] = {
            r.name: {p.instant: p.abs_error for p in r.pairs} for r in self.results
        }
        instants = sorted({i for errors in by_comparison.values() for i in errors})
        timeline = []
        for instant in instants:
            row: dict = {"instant": instant}
            for name, errors in by_comparison.items():
                row[name] = errors.get(instant)
            timeline.append(row)
        return timeline


def build_report(comparisons: Iterable[Comparison]) -> AccuracyReport:
    """
    Align and score each comparison independently.

    A comparison with no overlapping data still appears, with zeroed metrics.

    Raises:
        ValueError: two comparisons share a name
    """
    results = []
    seen = set()
    for comparison in comparisons:
        if comparison.name in seen:
            raise ValueError(f"Duplicate comparison name: '{comparison.name}'")
        seen.add(comparison.name)

        pairs = align(comparison.forecast, comparison.actual)
        metrics = compute_metrics(pairs)
        if metrics.sample_count == 0:
            logger.info(f"Comparison '{comparison.name}' has no overlapping samples")
        results.append(ComparisonResult(name=comparison.name, metrics=metrics, pairs=tuple(pairs)))

    return AccuracyReport(results=tuple(results))

"""
Series Domain Models - Raw samples and their aggregation onto canonical instants.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Literal, Mapping

import pandas as pd

from outlook.core.domain.errors import ConventionMismatch, InvalidHourIndex
from outlook.core.domain.timekey import HourConvention, normalize

logger = logging.getLogger(__name__)

AggregationPolicy = Literal["sum", "mean"]

# Marker for an instant that exists but carries no usable value
NO_DATA = None


@dataclass(frozen=True)
class RawSample:
    """One observation as returned by a data source."""

    calendar_date: date
    hour_index: int
    convention: HourConvention
    value: float | None
    group_key: str | None = None  # zone, fuel or unit discriminator


@dataclass(frozen=True)
class SeriesBatch:
    """
    Samples destined for one series, with their declared convention and policy.

    Raises:
        ConventionMismatch: a sample declares a convention other than ``convention``
    """

    name: str
    convention: HourConvention
    policy: AggregationPolicy
    samples: tuple[RawSample, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "samples", tuple(self.samples))
        if self.policy not in ("sum", "mean"):
            raise ValueError(f"Unknown aggregation policy: {self.policy!r}")
        mixed = {s.convention for s in self.samples} - {self.convention}
        if mixed:
            raise ConventionMismatch(
                f"Series '{self.name}' is declared {self.convention} "
                f"but contains samples labelled {sorted(mixed)}"
            )


@dataclass(frozen=True)
class AggregatedSeries:
    """Exactly one value (or NO_DATA) per hour-beginning UTC instant."""

    name: str
    points: Mapping[datetime, float | None] = field(default_factory=dict)
    dropped: int = 0  # samples rejected during normalization

    def __post_init__(self):
        # read-only snapshot; the caller's dict is not shared
        object.__setattr__(self, "points", MappingProxyType(dict(self.points)))

    def __len__(self) -> int:
        return len(self.points)

    def get(self, instant: datetime) -> float | None:
        return self.points.get(instant, NO_DATA)

    def minus(self, other: "AggregatedSeries", name: str | None = None) -> "AggregatedSeries":
        """
        Derive ``self - other`` over this series' instants.

        Instants missing from ``other`` (or NO_DATA there) subtract nothing,
        which is how net load is built from load and renewable generation.
        """
        points = {}
        for instant, value in self.points.items():
            if value is NO_DATA:
                points[instant] = NO_DATA
                continue
            subtrahend = other.points.get(instant)
            points[instant] = value - (subtrahend if subtrahend is not None else 0.0)
        return AggregatedSeries(
            name=name or f"{self.name}-{other.name}",
            points=points,
            dropped=self.dropped,
        )


def aggregate(batch: SeriesBatch) -> AggregatedSeries:
    """
    Collapse a batch of raw samples into one value per canonical instant.

    Samples whose hour index is invalid for the declared convention are
    skipped and counted in ``AggregatedSeries.dropped``.

    Policies:
        sum: total of non-null values, null counts as zero
        mean: mean of non-null values, NO_DATA when every value is null
    """
    rows = []
    dropped = 0
    for sample in batch.samples:
        try:
            instant = normalize(sample.calendar_date, sample.hour_index, batch.convention)
        except InvalidHourIndex as e:
            logger.warning(f"Dropping sample from '{batch.name}': {e}")
            dropped += 1
            continue
        rows.append((instant, sample.value))

    if not rows:
        return AggregatedSeries(name=batch.name, points={}, dropped=dropped)

    df = pd.DataFrame(rows, columns=["instant", "value"])
    df["value"] = pd.to_numeric(df["value"], errors="coerce").astype("float64")

    # Reduce in a canonical order so the result does not depend on input order
    df = df.sort_values(["instant", "value"], kind="mergesort", na_position="last")
    grouped = df.groupby("instant", sort=True)["value"]
    reduced = grouped.sum() if batch.policy == "sum" else grouped.mean()

    points = {}
    for instant, value in reduced.items():
        points[instant.to_pydatetime()] = NO_DATA if pd.isna(value) else float(value)

    return AggregatedSeries(name=batch.name, points=points, dropped=dropped)

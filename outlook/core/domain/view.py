"""
Accuracy View Domain Model - Declarative catalog of forecast/actual comparisons.

Uses Pydantic for validation of the YAML catalog.
"""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from outlook.core.domain.series import AggregationPolicy
from outlook.core.domain.timekey import HourConvention


class SeriesConfig(BaseModel):
    """Where one series comes from and how its samples are labelled and reduced."""

    source: Literal["dayzer", "fundamentals"]
    convention: HourConvention
    policy: AggregationPolicy = "sum"

    # --- Dayzer (primary DB) ---
    table: Literal["zone_demand", "results_units"] | None = None
    measure: str | None = None  # column, e.g. demandmw / generationmw / lmp
    fuels: list[str] = Field(default_factory=list)
    unit_id: int | None = None

    # --- Fundamentals (secondary DB) ---
    entity: str = "CAISO"
    attribute: str | None = None  # e.g. RTLOAD, DA_LOAD_FORECAST

    # --- Derived ---
    subtract: "SeriesConfig | None" = None  # e.g. renewables, to build net load

    @model_validator(mode="after")
    def _check_source_fields(self) -> "SeriesConfig":
        if self.source == "dayzer" and (not self.table or not self.measure):
            raise ValueError("dayzer series require 'table' and 'measure'")
        if self.source == "fundamentals" and not self.attribute:
            raise ValueError("fundamentals series require 'attribute'")
        return self

    @property
    def label(self) -> str:
        if self.source == "dayzer":
            label = f"dayzer:{self.table}.{self.measure}"
            if self.fuels:
                label += f"[fuels={','.join(self.fuels)}]"
            if self.unit_id is not None:
                label += f"[unit={self.unit_id}]"
            return label
        return f"fundamentals:{self.entity}.{self.attribute}"


class ComparisonConfig(BaseModel):
    """A named forecast series judged against an actual series."""

    name: str
    forecast: SeriesConfig
    actual: SeriesConfig


class AccuracyView(BaseModel):
    """
    A dashboard panel: an ordered set of comparisons evaluated over one
    scenario's trailing window.
    """

    # --- Identity ---
    name: str
    description: str = ""

    # --- Scenario & Window ---
    window_table: Literal["zone_demand", "results_units"] = "zone_demand"
    scenario_offset: int = 7  # default scenario = latest - offset
    window_days: int = Field(default=7, ge=1)

    # --- Comparisons (order is presentation order) ---
    comparisons: list[ComparisonConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_names(self) -> "AccuracyView":
        names = [c.name for c in self.comparisons]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate comparison names in view '{self.name}'")
        return self

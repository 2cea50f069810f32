"""
ORM mappings of the Dayzer results tables (read-only, schema owned elsewhere).
"""

import datetime as dt

from sqlalchemy import Date, Float, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class ScenarioMapping(Base):
    __tablename__ = "info_scenarioid_scenarioname_mapping"

    scenarioid: Mapped[int] = mapped_column(Integer, primary_key=True)
    scenarioname: Mapped[str | None] = mapped_column(String)
    simulation_date: Mapped[str | None] = mapped_column(String)


class ZoneDemand(Base):
    __tablename__ = "zone_demand"

    scenarioid: Mapped[int] = mapped_column(Integer, primary_key=True)
    zonename: Mapped[str] = mapped_column(String, primary_key=True)
    date: Mapped[dt.date] = mapped_column("Date", Date, primary_key=True)
    hour: Mapped[int] = mapped_column("Hour", Integer, primary_key=True)
    demandmw: Mapped[float | None] = mapped_column(Float)


class ResultsUnits(Base):
    __tablename__ = "results_units"

    scenarioid: Mapped[int] = mapped_column(Integer, primary_key=True)
    unitid: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[dt.date] = mapped_column("Date", Date, primary_key=True)
    hour: Mapped[int] = mapped_column("Hour", Integer, primary_key=True)
    fuelname: Mapped[str | None] = mapped_column(String)
    generationmw: Mapped[float | None] = mapped_column(Float)
    lmp: Mapped[float | None] = mapped_column(Float)


# table name -> (model, numeric columns usable as a measure, group column)
TABLES = {
    "zone_demand": (ZoneDemand, {"demandmw"}, "zonename"),
    "results_units": (ResultsUnits, {"generationmw", "lmp"}, "unitid"),
}

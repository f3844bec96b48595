"""
Core data models for growthchart.

These Pydantic models carry a growth record through the chart pipeline:
raw table -> column roles -> normalized observations -> enriched rows ->
series set -> chart spec. Everything is built and discarded within one run.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, computed_field


# =============================================================================
# ENUMS
# =============================================================================


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"


class ChartKind(str, Enum):
    HEIGHT = "height"
    WEIGHT = "weight"
    BMI = "bmi"

    @property
    def requires_height(self) -> bool:
        return self in (ChartKind.HEIGHT, ChartKind.BMI)

    @property
    def requires_weight(self) -> bool:
        return self in (ChartKind.WEIGHT, ChartKind.BMI)


class ColumnRole(str, Enum):
    AGE = "age"
    DATE = "date"
    HEIGHT = "height"
    WEIGHT = "weight"


class SeriesStyle(str, Enum):
    LINESPOINTS = "linespoints"
    LINES = "lines"


# Band field name -> suffix used by the reference lookup ("height_SD2neg")
BAND_SUFFIXES: dict[str, str] = {
    "z0": "SD0",
    "z1": "SD1",
    "z1neg": "SD1neg",
    "z2": "SD2",
    "z2neg": "SD2neg",
    "z3": "SD3",
    "z3neg": "SD3neg",
}

# Band field name -> z value
BAND_Z: dict[str, int] = {
    "z0": 0,
    "z1": 1,
    "z1neg": -1,
    "z2": 2,
    "z2neg": -2,
    "z3": 3,
    "z3neg": -3,
}


# =============================================================================
# INPUT TABLE
# =============================================================================


class RawTable(BaseModel):
    """Parsed CSV/TSV table. All cell values are kept as strings."""
    columns: list[str] = Field(description="Header names exactly as given")
    rows: list[dict[str, str]] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


class ColumnRoleMap(BaseModel):
    """Column chosen for each semantic role, or None when unresolved."""
    age: str | None = None
    date: str | None = None
    height: str | None = None
    weight: str | None = None

    @property
    def uses_date(self) -> bool:
        return self.date is not None


# =============================================================================
# OBSERVATIONS
# =============================================================================


class NormalizedObservation(BaseModel):
    """
    One input row, validated and converted.

    Exactly one of ``observed_at`` (date-based tables) or ``age_seconds``
    (age-based tables) is set. Elapsed time for date-based rows is left to
    the reference lookup.
    """
    row_index: int
    observed_at: datetime | None = None
    age_seconds: float | None = Field(default=None, ge=0)
    height_cm: float | None = None
    weight_kg: float | None = None

    @computed_field
    @property
    def bmi(self) -> float | None:
        if not self.height_cm or not self.weight_kg:
            return None
        height_m = self.height_cm / 100
        return self.weight_kg / (height_m * height_m)


class BandValues(BaseModel):
    """Reference values at z = -3..+3 for one metric at one age."""
    z3neg: float | None = None
    z2neg: float | None = None
    z1neg: float | None = None
    z0: float | None = None
    z1: float | None = None
    z2: float | None = None
    z3: float | None = None


class EnrichedRow(BaseModel):
    """A normalized observation joined with its reference bands."""
    observation: NormalizedObservation
    metric: ChartKind
    age: float = Field(description="x-axis value: lookup age token / 12")
    measured: float | None = None
    bands: BandValues = Field(default_factory=BandValues)
    z_score: float | None = None
    percentile: float | None = None

    @property
    def row_index(self) -> int:
        return self.observation.row_index


# =============================================================================
# SERIES AND CHART
# =============================================================================


class SeriesSet(BaseModel):
    """Eight row-aligned sequences (measured + seven bands) and their x values."""
    kind: ChartKind
    ages: list[float] = Field(default_factory=list)
    measured: list[float | None] = Field(default_factory=list)
    z0: list[float | None] = Field(default_factory=list)
    z1: list[float | None] = Field(default_factory=list)
    z1neg: list[float | None] = Field(default_factory=list)
    z2: list[float | None] = Field(default_factory=list)
    z2neg: list[float | None] = Field(default_factory=list)
    z3: list[float | None] = Field(default_factory=list)
    z3neg: list[float | None] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.ages)


class SeriesDescriptor(BaseModel):
    """One plotted line, as handed to the renderer."""
    title: str
    x: list[float]
    y: list[float | None]
    color: str
    style: SeriesStyle = SeriesStyle.LINES


class ChartSpec(BaseModel):
    """Everything the renderer needs to draw one chart."""
    kind: ChartKind
    title: str
    xlabel: str
    ylabel: str
    series: list[SeriesDescriptor] = Field(default_factory=list)


class ChartResult(BaseModel):
    """Outcome of a chart run: 200 on success, 400 on any input or lookup error."""
    status: int
    message: str = ""
    path: Path | None = None

    @property
    def ok(self) -> bool:
        return self.status == 200

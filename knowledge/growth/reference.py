"""
Growth reference tables using the LMS method.

The LMS method expresses growth as:
- L (lambda): Box-Cox power transformation
- M (mu): Median
- S (sigma): Coefficient of variation

Z-score = ((value/M)^L - 1) / (L * S)  when L ≠ 0
Z-score = ln(value/M) / S              when L = 0

Value at Z = M * (1 + L*S*Z)^(1/L)    when L ≠ 0
Value at Z = M * exp(S*Z)              when L = 0

Percentile = Φ(Z-score) where Φ is the standard normal CDF

LMS points are read from a YAML file (``reference_lms.yaml`` by default),
keyed by metric, then gender, then age in months.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from scipy import stats

DEFAULT_REFERENCE_FILE = Path(__file__).parent / "reference_lms.yaml"


def _z_score_from_lms(value: float, L: float, M: float, S: float) -> float:
    """
    Calculate Z-score from value and LMS parameters.
    """
    if abs(L) < 1e-10:  # L ≈ 0
        return math.log(value / M) / S
    else:
        return (math.pow(value / M, L) - 1) / (L * S)


def _value_from_lms_z(z: float, L: float, M: float, S: float) -> float:
    """
    Calculate value from Z-score and LMS parameters.
    """
    if abs(L) < 1e-10:  # L ≈ 0
        return M * math.exp(z * S)
    else:
        return M * math.pow(1 + L * S * z, 1 / L)


def _percentile_from_z(z: float) -> float:
    """Convert Z-score to percentile using normal CDF."""
    return stats.norm.cdf(z) * 100


@dataclass
class LmsTable:
    """LMS points for one metric and gender, keyed by age in months."""
    points: dict[float, tuple[float, float, float]]

    @property
    def min_age(self) -> float:
        return min(self.points)

    @property
    def max_age(self) -> float:
        return max(self.points)

    def covers(self, age_months: float) -> bool:
        return self.min_age <= age_months <= self.max_age

    def lms_at(self, age_months: float) -> tuple[float, float, float]:
        """
        Interpolate LMS values for a given age.
        Uses linear interpolation between known points.
        """
        ages = sorted(self.points)

        # Exact match
        if age_months in self.points:
            return self.points[age_months]

        # Clamp to range
        if age_months < ages[0]:
            return self.points[ages[0]]
        if age_months > ages[-1]:
            return self.points[ages[-1]]

        # Find bracketing ages
        lower_age = max(a for a in ages if a < age_months)
        upper_age = min(a for a in ages if a > age_months)

        # Linear interpolation factor
        t = (age_months - lower_age) / (upper_age - lower_age)

        L1, M1, S1 = self.points[lower_age]
        L2, M2, S2 = self.points[upper_age]

        return (
            L1 + t * (L2 - L1),
            M1 + t * (M2 - M1),
            S1 + t * (S2 - S1),
        )

    def value_at_z(self, z: float, age_months: float) -> float:
        L, M, S = self.lms_at(age_months)
        return _value_from_lms_z(z, L, M, S)

    def z_score(self, value: float, age_months: float) -> float:
        L, M, S = self.lms_at(age_months)
        return _z_score_from_lms(value, L, M, S)


@dataclass
class GrowthReference:
    """All LMS tables from one reference file."""
    source: str
    tables: dict[tuple[str, str], LmsTable] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path | None = None) -> "GrowthReference":
        """
        Load LMS tables from YAML.

        Expected layout::

            source: <description>
            tables:
              height:
                M:
                  0: [L, M, S]
                  ...
        """
        path = Path(path) if path else DEFAULT_REFERENCE_FILE
        with open(path, "r") as f:
            raw = yaml.safe_load(f) or {}

        tables = {}
        for metric, by_gender in (raw.get("tables") or {}).items():
            for gender, points in by_gender.items():
                tables[(metric, gender)] = LmsTable(points={
                    float(age): tuple(float(v) for v in lms)
                    for age, lms in points.items()
                })
        if not tables:
            raise ValueError(f"No LMS tables found in {path}")

        return cls(source=raw.get("source", path.name), tables=tables)

    @property
    def metrics(self) -> list[str]:
        return sorted({metric for metric, _ in self.tables})

    @property
    def max_age(self) -> float:
        return max(table.max_age for table in self.tables.values())

    def table(self, metric: str, gender: str) -> LmsTable | None:
        return self.tables.get((metric, gender))

    def percentile(self, value: float, metric: str, gender: str, age_months: float) -> tuple[float, float]:
        """Return (z-score, percentile) for a measurement."""
        z = self.tables[(metric, gender)].z_score(value, age_months)
        return z, _percentile_from_z(z)

"""
Bundled reference lookup backed by LMS tables.

Answers ``ReferenceRequest``s from the knowledge base LMS tables: age is
worked out from (dob, now) or from elapsed seconds, then every metric
table covering that age contributes its seven SD band values. Measurements
sent with the request also get a z-score and percentile.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

from knowledge.growth import GrowthReference
from src.models import BAND_SUFFIXES, BAND_Z

from .base import ReferenceLookup, ReferenceRequest, ReferenceResponse

logger = logging.getLogger(__name__)

# Average Gregorian month
DAYS_PER_MONTH = 30.4375


class TableReferenceLookup(ReferenceLookup):
    """
    Reference lookup over a ``GrowthReference`` loaded from YAML.

    Args:
        reference: Preloaded reference tables
        reference_file: YAML file to load when ``reference`` is not given;
            defaults to the bundled tables
    """

    def __init__(
        self,
        reference: GrowthReference | None = None,
        reference_file: Path | None = None,
    ):
        self.reference = reference or GrowthReference.load(reference_file)

    def age_in_months(self, request: ReferenceRequest) -> float:
        if request.now is not None:
            days = (request.now.date() - request.dob).days
            return days / DAYS_PER_MONTH
        return request.age / 86400 / DAYS_PER_MONTH

    def lookup(self, request: ReferenceRequest) -> ReferenceResponse:
        if request.now is None and request.age is None:
            return ReferenceResponse(status=400, message="Please specify age, or dob and now")
        if request.now is not None and request.dob is None:
            return ReferenceResponse(status=400, message="Please specify dob")

        age_months = self.age_in_months(request)
        if age_months < 0:
            return ReferenceResponse(
                status=400,
                message="Age is negative (observation date is before date of birth)",
            )
        if age_months > self.reference.max_age:
            return ReferenceResponse(
                status=400,
                message=(
                    f"Age {age_months:.1f} months is beyond the reference data "
                    f"(max {self.reference.max_age:g} months)"
                ),
            )

        for label, value in (("height", request.height), ("weight", request.weight)):
            if value is not None and not (math.isfinite(value) and value >= 0):
                return ReferenceResponse(status=400, message=f"Invalid {label}: {value}")

        measurements: dict[str, float | None] = {
            "height": request.height,
            "weight": request.weight,
        }
        if request.height and request.weight:
            height_m = request.height / 100
            measurements["bmi"] = request.weight / (height_m * height_m)

        gender = request.gender.value
        data: dict[str, object] = {"age": f"{age_months:.2f} months"}

        for metric in self.reference.metrics:
            table = self.reference.table(metric, gender)
            if table is None or not table.covers(age_months):
                continue
            for band, suffix in BAND_SUFFIXES.items():
                data[f"{metric}_{suffix}"] = round(table.value_at_z(BAND_Z[band], age_months), 2)

            value = measurements.get(metric)
            if value:
                z, percentile = self.reference.percentile(value, metric, gender, age_months)
                data[f"{metric}_z"] = round(z, 2)
                data[f"{metric}_pctl"] = round(float(percentile), 1)

        return ReferenceResponse(status=200, message="OK", data=data)

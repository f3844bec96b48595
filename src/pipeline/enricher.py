"""
Reference enrichment.

Calls the reference lookup once per observation, in input order, and
pulls out the seven SD band values for the requested chart kind. The
first failed lookup aborts the whole run.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Iterable

from src.models import (
    BAND_SUFFIXES,
    BandValues,
    ChartKind,
    EnrichedRow,
    Gender,
    NormalizedObservation,
)
from src.reference import ReferenceLookup, ReferenceRequest

from .errors import ReferenceLookupError

logger = logging.getLogger(__name__)

AGE_TOKEN = re.compile(r"^(\d+(?:\.\d+)?)")


def _as_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def build_request(
    observation: NormalizedObservation,
    gender: Gender,
    dob: date,
    which: ChartKind,
) -> ReferenceRequest:
    """Build the lookup request for one observation."""
    request = ReferenceRequest(gender=gender)
    if observation.observed_at is not None:
        request.dob = dob
        request.now = observation.observed_at
    else:
        request.age = observation.age_seconds
    if which.requires_height:
        request.height = observation.height_cm
    if which.requires_weight:
        request.weight = observation.weight_kg
    return request


def extract_bands(data: dict[str, Any], which: ChartKind) -> BandValues:
    """Read ``{metric}_SD*`` fields; missing fields stay None."""
    return BandValues(**{
        field: _as_float(data.get(f"{which.value}_{suffix}"))
        for field, suffix in BAND_SUFFIXES.items()
    })


def measured_value(observation: NormalizedObservation, which: ChartKind) -> float | None:
    if which == ChartKind.HEIGHT:
        return observation.height_cm
    if which == ChartKind.WEIGHT:
        return observation.weight_kg
    return observation.bmi


def enrich_row(
    observation: NormalizedObservation,
    lookup: ReferenceLookup,
    gender: Gender,
    dob: date,
    which: ChartKind,
) -> EnrichedRow:
    """
    Look up one observation and attach its reference bands.

    Raises:
        ReferenceLookupError: the lookup reported non-success, or its
            ``age`` field has no leading number
    """
    row_index = observation.row_index
    response = lookup.lookup(build_request(observation, gender, dob, which))
    if not response.ok:
        raise ReferenceLookupError(row_index, response.status, response.message)

    data = response.data
    match = AGE_TOKEN.match(str(data.get("age", "")))
    if not match:
        raise ReferenceLookupError(
            row_index, 500, f"Reference data has no numeric age: {data.get('age')!r}"
        )

    return EnrichedRow(
        observation=observation,
        metric=which,
        age=float(match.group(1)) / 12,
        measured=measured_value(observation, which),
        bands=extract_bands(data, which),
        z_score=_as_float(data.get(f"{which.value}_z")),
        percentile=_as_float(data.get(f"{which.value}_pctl")),
    )


def enrich_rows(
    observations: Iterable[NormalizedObservation],
    lookup: ReferenceLookup,
    gender: Gender,
    dob: date,
    which: ChartKind,
) -> list[EnrichedRow]:
    """Enrich observations sequentially; stops at the first failure."""
    enriched = [
        enrich_row(observation, lookup, gender, dob, which)
        for observation in observations
    ]
    logger.debug("Enriched %d rows for %s chart", len(enriched), which.value)
    return enriched

"""
Row normalization.

Converts one raw row into a ``NormalizedObservation``. Date-based rows keep
the observation timestamp (local midnight) so the reference lookup can do
the calendar math against the date of birth. Age-based rows are converted
to elapsed seconds using 365.25-day years.
"""

from __future__ import annotations

import math
import re
from datetime import datetime

from src.models import ColumnRoleMap, NormalizedObservation

from .errors import MalformedDateError, MalformedValueError

SECONDS_PER_YEAR = 365.25 * 86400

DATE_PREFIX = re.compile(r"\A(\d{4})-(\d{2})-(\d{2})")


def parse_observation_date(raw: str, row_index: int) -> datetime:
    """Parse a ``YYYY-MM-DD``-prefixed cell into a local-midnight datetime."""
    match = DATE_PREFIX.match(raw)
    if not match:
        raise MalformedDateError(row_index, raw)
    year, month, day = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day)
    except ValueError:
        # Right shape but not a calendar date (e.g. 2020-13-40)
        raise MalformedDateError(row_index, raw) from None


def _parse_float(raw: str, row_index: int, column: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise MalformedValueError(row_index, column, raw) from None
    # float() accepts "nan" and "inf"
    if not math.isfinite(value):
        raise MalformedValueError(row_index, column, raw)
    return value


def _optional_measurement(
    row: dict[str, str],
    column: str | None,
    row_index: int,
) -> float | None:
    # A resolved column with an empty cell just means no measurement this row
    if column is None:
        return None
    raw = (row.get(column) or "").strip()
    if not raw:
        return None
    value = _parse_float(raw, row_index, column)
    if value < 0:
        raise MalformedValueError(row_index, column, raw)
    return value


def normalize_row(
    row: dict[str, str],
    roles: ColumnRoleMap,
    row_index: int,
) -> NormalizedObservation:
    """
    Validate and convert one raw row.

    Args:
        row: Column name -> raw cell text
        roles: Resolved column roles; the date role wins over age
        row_index: Zero-based data row index, used in error messages

    Returns:
        NormalizedObservation with either ``observed_at`` or ``age_seconds``

    Raises:
        MalformedDateError: date cell lacks a valid YYYY-MM-DD prefix
        MalformedValueError: age, height or weight cell is not a finite,
            non-negative number
    """
    observed_at = None
    age_seconds = None

    if roles.uses_date:
        observed_at = parse_observation_date(row.get(roles.date) or "", row_index)
    else:
        raw_age = (row.get(roles.age) or "").strip()
        age_seconds = SECONDS_PER_YEAR * _parse_float(raw_age, row_index, roles.age)
        if age_seconds < 0:
            raise MalformedValueError(row_index, roles.age, raw_age)

    return NormalizedObservation(
        row_index=row_index,
        observed_at=observed_at,
        age_seconds=age_seconds,
        height_cm=_optional_measurement(row, roles.height, row_index),
        weight_kg=_optional_measurement(row, roles.weight, row_index),
    )

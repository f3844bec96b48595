"""
Data models for growthchart.
"""

from .growth import (
    BAND_SUFFIXES,
    BAND_Z,
    BandValues,
    ChartKind,
    ChartResult,
    ChartSpec,
    ColumnRole,
    ColumnRoleMap,
    EnrichedRow,
    Gender,
    NormalizedObservation,
    RawTable,
    SeriesDescriptor,
    SeriesSet,
    SeriesStyle,
)

__all__ = [
    "BAND_SUFFIXES",
    "BAND_Z",
    "BandValues",
    "ChartKind",
    "ChartResult",
    "ChartSpec",
    "ColumnRole",
    "ColumnRoleMap",
    "EnrichedRow",
    "Gender",
    "NormalizedObservation",
    "RawTable",
    "SeriesDescriptor",
    "SeriesSet",
    "SeriesStyle",
]

"""
Series assembly.

Folds enriched rows into the eight row-aligned sequences of a ``SeriesSet``.
Rows stay in input order; an absent measurement or band keeps its slot as
None so every sequence lines up with the x values.
"""

from __future__ import annotations

from typing import Iterable

from src.models import BAND_SUFFIXES, ChartKind, EnrichedRow, SeriesSet


def assemble_series(rows: Iterable[EnrichedRow], which: ChartKind) -> SeriesSet:
    series = SeriesSet(kind=which)
    for row in rows:
        series.ages.append(row.age)
        series.measured.append(row.measured)
        for band in BAND_SUFFIXES:
            getattr(series, band).append(getattr(row.bands, band))
    return series

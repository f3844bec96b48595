"""
Growth chart pipeline.

Runs the stages in order, with no backward edges:

    load_table -> resolve_roles -> normalize_row -> enrich_rows
        -> assemble_series -> build_chart_spec

``run_pipeline`` stops at the first error. ``generate_growth_chart`` wraps
it, renders the PNG and reports a (status, message) result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from src.config import ChartConfig, get_config
from src.exporters import export_chart_spec, open_in_viewer, render_chart, temp_chart_path
from src.models import (
    ChartKind,
    ChartResult,
    ChartSpec,
    ColumnRoleMap,
    EnrichedRow,
    Gender,
    RawTable,
    SeriesSet,
)
from src.reference import ReferenceLookup, TableReferenceLookup

from .assembler import assemble_series
from .chart_spec import build_chart_spec
from .enricher import enrich_rows
from .errors import GrowthChartError
from .loader import load_table
from .normalizer import normalize_row
from .roles import resolve_roles

logger = logging.getLogger(__name__)


@dataclass
class PipelineRun:
    """Everything one run produced, from parsed table to chart spec."""
    table: RawTable
    roles: ColumnRoleMap
    rows: list[EnrichedRow]
    series: SeriesSet
    spec: ChartSpec


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def run_pipeline(
    gender: Gender | str,
    dob: date | datetime | str,
    table: str,
    which: ChartKind | str,
    name: str | None = None,
    lookup: ReferenceLookup | None = None,
) -> PipelineRun:
    """
    Build the chart spec for one subject's growth table.

    Args:
        gender: "M" or "F"
        dob: Date of birth
        table: CSV/TSV text with a header line
        which: "height", "weight" or "bmi"
        name: Optional subject name for the chart title
        lookup: Reference lookup; defaults to the bundled LMS tables

    Returns:
        PipelineRun holding every intermediate result

    Raises:
        GrowthChartError: on the first input or lookup error
    """
    gender = Gender(gender)
    which = ChartKind(which)
    dob = _as_date(dob)
    if lookup is None:
        lookup = TableReferenceLookup()

    raw = load_table(table)
    roles = resolve_roles(raw.columns, which)
    observations = [
        normalize_row(row, roles, index)
        for index, row in enumerate(raw.rows)
    ]
    rows = enrich_rows(observations, lookup, gender, dob, which)
    series = assemble_series(rows, which)
    spec = build_chart_spec(series, which, name)

    return PipelineRun(table=raw, roles=roles, rows=rows, series=series, spec=spec)


def generate_growth_chart(
    gender: Gender | str,
    dob: date | datetime | str,
    table: str,
    which: ChartKind | str,
    name: str | None = None,
    *,
    lookup: ReferenceLookup | None = None,
    config: ChartConfig | None = None,
    output_path: Path | None = None,
    open_viewer: bool | None = None,
    spec_json: Path | None = None,
) -> ChartResult:
    """
    Create a growth chart image from a table and open it.

    Any input or lookup error yields a 400 result and no chart; nothing is
    rendered or opened unless every row succeeded.

    Args:
        gender, dob, table, which, name: See ``run_pipeline``
        lookup: Reference lookup; defaults to the bundled tables (or the
            configured reference file)
        config: Settings; read from the environment when omitted
        output_path: Explicit PNG path; otherwise a generated temp path
        open_viewer: Override ``config.open_viewer``
        spec_json: Also write the chart spec as JSON here

    Returns:
        ChartResult with status 200 and the image path, or 400 and a message
    """
    config = config or get_config()
    if lookup is None:
        lookup = TableReferenceLookup(reference_file=config.reference_file)

    try:
        run = run_pipeline(gender, dob, table, which, name=name, lookup=lookup)
    except GrowthChartError as e:
        logger.debug("Chart run failed: %s", e)
        return ChartResult(status=400, message=str(e))

    if output_path:
        path = Path(output_path)
        render_chart(run.spec, path)
    else:
        path = temp_chart_path(config.output_dir)
        try:
            render_chart(run.spec, path)
        except Exception:
            # Don't leave the empty placeholder behind
            path.unlink(missing_ok=True)
            raise

    if spec_json:
        export_chart_spec(run.spec, Path(spec_json))

    if open_viewer is None:
        open_viewer = config.open_viewer
    if open_viewer:
        open_in_viewer(path)

    logger.info("Wrote %s (%d rows)", path, len(run.rows))
    return ChartResult(status=200, message="OK", path=path)

"""
Growth chart pipeline: table text in, chart spec out.
"""

from .assembler import assemble_series
from .chart_spec import build_chart_spec
from .enricher import enrich_row, enrich_rows
from .errors import (
    EmptyTableError,
    GrowthChartError,
    MalformedDateError,
    MalformedValueError,
    MissingRoleError,
    ReferenceLookupError,
)
from .loader import detect_delimiter, load_table
from .normalizer import normalize_row
from .pipeline import PipelineRun, generate_growth_chart, run_pipeline
from .roles import resolve_roles

__all__ = [
    "assemble_series",
    "build_chart_spec",
    "enrich_row",
    "enrich_rows",
    "EmptyTableError",
    "GrowthChartError",
    "MalformedDateError",
    "MalformedValueError",
    "MissingRoleError",
    "ReferenceLookupError",
    "detect_delimiter",
    "load_table",
    "normalize_row",
    "PipelineRun",
    "generate_growth_chart",
    "run_pipeline",
    "resolve_roles",
]

"""
JSON exporter for growthchart.

Exports a chart spec (series data, titles, colors, labels) as JSON so an
external renderer can draw it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from src.models import ChartSpec, EnrichedRow


def export_chart_spec(
    spec: ChartSpec,
    output_path: Path | None = None,
    indent: int = 2,
) -> str:
    """
    Export a chart spec to JSON format.

    Args:
        spec: The chart spec to export
        output_path: Optional path to write the JSON file
        indent: JSON indentation level

    Returns:
        JSON string representation of the chart spec
    """
    # Absent values stay as null so series remain row-aligned
    data = spec.model_dump(mode="json")

    json_str = json.dumps(data, indent=indent)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_str)

    return json_str


def export_rows_summary(rows: list[EnrichedRow]) -> list[dict[str, Any]]:
    """
    Flatten enriched rows for listings (one dict per input row).
    """
    return [
        {
            "row": row.row_index,
            "age": round(row.age, 2),
            "measured": row.measured,
            "z0": row.bands.z0,
            "z_score": row.z_score,
            "percentile": row.percentile,
        }
        for row in rows
    ]

"""
PNG chart renderer for growthchart.

Draws a ``ChartSpec`` with matplotlib and saves it as a PNG file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import click
import numpy as np
from matplotlib.figure import Figure

from src.models import ChartSpec, SeriesStyle

logger = logging.getLogger(__name__)


def temp_chart_path(output_dir: Path | None = None) -> Path:
    """Create an empty ``.png`` file with a generated name and return its path."""
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix="growthchart-", suffix=".png", dir=output_dir)
    os.close(fd)
    return Path(name)


def render_chart(
    spec: ChartSpec,
    output_path: Path,
    *,
    width: float = 8.0,
    height: float = 6.0,
    dpi: int = 100,
) -> Path:
    """
    Render a chart spec to a PNG file.

    Args:
        spec: Chart to draw; series are drawn in list order
        output_path: Destination PNG path
        width: Figure width in inches
        height: Figure height in inches
        dpi: Output resolution

    Returns:
        The path written
    """
    fig = Figure(figsize=(width, height))
    ax = fig.add_subplot(111)

    for series in spec.series:
        # None -> NaN so matplotlib leaves a gap
        y = np.array(series.y, dtype=float)
        if series.style == SeriesStyle.LINESPOINTS:
            ax.plot(
                series.x, y,
                color=series.color, linewidth=1.5, marker="o", markersize=4,
                label=series.title, zorder=3,
            )
        else:
            ax.plot(
                series.x, y,
                color=series.color, linewidth=1.0,
                label=series.title, zorder=2,
            )

    ax.set_title(spec.title, fontsize=11, fontweight="bold")
    ax.set_xlabel(spec.xlabel)
    ax.set_ylabel(spec.ylabel)
    ax.grid(linewidth=0.4, alpha=0.5)
    ax.legend(loc="upper left", bbox_to_anchor=(1.01, 1.0), fontsize=7, framealpha=0.9)
    fig.tight_layout(pad=1.5)

    output_path = Path(output_path)
    fig.savefig(output_path, dpi=dpi, format="png")
    logger.debug("Rendered %s to %s", spec.title, output_path)
    return output_path


def open_in_viewer(path: Path) -> None:
    """Open a rendered chart with the system's default viewer."""
    click.launch(str(path))

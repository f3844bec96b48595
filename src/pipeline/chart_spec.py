"""
Chart spec builder.

Packages a ``SeriesSet`` into the ordered, styled series list the renderer
draws. The order is fixed: measured, z0, z+1, z-1, z+2, z-2, z+3, z-3.
"""

from __future__ import annotations

from src.models import ChartKind, ChartSpec, SeriesDescriptor, SeriesSet, SeriesStyle

# (SeriesSet field, title suffix, color), in drawing order
BAND_SERIES: list[tuple[str, str, str]] = [
    ("z0", "z0", "green"),
    ("z1", "z+1", "orange"),
    ("z1neg", "z-1", "orange"),
    ("z2", "z+2", "red"),
    ("z2neg", "z-2", "red"),
    ("z3", "z+3", "black"),
    ("z3neg", "z-3", "black"),
]

MEASURED_COLOR = "blue"

Y_LABELS: dict[ChartKind, str] = {
    ChartKind.HEIGHT: "height (cm)",
    ChartKind.WEIGHT: "weight (kg)",
    ChartKind.BMI: "BMI",
}

X_LABEL = "age (years)"


def chart_title(which: ChartKind, name: str | None = None) -> str:
    title = f"WHO {which.value} chart"
    if name:
        title += f" for {name}"
    return title


def build_chart_spec(
    series: SeriesSet,
    which: ChartKind,
    name: str | None = None,
) -> ChartSpec:
    """
    Build the renderer-facing chart description.

    Args:
        series: Assembled sequences for ``which``; copied, not shared
        which: Chart kind
        name: Optional subject name shown in the title

    Returns:
        ChartSpec with exactly eight series
    """
    series = series.model_copy(deep=True)
    metric = which.value

    descriptors = [
        SeriesDescriptor(
            title=metric,
            x=series.ages,
            y=series.measured,
            color=MEASURED_COLOR,
            style=SeriesStyle.LINESPOINTS,
        )
    ]
    for field, suffix, color in BAND_SERIES:
        descriptors.append(SeriesDescriptor(
            title=f"{metric} {suffix}",
            x=series.ages,
            y=getattr(series, field),
            color=color,
            style=SeriesStyle.LINES,
        ))

    return ChartSpec(
        kind=which,
        title=chart_title(which, name),
        xlabel=X_LABEL,
        ylabel=Y_LABELS[which],
        series=descriptors,
    )

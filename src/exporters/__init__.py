"""
Chart output for growthchart.
"""

from .json_export import export_chart_spec, export_rows_summary
from .png import open_in_viewer, render_chart, temp_chart_path

__all__ = [
    "export_chart_spec",
    "export_rows_summary",
    "open_in_viewer",
    "render_chart",
    "temp_chart_path",
]

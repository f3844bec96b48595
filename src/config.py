"""
Runtime configuration for growthchart.

Settings come from environment variables; CLI options override them.
"""

import logging
import os
from pathlib import Path
from typing import Optional

_FALSE_VALUES = {"0", "false", "no", "off"}


class ChartConfig:
  """Configuration for chart output and the reference lookup."""

  def __init__(self):
    output_dir = os.environ.get("GROWTHCHART_OUTPUT_DIR")
    reference_file = os.environ.get("GROWTHCHART_REFERENCE_FILE")

    self.output_dir: Optional[Path] = Path(output_dir) if output_dir else None
    self.reference_file: Optional[Path] = Path(reference_file) if reference_file else None
    self.open_viewer = os.environ.get("GROWTHCHART_OPEN_VIEWER", "1").strip().lower() not in _FALSE_VALUES
    self.log_level = os.environ.get("GROWTHCHART_LOG_LEVEL", "WARNING").upper()

  @property
  def log_level_number(self) -> int:
    """Numeric log level; unknown names fall back to WARNING."""
    level = logging.getLevelName(self.log_level)
    return level if isinstance(level, int) else logging.WARNING

  def validate(self) -> None:
    """Raise error if a configured path is unusable."""
    if self.reference_file and not self.reference_file.is_file():
      raise ValueError(f"GROWTHCHART_REFERENCE_FILE not found: {self.reference_file}")
    if self.output_dir and self.output_dir.exists() and not self.output_dir.is_dir():
      raise ValueError(f"GROWTHCHART_OUTPUT_DIR is not a directory: {self.output_dir}")


def get_config() -> ChartConfig:
  """Read configuration from the current environment."""
  return ChartConfig()

"""
Growth reference calculations.
"""

from .reference import (
    DEFAULT_REFERENCE_FILE,
    GrowthReference,
    LmsTable,
)

__all__ = [
    "DEFAULT_REFERENCE_FILE",
    "GrowthReference",
    "LmsTable",
]

"""
Growth reference lookups.
"""

from .base import ReferenceLookup, ReferenceRequest, ReferenceResponse
from .tables import TableReferenceLookup

__all__ = [
    "ReferenceLookup",
    "ReferenceRequest",
    "ReferenceResponse",
    "TableReferenceLookup",
]

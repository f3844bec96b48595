"""
Reference lookup interface.

The chart pipeline never computes reference curves itself; it asks a
``ReferenceLookup`` for the SD band values at each observation's age.
Any backend (bundled LMS tables, a remote service, a test stub) plugs in
by implementing ``lookup``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from src.models import Gender


class ReferenceRequest(BaseModel):
    """
    One lookup: gender plus either (dob, now) or an age in seconds.

    Height and weight are only sent when the chart kind needs them.
    """
    gender: Gender
    dob: date | None = None
    now: datetime | None = None
    age: float | None = Field(default=None, description="Age in seconds")
    height: float | None = Field(default=None, description="Height in cm")
    weight: float | None = Field(default=None, description="Weight in kg")


class ReferenceResponse(BaseModel):
    """
    Lookup result in (status, message, data) form.

    On success ``data`` carries ``age`` (a string whose leading number is
    the age in months) and ``{metric}_SD0`` .. ``{metric}_SD3neg`` fields.
    """
    status: int
    message: str = ""
    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == 200


class ReferenceLookup(ABC):
    """Capability interface for growth reference backends."""

    @abstractmethod
    def lookup(self, request: ReferenceRequest) -> ReferenceResponse:
        """Return reference values for one observation."""
        ...

"""
Column role resolution.

Header names are free-form, so each semantic role is found by a
case-insensitive pattern search over the sorted header names. The first
match in sorted order wins, which keeps the choice independent of the
column order in the file.
"""

from __future__ import annotations

import logging
import re

from src.models import ChartKind, ColumnRole, ColumnRoleMap

from .errors import MissingRoleError

logger = logging.getLogger(__name__)


ROLE_PATTERNS: list[tuple[ColumnRole, re.Pattern[str]]] = [
    (ColumnRole.AGE, re.compile(r"age", re.IGNORECASE)),
    (ColumnRole.DATE, re.compile(r"date|time", re.IGNORECASE)),
    (ColumnRole.HEIGHT, re.compile(r"height", re.IGNORECASE)),
    (ColumnRole.WEIGHT, re.compile(r"weight", re.IGNORECASE)),
]


def match_role(columns: list[str], pattern: re.Pattern[str]) -> str | None:
    """Return the lexicographically first column matching ``pattern``."""
    for column in sorted(columns):
        if pattern.search(column):
            return column
    return None


def resolve_roles(columns: list[str], which: ChartKind) -> ColumnRoleMap:
    """
    Assign header names to the age/date/height/weight roles.

    Args:
        columns: Header names of the loaded table
        which: Chart kind being built; decides whether height and/or
            weight are mandatory

    Returns:
        ColumnRoleMap with unresolved roles left as None

    Raises:
        MissingRoleError: naming ``age/date``, ``height`` or ``weight``
    """
    resolved = {
        role.value: match_role(columns, pattern)
        for role, pattern in ROLE_PATTERNS
    }
    roles = ColumnRoleMap(**resolved)

    if roles.age is None and roles.date is None:
        raise MissingRoleError("age/date")
    if which.requires_height and roles.height is None:
        raise MissingRoleError(ColumnRole.HEIGHT.value)
    if which.requires_weight and roles.weight is None:
        raise MissingRoleError(ColumnRole.WEIGHT.value)

    logger.debug("Resolved column roles: %s", roles.model_dump())
    return roles

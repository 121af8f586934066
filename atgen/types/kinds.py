"""
Closed set of argument kinds that can cross the foreign boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Kind(Enum):
    """Classification of bindable argument types."""
    BOOLEAN = auto()         # bool, passed as int
    INTEGER = auto()         # int64_t
    FLOATING_POINT = auto()  # double
    HANDLE = auto()          # Opaque pointer to the primary value type
    INTEGER_LIST = auto()    # Pointer + length pair


@dataclass(frozen=True)
class ClassifiedArgument:
    """An argument that has been assigned a Kind."""
    name: str
    kind: Kind

"""
Native signature data structures.

These dataclasses hold a function signature as written in the schema,
before any decision is made about whether it can be bound.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Argument:
    """Function argument."""
    name: str
    declared_type: str  # Raw spelling, e.g. "Tensor", "int64_t", "IntList[2]"
    default: Optional[str] = None  # Kept verbatim, never evaluated

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def __str__(self) -> str:
        text = f"{self.declared_type} {self.name}"
        if self.default is not None:
            text += f"={self.default}"
        return text


@dataclass(frozen=True)
class Signature:
    """
    Parsed native function signature.

    Overloads share a name, so several signatures may compare unequal
    while having the same ``name``.
    """
    name: str
    arguments: tuple[Argument, ...] = field(default_factory=tuple)
    return_type: str = ""

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.name}({args}) -> {self.return_type}"

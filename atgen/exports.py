"""
Overload disambiguation.

Native functions are overloaded by name, C symbols are not. Every
representable signature receives a unique exported name: a lone
signature keeps its name, members of an overload group get a 1-based
suffix in the order they were discovered.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import SchemaError
from .parser.signature import Signature
from .types.kinds import ClassifiedArgument


@dataclass(frozen=True)
class ExportedFunction:
    """A representable signature together with its bound parameters."""
    signature: Signature
    params: tuple[ClassifiedArgument, ...]

    @property
    def name(self) -> str:
        return self.signature.name


class ExportTable(Mapping):
    """
    Read-only mapping from exported name to function.

    Iterates in sorted exported-name order so repeated runs emit the
    same files.
    """

    def __init__(self, entries: Iterable[tuple[str, ExportedFunction]]):
        table: dict[str, ExportedFunction] = {}
        for exported_name, func in entries:
            if exported_name in table:
                raise SchemaError(f"duplicate exported name {exported_name!r}")
            table[exported_name] = func
        self._table = dict(sorted(table.items()))

    def __getitem__(self, key: str) -> ExportedFunction:
        return self._table[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"ExportTable({list(self._table)!r})"


def disambiguate(functions: Iterable[ExportedFunction]) -> ExportTable:
    """
    Assign unique exported names to representable functions.

    Args:
        functions: Representable functions in discovery order

    Returns:
        The export table
    """
    groups: dict[str, list[ExportedFunction]] = {}
    for func in functions:
        groups.setdefault(func.name, []).append(func)

    entries = []
    for name, members in groups.items():
        if len(members) == 1:
            entries.append((name, members[0]))
        else:
            for i, func in enumerate(members, start=1):
                entries.append((f"{name}{i}", func))

    return ExportTable(entries)

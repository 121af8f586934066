"""
Reader for the native functions schema.

The schema is a YAML list of records::

    - func: add(Tensor self, Tensor other) -> Tensor
      variants: function, method

Only the ``func`` and ``variants`` keys are used. Any other deviation
from this shape means the upstream format changed and raises
SchemaError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml

from ..errors import SchemaError

logger = logging.getLogger("atgen.schema")


class Pairs(list):
    """A YAML mapping kept as its ordered (key, value) pairs."""

    def values_of(self, key: Any) -> list[Any]:
        return [v for k, v in self if k == key]

    def to_plain(self) -> Union[dict, list]:
        pairs = [(_plain(k), _plain(v)) for k, v in self]
        try:
            return dict(pairs)
        except TypeError:
            # Collection keys cannot be dict keys
            return [[k, v] for k, v in pairs]


def _plain(node: Any) -> Any:
    if isinstance(node, Pairs):
        return node.to_plain()
    if isinstance(node, list):
        return [_plain(n) for n in node]
    return node


class _PairsLoader(yaml.SafeLoader):
    """SafeLoader that keeps repeated mapping keys."""


def _construct_pairs(loader: _PairsLoader, node: yaml.MappingNode) -> Pairs:
    loader.flatten_mapping(node)
    return Pairs(
        (loader.construct_object(k, deep=True), loader.construct_object(v, deep=True))
        for k, v in node.value
    )


_PairsLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_pairs
)


def contains_string(node: Any, needle: str) -> bool:
    """
    Search a document fragment for a substring.

    Strings match by substring, sequences if any item matches and
    mappings if any value matches.
    """
    if isinstance(node, Pairs):
        return any(contains_string(v, needle) for _, v in node)
    if isinstance(node, list):
        return any(contains_string(n, needle) for n in node)
    if isinstance(node, str):
        return needle in node
    return False


@dataclass
class SchemaEntry:
    """One record of the schema."""
    func: str
    variants: list[Any] = field(default_factory=list)


class SchemaReader:
    """
    Loads schema records and keeps the free-function ones.
    """

    def __init__(self, function_variant: str = "function"):
        """
        Initialize the reader.

        Args:
            function_variant: Marker identifying free-function variants
        """
        self.function_variant = function_variant

    def read(self, path: Union[str, Path]) -> list[SchemaEntry]:
        """
        Read a schema file.

        Args:
            path: Path to the YAML document

        Returns:
            Free-function entries in document order
        """
        text = Path(path).read_text(encoding="utf-8")
        entries = self.load(text)
        logger.info("Read %s, got %d functions.", path, len(entries))
        return [e for e in entries if self.is_function(e)]

    def load(self, text: str) -> list[SchemaEntry]:
        """Parse and validate every record of a schema document."""
        try:
            root = yaml.load(text, Loader=_PairsLoader)
        except yaml.YAMLError as e:
            raise SchemaError(f"invalid YAML: {e}") from e

        if not isinstance(root, list) or isinstance(root, Pairs):
            raise SchemaError("expected list", _plain(root))

        return [self._entry(record) for record in root]

    def is_function(self, entry: SchemaEntry) -> bool:
        """Check whether an entry has a free-function variant."""
        if not entry.variants:
            return True
        return any(contains_string(v, self.function_variant) for v in entry.variants)

    def _entry(self, record: Any) -> SchemaEntry:
        if not isinstance(record, Pairs):
            raise SchemaError("expected map", _plain(record))

        funcs = record.values_of("func")
        if not funcs:
            raise SchemaError("missing func", record.to_plain())
        if len(funcs) > 1:
            raise SchemaError("multiple func", record.to_plain())

        func = funcs[0]
        if not isinstance(func, str):
            raise SchemaError("expected string", _plain(func))

        # Both "variants: a, b" and "variants: [a, b]" appear upstream
        variants = []
        for value in record.values_of("variants"):
            if isinstance(value, list) and not isinstance(value, Pairs):
                variants.extend(value)
            else:
                variants.append(value)

        return SchemaEntry(func=func, variants=variants)

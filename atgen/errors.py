"""
Error types for atgen.

Only schema corruption is an error. Signatures that cannot be bound are
filtered out by the pipeline and never raise.
"""

from __future__ import annotations

from typing import Any, Optional

import yaml


def _render_node(node: Any) -> str:
    """Render a document fragment for an error message."""
    try:
        text = yaml.safe_dump(node, default_flow_style=True, sort_keys=False)
    except yaml.YAMLError:
        text = repr(node)
    return text.strip()


class SchemaError(Exception):
    """
    Fatal schema corruption.

    Raised when the input document no longer has the shape the generator
    expects. Generation stops and no output is written.
    """

    def __init__(self, message: str, node: Optional[Any] = None):
        self.message = message
        self.node = node
        if node is not None:
            message = f"{message}, {_render_node(node)}"
        super().__init__(message)


class ConfigError(Exception):
    """Invalid atgen.toml contents."""

"""
Base classes for code generators.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jinja2 import Environment, PackageLoader, StrictUndefined

from ..config import CodegenConfig
from ..exports import ExportTable


@dataclass
class GeneratedFile:
    """Represents a generated file."""
    path: Path
    content: str
    entries: int = 0  # Number of generated items


class Generator(ABC):
    """
    Abstract base class for code generators.

    Subclasses render an export table into one or more output files.
    """

    def __init__(self, config: CodegenConfig):
        """
        Initialize the generator.

        Args:
            config: Codegen configuration
        """
        self.config = config
        self._env: Optional[Environment] = None

    @property
    def env(self) -> Environment:
        """Lazy-load Jinja2 environment."""
        if self._env is None:
            self._env = self._create_jinja_env()
        return self._env

    def _create_jinja_env(self) -> Environment:
        """Create and configure Jinja2 environment."""
        return Environment(
            loader=PackageLoader("atgen", "templates"),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    @abstractmethod
    def generate(self, exports: ExportTable) -> list[GeneratedFile]:
        """
        Generate output files from an export table.

        Args:
            exports: Functions to bind, keyed by exported name

        Returns:
            Generated files, not yet written
        """
        pass

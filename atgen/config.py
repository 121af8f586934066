"""
Configuration system for atgen.

Supports:
- TOML configuration files (atgen.toml)
- CLI argument overrides
- Library-specific naming (value type, namespace, exclusions)

The defaults reproduce the bindings of the torch C wrapper, so running
the generator without a config file gives the stock output.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


CONFIG_FILENAME = "atgen.toml"

# Operations whose bindings need to be written by hand
DEFAULT_EXCLUDED = ["bincount", "stft", "group_norm", "layer_norm"]


@dataclass
class PathsConfig:
    """Path configuration."""

    schema: Path = field(default_factory=lambda: Path("data/native_functions.yaml"))
    output_stem: Path = field(
        default_factory=lambda: Path("src/wrapper/torch_api_generated")
    )


@dataclass
class LibraryConfig:
    """Naming of the native library being bound."""

    value_type: str = "Tensor"
    namespace: str = "torch"
    handle_type: str = "tensor"
    function_prefix: str = "atg_"
    protect_macro: str = "PROTECT"
    list_constructor: str = "of_carray"
    internal_prefix: str = "_"
    excluded: frozenset[str] = field(
        default_factory=lambda: frozenset(DEFAULT_EXCLUDED)
    )

    def is_excluded(self, name: str) -> bool:
        """Check whether an operation is internal or needs a manual binding."""
        if self.internal_prefix and name.startswith(self.internal_prefix):
            return True
        return name in self.excluded


@dataclass
class TypesConfig:
    """Spellings recognized for each supported argument kind."""

    boolean: frozenset[str] = field(default_factory=lambda: frozenset({"bool"}))
    integer: frozenset[str] = field(default_factory=lambda: frozenset({"int64_t"}))
    floating: frozenset[str] = field(default_factory=lambda: frozenset({"double"}))
    int_list_prefix: str = "intlist"


@dataclass
class SchemaConfig:
    """Schema reading options."""

    function_variant: str = "function"
    rejected_markers: tuple[str, ...] = ("std::",)


@dataclass
class CodegenConfig:
    """Main configuration container."""

    project_root: Path = field(default_factory=Path.cwd)
    paths: PathsConfig = field(default_factory=PathsConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)
    types: TypesConfig = field(default_factory=TypesConfig)
    schema: SchemaConfig = field(default_factory=SchemaConfig)

    def __post_init__(self):
        """Ensure project_root is a Path."""
        if isinstance(self.project_root, str):
            self.project_root = Path(self.project_root)

    @classmethod
    def from_file(cls, path: Path) -> "CodegenConfig":
        """Load configuration from a TOML file."""
        with open(path, "rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(f"{path}: {e}") from e

        return cls._from_dict(data, path.parent)

    @classmethod
    def _from_dict(cls, data: dict, base_path: Path) -> "CodegenConfig":
        """Create config from dictionary."""
        paths_data = _section(data, "paths")
        lib_data = _section(data, "library")
        types_data = _section(data, "types")
        schema_data = _section(data, "schema")

        defaults = LibraryConfig()

        paths = PathsConfig(
            schema=Path(_string(paths_data, "paths", "schema", "data/native_functions.yaml")),
            output_stem=Path(
                _string(paths_data, "paths", "output_stem", "src/wrapper/torch_api_generated")
            ),
        )

        def lib_string(key: str) -> str:
            return _string(lib_data, "library", key, getattr(defaults, key))

        library = LibraryConfig(
            value_type=lib_string("value_type"),
            namespace=lib_string("namespace"),
            handle_type=lib_string("handle_type"),
            function_prefix=lib_string("function_prefix"),
            protect_macro=lib_string("protect_macro"),
            list_constructor=lib_string("list_constructor"),
            internal_prefix=lib_string("internal_prefix"),
            excluded=frozenset(_string_list(lib_data, "library", "excluded", DEFAULT_EXCLUDED)),
        )

        def spellings(key: str, default: list[str]) -> frozenset[str]:
            return frozenset(s.lower() for s in _string_list(types_data, "types", key, default))

        # Spellings are matched against lower-cased declared types
        types = TypesConfig(
            boolean=spellings("boolean", ["bool"]),
            integer=spellings("integer", ["int64_t"]),
            floating=spellings("floating", ["double"]),
            int_list_prefix=_string(types_data, "types", "int_list_prefix", "intlist").lower(),
        )

        schema = SchemaConfig(
            function_variant=_string(schema_data, "schema", "function_variant", "function"),
            rejected_markers=tuple(
                _string_list(schema_data, "schema", "rejected_markers", ["std::"])
            ),
        )

        return cls(
            project_root=base_path,
            paths=paths,
            library=library,
            types=types,
            schema=schema,
        )

    @classmethod
    def find_config(cls, start_path: Optional[Path] = None) -> Optional[Path]:
        """Find atgen.toml in current or parent directories."""
        if start_path is None:
            start_path = Path.cwd()

        current = start_path.resolve()

        for _ in range(10):  # Max 10 levels up
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return config_path

            parent = current.parent
            if parent == current:
                break
            current = parent

        return None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "CodegenConfig":
        """Load configuration, auto-discovering if path not provided."""
        if config_path is None:
            config_path = cls.find_config()

        if config_path is not None and config_path.exists():
            return cls.from_file(config_path)

        # Return default config with current directory as root
        return cls(project_root=Path.cwd())

    def resolve_path(self, path: Path) -> Path:
        """Resolve a relative path against project root."""
        if path.is_absolute():
            return path
        return self.project_root / path

    @property
    def schema_abs(self) -> Path:
        """Absolute path to the schema document."""
        return self.resolve_path(self.paths.schema)

    @property
    def declarations_path(self) -> Path:
        """Path of the generated declarations header."""
        stem = self.resolve_path(self.paths.output_stem)
        return stem.with_name(stem.name + ".h")

    @property
    def implementations_path(self) -> Path:
        """Path of the generated implementations file."""
        stem = self.resolve_path(self.paths.output_stem)
        return stem.with_name(stem.name + ".cpp.h")


def _section(data: dict, name: str) -> dict:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table, got {value!r}")
    return value


def _string(section: dict, name: str, key: str, default: str) -> str:
    value: Any = section.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"[{name}] {key} must be a string, got {value!r}")
    return value


def _string_list(section: dict, name: str, key: str, default: list[str]) -> list[str]:
    """Read a list of strings, rejecting a bare string."""
    value: Any = section.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"[{name}] {key} must be a list of strings, got {value!r}")
    return value

"""
ATen Binding Generator

Turns the native function schema published by the tensor library build
into C declarations and implementations callable through a foreign
function interface.
"""

__version__ = "0.1.0"
__author__ = "atgen developers"

from .config import CodegenConfig
from .errors import ConfigError, SchemaError

__all__ = ["CodegenConfig", "ConfigError", "SchemaError", "__version__"]

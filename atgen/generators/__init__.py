"""
Code generators.
"""

from .base import Generator, GeneratedFile
from .c_binding import CBindingGenerator, BANNER

__all__ = [
    "Generator",
    "GeneratedFile",
    "CBindingGenerator",
    "BANNER",
]

"""
Schema document reading.
"""

from .reader import SchemaEntry, SchemaReader, contains_string

__all__ = ["SchemaEntry", "SchemaReader", "contains_string"]

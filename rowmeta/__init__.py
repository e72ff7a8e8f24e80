"""
rowmeta - Value metadata for typed-row data processing.

This package provides the engine side of column value handling:
- Value-meta interface and shared base configuration
- Binary stream framing primitives
- Database dialect descriptors, parameter binders and result rows
- A registry of value types keyed by numeric type code
"""

__version__ = "0.1.0"

from rowmeta.core.database import DatabaseDialect, ResultRow, SqlType
from rowmeta.core.registry import create_value_meta, get_value_meta, value_meta_plugin
from rowmeta.core.value_meta import ValueMetaBase, ValueMetaInterface

__all__ = [
    "DatabaseDialect",
    "ResultRow",
    "SqlType",
    "ValueMetaBase",
    "ValueMetaInterface",
    "create_value_meta",
    "get_value_meta",
    "value_meta_plugin",
    "__version__",
]

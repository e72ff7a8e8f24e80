"""Core functionality for rowmeta."""

from rowmeta.core.database import (
    DatabaseDialect,
    DbApiStatement,
    ParameterBinder,
    PsycopgStatement,
    ResultRow,
    SqlType,
    dialect_from_connection,
)
from rowmeta.core.registry import (
    ValueMetaPlugin,
    ValueMetaRegistry,
    create_value_meta,
    get_value_meta,
    list_value_metas,
    value_meta_plugin,
)
from rowmeta.core.value_meta import ValueMetaBase, ValueMetaInterface

__all__ = [
    "DatabaseDialect",
    "DbApiStatement",
    "ParameterBinder",
    "PsycopgStatement",
    "ResultRow",
    "SqlType",
    "ValueMetaBase",
    "ValueMetaInterface",
    "ValueMetaPlugin",
    "ValueMetaRegistry",
    "create_value_meta",
    "dialect_from_connection",
    "get_value_meta",
    "list_value_metas",
    "value_meta_plugin",
]

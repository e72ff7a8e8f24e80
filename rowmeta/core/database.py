"""
Database boundary used by value-meta handlers.

Provides the dialect descriptor that column definitions are mapped against,
the parameter binders handlers bind statement values through, and the
result row accessor they read values from.
"""

from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

import psycopg
from psycopg.adapt import PyFormat

logger = logging.getLogger(__name__)


class SqlType(IntEnum):
    """SQL type codes for typed NULL binds (java.sql.Types numbering)."""

    VARCHAR = 12
    BINARY = -2
    OTHER = 1111


@dataclass(frozen=True)
class DatabaseDialect:
    """
    Capability descriptor of a target database.

    Attributes:
        plugin_id: Dialect identifier (e.g. "POSTGRESQL", "H2", "MSSQLNATIVE")
        postgres_variant: Speaks the PostgreSQL type system
        mssql_server_native_variant: Microsoft SQL Server with the native driver
    """

    plugin_id: str
    postgres_variant: bool = False
    mssql_server_native_variant: bool = False

    def get_plugin_id(self) -> str:
        return self.plugin_id

    def is_postgres_variant(self) -> bool:
        return self.postgres_variant

    def is_mssql_server_native_variant(self) -> bool:
        return self.mssql_server_native_variant

    @classmethod
    def from_plugin_id(cls, plugin_id: str) -> DatabaseDialect:
        """
        Look up a known dialect by identifier (case-insensitive).

        Unknown identifiers yield a dialect with no special capabilities.

        Example:
            >>> DatabaseDialect.from_plugin_id("postgresql").is_postgres_variant()
            True
        """
        return KNOWN_DIALECTS.get(plugin_id.upper(), cls(plugin_id=plugin_id.upper()))


KNOWN_DIALECTS: dict[str, DatabaseDialect] = {
    d.plugin_id: d
    for d in (
        DatabaseDialect("POSTGRESQL", postgres_variant=True),
        DatabaseDialect("GREENPLUM", postgres_variant=True),
        DatabaseDialect("REDSHIFT", postgres_variant=True),
        DatabaseDialect("COCKROACHDB", postgres_variant=True),
        DatabaseDialect("MSSQLNATIVE", mssql_server_native_variant=True),
        DatabaseDialect("MSSQL"),
        DatabaseDialect("H2"),
        DatabaseDialect("MYSQL"),
        DatabaseDialect("ORACLE"),
        DatabaseDialect("SQLITE"),
        DatabaseDialect("GENERIC"),
    )
}


def dialect_from_connection(conn: Any) -> DatabaseDialect:
    """Infer the dialect of an open DB-API connection."""
    if isinstance(conn, psycopg.Connection):
        return KNOWN_DIALECTS["POSTGRESQL"]
    if isinstance(conn, sqlite3.Connection):
        return KNOWN_DIALECTS["SQLITE"]
    return KNOWN_DIALECTS["GENERIC"]


class ParameterBinder(ABC):
    """Positional (1-based) parameter sink of a prepared statement."""

    @abstractmethod
    def set_object(self, index: int, value: Any) -> None:
        """
        Bind a native object, trusting the driver to adapt it.

        Raises:
            Exception: Whatever the driver raises when it cannot adapt the value
        """
        pass

    @abstractmethod
    def set_string(self, index: int, value: str) -> None:
        pass

    @abstractmethod
    def set_null(self, index: int, sql_type: SqlType) -> None:
        pass


class _ListBinder(ParameterBinder):
    """Collects bound parameters into a positional list."""

    def __init__(self) -> None:
        self.params: list[Any] = []

    def _set(self, index: int, value: Any) -> None:
        if index < 1:
            raise IndexError(f"Parameter index out of range: {index} (indices start at 1)")
        while len(self.params) < index:
            self.params.append(None)
        self.params[index - 1] = value

    def set_string(self, index: int, value: str) -> None:
        self._set(index, str(value))

    def set_null(self, index: int, sql_type: SqlType) -> None:
        self._set(index, None)


class PsycopgStatement(_ListBinder):
    """
    Binder for a psycopg cursor.

    ``set_object`` accepts a value only if the cursor's adapters know how to
    dump its type; otherwise psycopg raises ``ProgrammingError``.
    """

    def __init__(self, cursor: Any, sql: str):
        super().__init__()
        self.cursor = cursor
        self.sql = sql

    def set_object(self, index: int, value: Any) -> None:
        self.cursor.adapters.get_dumper(type(value), PyFormat.AUTO)
        self._set(index, value)

    def execute(self) -> Any:
        logger.debug(f"Executing with {len(self.params)} parameter(s): {self.sql}")
        return self.cursor.execute(self.sql, self.params)


class DbApiStatement(_ListBinder):
    """
    Binder for any DB-API 2.0 cursor.

    Args:
        cursor: DB-API cursor
        sql: Statement text with positional placeholders
        native_types: Types the driver accepts as parameters without conversion
    """

    def __init__(self, cursor: Any, sql: str, native_types: tuple[type, ...] = (str, int, float, bytes)):
        super().__init__()
        self.cursor = cursor
        self.sql = sql
        self.native_types = native_types

    def set_object(self, index: int, value: Any) -> None:
        if not isinstance(value, self.native_types):
            raise TypeError(f"Driver cannot bind parameter of type {type(value).__name__}")
        self._set(index, value)

    def execute(self) -> Any:
        logger.debug(f"Executing with {len(self.params)} parameter(s): {self.sql}")
        return self.cursor.execute(self.sql, self.params)


class ResultRow:
    """1-based column access over a fetched row tuple."""

    def __init__(self, values: Optional[tuple[Any, ...]]):
        if values is None:
            raise ValueError("No current row: the result set is exhausted")
        self.values = tuple(values)

    def get_object(self, column_index: int) -> Any:
        if column_index < 1 or column_index > len(self.values):
            raise IndexError(
                f"Column index out of range: {column_index} (row has {len(self.values)} columns)"
            )
        return self.values[column_index - 1]

    def __len__(self) -> int:
        return len(self.values)

"""
Value metadata interface and shared base implementation.

Every column in a row carries a value-meta handler. Handlers implement
``ValueMetaInterface`` and compose a ``ValueMetaBase`` for the configuration
and default behavior they do not override.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import IO, Any, Optional

# Line terminator appended to column definitions
CR = os.linesep

DEFAULT_STRING_ENCODING = "UTF-8"

STORAGE_TYPE_NORMAL = "normal"
STORAGE_TYPE_BINARY_STRING = "binary-string"
STORAGE_TYPE_INDEXED = "indexed"

STORAGE_TYPES = (STORAGE_TYPE_NORMAL, STORAGE_TYPE_BINARY_STRING, STORAGE_TYPE_INDEXED)


def _is_none(value: Any) -> bool:
    return value is None


@dataclass
class ValueMetaBase:
    """
    Configuration and default behavior shared by all value types.

    Attributes:
        type_id: Numeric type code from the type registry
        type_desc: Human name of the type (e.g. "UUID")
        name: Column name
        sort_descending: Reverse the sign of comparisons
        storage_type: One of STORAGE_TYPES
        identical_format: Binary-string payload needs no transformation
        string_encoding: Charset for text payloads (None means UTF-8)
        null_predicate: Decides whether a raw value counts as null
    """

    type_id: int
    type_desc: str
    name: Optional[str] = None
    sort_descending: bool = False
    storage_type: str = STORAGE_TYPE_NORMAL
    identical_format: bool = True
    string_encoding: Optional[str] = None
    null_predicate: Callable[[Any], bool] = field(default=_is_none, repr=False)

    def __post_init__(self) -> None:
        if self.storage_type not in STORAGE_TYPES:
            raise ValueError(
                f"Unknown storage type: {self.storage_type}. "
                f"Available: {', '.join(STORAGE_TYPES)}"
            )

    @property
    def encoding(self) -> str:
        """Configured charset, falling back to UTF-8."""
        return self.string_encoding or DEFAULT_STRING_ENCODING

    def is_storage_binary_string(self) -> bool:
        return self.storage_type == STORAGE_TYPE_BINARY_STRING

    def is_null(self, value: Any) -> bool:
        """None is always null; the predicate can only add more null values."""
        return value is None or self.null_predicate(value)

    def to_string_meta(self) -> str:
        """Describe the column, e.g. ``id UUID``."""
        if self.name is None:
            return self.type_desc
        return f"{self.name} {self.type_desc}"

    def copy(self) -> ValueMetaBase:
        return replace(self)

    def column_definition(self, type_definition: str, add_field_name: bool, add_cr: bool) -> str:
        """Wrap a bare SQL type with the optional column name and line terminator."""
        col = f"{self.name} " if add_field_name else ""
        return col + type_definition + (CR if add_cr else "")


class ValueMetaInterface(ABC):
    """Contracts a value type provides to the row engine."""

    base: ValueMetaBase

    @property
    def name(self) -> Optional[str]:
        return self.base.name

    @property
    def type_id(self) -> int:
        return self.base.type_id

    def is_null(self, value: Any) -> bool:
        return self.base.is_null(value)

    def is_sorted_descending(self) -> bool:
        return self.base.sort_descending

    def to_string_meta(self) -> str:
        return self.base.to_string_meta()

    def __str__(self) -> str:
        return self.to_string_meta()

    @abstractmethod
    def clone(self) -> ValueMetaInterface:
        """Return a handler with the same configuration."""
        pass

    @abstractmethod
    def get_native_data_type_class(self) -> type:
        pass

    @abstractmethod
    def convert_data(self, value: Any) -> Any:
        """
        Coerce a value of unknown origin to the native type.

        Raises:
            ValueConversionError: If the value cannot be converted
        """
        pass

    @abstractmethod
    def clone_value_data(self, value: Any) -> Any:
        pass

    @abstractmethod
    def hash_code(self, value: Any) -> int:
        pass

    @abstractmethod
    def compare(self, value1: Any, value2: Any) -> int:
        """Return -1, 0 or 1, honoring null placement and sort direction."""
        pass

    @abstractmethod
    def get_string(self, value: Any) -> Optional[str]:
        pass

    @abstractmethod
    def get_binary_string(self, value: Any) -> Optional[bytes]:
        pass

    @abstractmethod
    def convert_binary_string_to_native_type(self, data: Optional[bytes]) -> Any:
        pass

    @abstractmethod
    def write_data(self, stream: IO[bytes], value: Any) -> None:
        pass

    @abstractmethod
    def read_data(self, stream: IO[bytes]) -> Any:
        pass

    @abstractmethod
    def get_database_column_type_definition(
        self,
        dialect: Any,
        tk: Optional[str] = None,
        pk: Optional[str] = None,
        use_autoinc: bool = False,
        add_field_name: bool = True,
        add_cr: bool = True,
    ) -> str:
        pass

    @abstractmethod
    def set_prepared_statement_value(self, dialect: Any, binder: Any, index: int, value: Any) -> None:
        pass

    @abstractmethod
    def get_value_from_result_set(self, dialect: Any, row: Any, index: int) -> Any:
        pass

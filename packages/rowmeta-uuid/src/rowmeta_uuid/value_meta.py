"""UUID value type."""

import logging
import uuid
from collections.abc import Callable
from typing import IO, Any, Optional

from rowmeta.config import ValueMetaSettings
from rowmeta.core.database import DatabaseDialect, ParameterBinder, ResultRow, SqlType
from rowmeta.core.registry import value_meta_plugin
from rowmeta.core.stream import ShortReadError, pack_boolean, pack_int, read_boolean, read_fully, read_int
from rowmeta.core.value_meta import STORAGE_TYPE_NORMAL, ValueMetaBase, ValueMetaInterface
from rowmeta.exceptions import (
    CodecError,
    DatabaseBindingError,
    DatabaseReadError,
    EndOfStreamError,
    ValueConversionError,
)

logger = logging.getLogger(__name__)

TYPE_UUID = 77


@value_meta_plugin(id=TYPE_UUID, name="UUID", description="Universally Unique Identifier")
class ValueMetaUuid(ValueMetaInterface):
    """
    Value-meta handler for UUID columns.

    The native value is ``uuid.UUID``. Strings (any case, surrounding
    whitespace allowed) and encoded bytes are accepted wherever a value is
    expected and converted on the way in.

    One instance serves one column for its whole lifetime; it keeps no
    per-value state and is safe to share between threads.

    Example:
        >>> meta = ValueMetaUuid("id")
        >>> meta.get_string(" 123E4567-E89B-12D3-A456-426614174000 ")
        '123e4567-e89b-12d3-a456-426614174000'
    """

    def __init__(
        self,
        name: Optional[str] = None,
        sort_descending: bool = False,
        storage_type: str = STORAGE_TYPE_NORMAL,
        identical_format: bool = True,
        string_encoding: Optional[str] = None,
        null_predicate: Optional[Callable[[Any], bool]] = None,
    ):
        options: dict[str, Any] = {}
        if null_predicate is not None:
            options["null_predicate"] = null_predicate
        self.base = ValueMetaBase(
            type_id=TYPE_UUID,
            type_desc="UUID",
            name=name,
            sort_descending=sort_descending,
            storage_type=storage_type,
            identical_format=identical_format,
            string_encoding=string_encoding,
            **options,
        )

    @classmethod
    def from_settings(cls, name: Optional[str], settings: ValueMetaSettings) -> "ValueMetaUuid":
        """Build a handler for a column from configured defaults."""
        return cls(
            name,
            sort_descending=settings.sort_descending,
            storage_type=settings.storage_type,
            identical_format=settings.identical_format,
            string_encoding=settings.string_encoding,
        )

    def clone(self) -> "ValueMetaUuid":
        meta = ValueMetaUuid.__new__(ValueMetaUuid)
        meta.base = self.base.copy()
        return meta

    def get_native_data_type_class(self) -> type:
        return uuid.UUID

    def convert_data(self, value: Any) -> Optional[uuid.UUID]:
        if value is None:
            return None
        if isinstance(value, uuid.UUID):
            return value

        if isinstance(value, (bytes, bytearray)):
            try:
                text = bytes(value).decode(self.base.encoding)
            except (LookupError, UnicodeDecodeError) as e:
                raise ValueConversionError(str(self), value, "UUID", reason=str(e)) from e
        else:
            text = str(value)

        try:
            return uuid.UUID(text.strip())
        except ValueError as e:
            raise ValueConversionError(str(self), value, "UUID") from e

    def clone_value_data(self, value: Any) -> Any:
        # immutable
        return value

    def hash_code(self, value: Any) -> int:
        u = self.convert_data(value)
        return 0 if u is None else hash(u)

    def compare(self, value1: Any, value2: Any) -> int:
        n1 = self.is_null(value1)
        n2 = self.is_null(value2)

        if n1 and n2:
            return 0
        if n1:
            cmp = -1
        elif n2:
            cmp = 1
        else:
            cmp = self._type_compare(self.convert_data(value1), self.convert_data(value2))

        return -cmp if self.is_sorted_descending() else cmp

    @staticmethod
    def _type_compare(u1: Optional[uuid.UUID], u2: Optional[uuid.UUID]) -> int:
        """Compare converted values as unsigned 128-bit integers, None first."""
        if u1 is None or u2 is None:
            return (u1 is not None) - (u2 is not None)
        return (u1.int > u2.int) - (u1.int < u2.int)

    def get_string(self, value: Any) -> Optional[str]:
        u = self.convert_data(value)
        return None if u is None else str(u)

    def get_binary_string(self, value: Any) -> Optional[bytes]:
        if self.base.is_storage_binary_string() and self.base.identical_format:
            if value is None or isinstance(value, (bytes, bytearray)):
                return value

        u = self.convert_data(value)
        if u is None:
            return None
        return self._encode(u)

    def _encode(self, u: uuid.UUID) -> bytes:
        try:
            return str(u).encode(self.base.encoding)
        except LookupError as e:
            raise ValueConversionError(
                str(self), u, "UUID", reason=f"unsupported encoding {self.base.encoding}"
            ) from e

    def convert_binary_string_to_native_type(self, data: Optional[bytes]) -> Optional[uuid.UUID]:
        if data is None:
            return None
        return self.convert_data(bytes(data))

    def write_data(self, stream: IO[bytes], value: Any) -> None:
        """
        Write one value as ``flag [length payload]``.

        The frame is assembled before anything is written, so a value that
        fails conversion leaves the stream untouched.

        Raises:
            CodecError: If the value cannot be converted or the write fails
        """
        try:
            u = None if self.is_null(value) else self.convert_data(value)
            if u is None:
                frame = pack_boolean(True)
            else:
                payload = self._encode(u)
                frame = pack_boolean(False) + pack_int(len(payload)) + payload
        except ValueConversionError as e:
            raise CodecError(
                f"{self} : Unable to convert data to UUID before writing to output stream"
            ) from e

        try:
            stream.write(frame)
        except OSError as e:
            raise CodecError(f"{self} : Unable to write value data to output stream") from e

    def read_data(self, stream: IO[bytes]) -> Optional[uuid.UUID]:
        """
        Read one value written by ``write_data``.

        A negative length is read as null, for producers that mark nulls that
        way instead of setting the flag.

        Raises:
            EndOfStreamError: If the stream ends inside the frame
            TimeoutError: If the underlying channel timed out (not wrapped)
            CodecError: On any other I/O failure or an invalid payload
        """
        try:
            if read_boolean(stream):
                return None

            length = read_int(stream)
            if length < 0:
                logger.debug(f"{self} : negative length {length} read as null")
                return None

            return self.convert_binary_string_to_native_type(read_fully(stream, length))
        except ShortReadError as e:
            raise EndOfStreamError(str(self), e.expected, e.received) from e
        except TimeoutError:
            raise
        except OSError as e:
            raise CodecError(f"{self} : Unable to read UUID value data from input stream") from e
        except ValueConversionError as e:
            raise CodecError(f"{self} : Error reading UUID") from e

    def get_database_column_type_definition(
        self,
        dialect: DatabaseDialect,
        tk: Optional[str] = None,
        pk: Optional[str] = None,
        use_autoinc: bool = False,
        add_field_name: bool = True,
        add_cr: bool = True,
    ) -> str:
        definition = "VARCHAR(36)"
        if dialect.is_postgres_variant() or dialect.get_plugin_id().upper() == "H2":
            definition = "UUID"
        elif dialect.is_mssql_server_native_variant():
            definition = "UNIQUEIDENTIFIER"
        return self.base.column_definition(definition, add_field_name, add_cr)

    def set_prepared_statement_value(
        self,
        dialect: DatabaseDialect,
        binder: ParameterBinder,
        index: int,
        value: Any,
    ) -> None:
        """
        Bind a value, natively when the driver accepts ``uuid.UUID``.

        Drivers differ in whether they accept a UUID object and there is no
        reliable way to ask, so the native bind is attempted first and the
        canonical string is bound if it fails.

        Raises:
            DatabaseBindingError: If conversion or the string bind fails
        """
        try:
            u = self.convert_data(value)
            if u is None:
                binder.set_null(index, SqlType.OTHER)
                return

            error = self._bind_native(binder, index, u)
            if error is None:
                return

            logger.debug(f"{self} : native bind rejected ({error!r}), binding as string")
            binder.set_string(index, str(u))
        except Exception as e:
            raise DatabaseBindingError(str(self), index, value) from e

    @staticmethod
    def _bind_native(binder: ParameterBinder, index: int, u: uuid.UUID) -> Optional[Exception]:
        """Attempt the native bind, returning the driver's error instead of raising it."""
        try:
            binder.set_object(index, u)
        except Exception as e:
            # Any failure counts as "type not supported", including driver
            # errors unrelated to the parameter type.
            return e
        return None

    def get_value_from_result_set(
        self, dialect: DatabaseDialect, row: ResultRow, index: int
    ) -> Optional[uuid.UUID]:
        """
        Read the column at a 0-based index from a result row.

        Raises:
            DatabaseReadError: If extraction or conversion fails
        """
        try:
            return self.convert_data(row.get_object(index + 1))
        except Exception as e:
            raise DatabaseReadError(self.to_string_meta(), index) from e

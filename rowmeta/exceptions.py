"""Error kinds raised by value-meta handlers."""

from typing import Any


class RowMetaError(Exception):
    """Base exception for rowmeta errors."""

    pass


class ValueConversionError(RowMetaError):
    """Value cannot be coerced to the handler's native type."""

    def __init__(self, meta: str, value: Any, target_type: str, reason: str | None = None):
        self.value = value
        self.target_type = target_type
        message = (
            f"{meta} : I can't convert the specified value to data type : {target_type}\n"
            f"Value: {value!r}"
        )
        if reason:
            message += f"\nReason: {reason}"
        super().__init__(message)


ConversionError = ValueConversionError


class CodecError(RowMetaError):
    """Binary stream read/write failed for a reason other than exhaustion."""

    pass


class EndOfStreamError(RowMetaError, EOFError):
    """Read attempted past the end of the available stream data."""

    def __init__(self, meta: str, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"{meta} : end of stream reached, "
            f"expected {expected} byte(s) but only {received} available"
        )


class ValueMetaDatabaseError(RowMetaError):
    """Failure at the SQL boundary."""

    pass


class DatabaseBindingError(ValueMetaDatabaseError):
    """Could not bind a value as a statement parameter."""

    def __init__(self, meta: str, index: int, value: Any):
        self.index = index
        self.value = value
        super().__init__(
            f"{meta} : Unable to set UUID parameter at index {index}\n"
            f"Value: {value!r}"
        )


class DatabaseReadError(ValueMetaDatabaseError):
    """Could not read a value from a result row."""

    def __init__(self, meta: str, index: int):
        self.index = index
        super().__init__(
            f"Unable to get value '{meta}' from database resultset, index {index}"
        )


class DuplicateValueMetaError(RowMetaError):
    """A value type was registered twice under the same id or name."""

    def __init__(self, type_id: int, name: str, existing: str):
        super().__init__(
            f"Value type '{name}' (id {type_id}) conflicts with registered type '{existing}'.\n\n"
            f"Suggestions:\n"
            f"1. Pick a type id that is not in list_value_metas()\n"
            f"2. Call clear() on the registry before re-registering in tests"
        )


class UnknownValueMetaError(RowMetaError):
    """No value type is registered under the requested id or name."""

    def __init__(self, key: int | str, available: list[str]):
        super().__init__(
            f"Unknown value type: {key}. "
            f"Available: {', '.join(available) or '(none)'}"
        )

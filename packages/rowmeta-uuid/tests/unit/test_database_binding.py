"""Tests for ValueMetaUuid column mapping, parameter binding and result reads."""

import os
import uuid

import psycopg
import pytest
from psycopg.adapt import AdaptersMap

from rowmeta.core.database import (
    DatabaseDialect,
    DbApiStatement,
    ParameterBinder,
    PsycopgStatement,
    ResultRow,
    SqlType,
)
from rowmeta.exceptions import DatabaseBindingError, DatabaseReadError
from rowmeta_uuid import ValueMetaUuid

SAMPLE = "123e4567-e89b-12d3-a456-426614174000"
POSTGRES = DatabaseDialect.from_plugin_id("POSTGRESQL")


class _RecordingBinder(ParameterBinder):
    """Records binder calls; set_object fails when native_error is set."""

    def __init__(self, native_error: Exception | None = None, string_error: Exception | None = None):
        self.native_error = native_error
        self.string_error = string_error
        self.calls: list[tuple] = []

    def set_object(self, index, value):
        self.calls.append(("object", index, value))
        if self.native_error is not None:
            raise self.native_error

    def set_string(self, index, value):
        self.calls.append(("string", index, value))
        if self.string_error is not None:
            raise self.string_error

    def set_null(self, index, sql_type):
        self.calls.append(("null", index, sql_type))


class _Cursor:
    def __init__(self, adapters):
        self.adapters = adapters


class TestColumnTypeDefinition:
    """Tests for ValueMetaUuid.get_database_column_type_definition()."""

    @pytest.mark.parametrize(
        "plugin_id,expected",
        [
            ("POSTGRESQL", "UUID"),
            ("COCKROACHDB", "UUID"),
            ("H2", "UUID"),
            ("h2", "UUID"),
            ("MSSQLNATIVE", "UNIQUEIDENTIFIER"),
            ("MSSQL", "VARCHAR(36)"),
            ("MYSQL", "VARCHAR(36)"),
            ("ORACLE", "VARCHAR(36)"),
            ("SOMETHING", "VARCHAR(36)"),
        ],
    )
    def test_mapping(self, meta: ValueMetaUuid, plugin_id: str, expected: str) -> None:
        dialect = DatabaseDialect.from_plugin_id(plugin_id)

        assert (
            meta.get_database_column_type_definition(dialect, add_field_name=False, add_cr=False)
            == expected
        )

    def test_with_field_name_and_cr(self, meta: ValueMetaUuid) -> None:
        """Test the default flags prefix the name and append a line terminator."""
        assert meta.get_database_column_type_definition(POSTGRES) == "id UUID" + os.linesep

    def test_capability_flags_win_over_id(self, meta: ValueMetaUuid) -> None:
        """Test custom dialects are mapped by capability, not by name."""
        dialect = DatabaseDialect("MY_PG_FORK", postgres_variant=True)

        assert (
            meta.get_database_column_type_definition(dialect, add_field_name=False, add_cr=False)
            == "UUID"
        )


class TestSetPreparedStatementValue:
    """Tests for ValueMetaUuid.set_prepared_statement_value()."""

    def test_native_bind(self, meta: ValueMetaUuid, sample_uuid: uuid.UUID) -> None:
        binder = _RecordingBinder()
        meta.set_prepared_statement_value(POSTGRES, binder, 1, SAMPLE)

        assert binder.calls == [("object", 1, sample_uuid)]

    def test_null_bind(self, meta: ValueMetaUuid) -> None:
        """Test None binds a typed SQL NULL."""
        binder = _RecordingBinder()
        meta.set_prepared_statement_value(POSTGRES, binder, 3, None)

        assert binder.calls == [("null", 3, SqlType.OTHER)]

    def test_fallback_to_string(self, meta: ValueMetaUuid, sample_uuid: uuid.UUID) -> None:
        """Test a rejected native bind is retried once as a string."""
        binder = _RecordingBinder(native_error=TypeError("unsupported"))
        meta.set_prepared_statement_value(POSTGRES, binder, 2, sample_uuid)

        assert binder.calls == [("object", 2, sample_uuid), ("string", 2, SAMPLE)]

    def test_fallback_on_any_driver_error(self, meta: ValueMetaUuid) -> None:
        """Test unrelated driver errors also trigger the string fallback."""
        binder = _RecordingBinder(native_error=RuntimeError("connection lost"))
        meta.set_prepared_statement_value(POSTGRES, binder, 1, SAMPLE)

        assert binder.calls[-1] == ("string", 1, SAMPLE)

    def test_string_fallback_failure(self, meta: ValueMetaUuid) -> None:
        binder = _RecordingBinder(native_error=TypeError("no"), string_error=RuntimeError("also no"))

        with pytest.raises(DatabaseBindingError) as exc_info:
            meta.set_prepared_statement_value(POSTGRES, binder, 1, SAMPLE)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.index == 1

    def test_conversion_failure(self, meta: ValueMetaUuid) -> None:
        binder = _RecordingBinder()

        with pytest.raises(DatabaseBindingError):
            meta.set_prepared_statement_value(POSTGRES, binder, 1, "not-a-uuid")

        assert binder.calls == []

    def test_psycopg_native(self, meta: ValueMetaUuid, sample_uuid: uuid.UUID) -> None:
        statement = PsycopgStatement(_Cursor(psycopg.adapters), "SELECT %s")
        meta.set_prepared_statement_value(POSTGRES, statement, 1, SAMPLE)

        assert statement.params == [sample_uuid]

    def test_psycopg_without_uuid_dumper(self, meta: ValueMetaUuid) -> None:
        statement = PsycopgStatement(_Cursor(AdaptersMap()), "SELECT %s")
        meta.set_prepared_statement_value(POSTGRES, statement, 1, SAMPLE)

        assert statement.params == [SAMPLE]

    def test_dbapi_string_fallback(self, meta: ValueMetaUuid, sample_uuid: uuid.UUID) -> None:
        statement = DbApiStatement(None, "SELECT ?")
        meta.set_prepared_statement_value(DatabaseDialect.from_plugin_id("SQLITE"), statement, 1, sample_uuid)

        assert statement.params == [SAMPLE]


class TestGetValueFromResultSet:
    """Tests for ValueMetaUuid.get_value_from_result_set()."""

    def test_zero_based_index(self, meta: ValueMetaUuid, sample_uuid: uuid.UUID) -> None:
        """Test index 0 reads the first column."""
        row = ResultRow((SAMPLE, "other"))

        assert meta.get_value_from_result_set(POSTGRES, row, 0) == sample_uuid

    def test_native_value(self, meta: ValueMetaUuid, sample_uuid: uuid.UUID) -> None:
        row = ResultRow((1, sample_uuid))

        assert meta.get_value_from_result_set(POSTGRES, row, 1) is sample_uuid

    def test_null(self, meta: ValueMetaUuid) -> None:
        assert meta.get_value_from_result_set(POSTGRES, ResultRow((None,)), 0) is None

    def test_out_of_range(self, meta: ValueMetaUuid) -> None:
        with pytest.raises(DatabaseReadError) as exc_info:
            meta.get_value_from_result_set(POSTGRES, ResultRow((SAMPLE,)), 1)

        assert "index 1" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, IndexError)

    def test_invalid_value(self, meta: ValueMetaUuid) -> None:
        with pytest.raises(DatabaseReadError):
            meta.get_value_from_result_set(POSTGRES, ResultRow(("garbage",)), 0)

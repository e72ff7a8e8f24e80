"""CLI commands for rowmeta-uuid."""

import io
import logging
import sys

import click

from rowmeta.config import LOG_LEVELS, Config
from rowmeta.core.database import DatabaseDialect
from rowmeta.exceptions import RowMetaError
from rowmeta_uuid import ValueMetaUuid

logger = logging.getLogger(__name__)


def _load_config(config_path: str | None) -> Config:
    if config_path is not None:
        return Config.from_toml(config_path)
    try:
        return Config.find_and_load()
    except FileNotFoundError:
        logger.debug("No rowmeta.toml found, using default settings")
        return Config()


@click.group()
@click.version_option(package_name="rowmeta-uuid")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to rowmeta.toml (default: search upwards from cwd)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level (overrides the config file)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """rowmeta-uuid - UUID column values: conversion, ordering, codec, SQL mapping."""
    try:
        config = _load_config(config_path)
    except ValueError as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(1)
    logging.basicConfig(level=(log_level or config.log_level).upper())
    ctx.obj = config


def _meta(ctx: click.Context, name: str | None = None, descending: bool = False) -> ValueMetaUuid:
    meta = ValueMetaUuid.from_settings(name, ctx.obj.value)
    if descending:
        meta.base.sort_descending = True
    return meta


@cli.command()
@click.argument("value")
@click.pass_context
def convert(ctx: click.Context, value: str) -> None:
    """Print the canonical form of VALUE."""
    try:
        click.echo(_meta(ctx).get_string(value))
    except RowMetaError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("value")
@click.pass_context
def encode(ctx: click.Context, value: str) -> None:
    """Print the binary stream frame of VALUE as hex."""
    buf = io.BytesIO()
    try:
        _meta(ctx).write_data(buf, value)
    except RowMetaError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(buf.getvalue().hex())


@cli.command()
@click.argument("frame")
@click.pass_context
def decode(ctx: click.Context, frame: str) -> None:
    """Read a value from a hex-encoded binary stream FRAME."""
    try:
        data = bytes.fromhex(frame)
    except ValueError:
        click.echo(f"Error: not a hex string: {frame}", err=True)
        sys.exit(1)

    try:
        value = _meta(ctx).read_data(io.BytesIO(data))
    except RowMetaError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo("null" if value is None else str(value))


@cli.command()
@click.argument("first")
@click.argument("second")
@click.option("--descending", is_flag=True, help="Compare in descending order")
@click.pass_context
def compare(ctx: click.Context, first: str, second: str, descending: bool) -> None:
    """Print -1, 0 or 1 comparing FIRST with SECOND."""
    try:
        click.echo(_meta(ctx, descending=descending).compare(first, second))
    except RowMetaError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command("column-def")
@click.option("--dialect", "dialect_id", help="Dialect identifier (default: from config)")
@click.option("--name", help="Column name to prefix the definition with")
@click.pass_context
def column_def(ctx: click.Context, dialect_id: str | None, name: str | None) -> None:
    """Print the SQL column type for UUID values."""
    dialect = DatabaseDialect.from_plugin_id(dialect_id or ctx.obj.database.dialect)
    meta = _meta(ctx, name=name)
    click.echo(
        meta.get_database_column_type_definition(
            dialect, add_field_name=name is not None, add_cr=False
        )
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

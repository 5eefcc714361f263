"""CLI interface for bara - write output trees to folders and render formats."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, NoReturn, Optional, Tuple

import click
import yaml

from .config import (
    FolderDestinationOptions,
    GeneralOptions,
    Options,
    WriteStrategy,
    resolve_config,
)
from .core import CoreModule, write_tree
from .errors import BaraError
from .folder import FolderDestination
from .utils import console


def _fail(error: BaraError) -> NoReturn:
    console.print(f"❌ {error}", style="bold red")
    raise SystemExit(1)


def _parse_argument(raw: str) -> Any:
    """Read an argument as an int, a float or a string.

    ``1234`` is an int and ``'1234'`` a quoted string. Anything else YAML would
    turn into another type (``yes``, ``2019-03-01``, ``[1]``) stays the raw string.
    """
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return raw
    return value


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Folder destination writer and config primitives."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@cli.command("write")
@click.argument(
    "workdir", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option(
    "--folder-dir",
    "folder_dir",
    default=None,
    help="Local folder to write to. Defaults to copybara/out/<name>/<timestamp>.",
)
@click.option(
    "--exclude",
    "excludes",
    multiple=True,
    help="Destination relative glob to preserve. Can be repeated.",
)
@click.option("--name", "name", default=None, help="Configuration name")
@click.option(
    "--default-root",
    "default_root",
    default=None,
    type=click.Path(path_type=Path),
    help="Root for generated folders when --folder-dir is not given",
)
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in WriteStrategy]),
    default=None,
    help="staged (default) swaps a fully built folder in, in-place cleans then copies",
)
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file (defaults to the closest .bara.yml)",
)
def write_cmd(
    workdir: Path,
    folder_dir: Optional[str],
    excludes: Tuple[str, ...],
    name: Optional[str],
    default_root: Optional[Path],
    strategy: Optional[str],
    config_file: Optional[Path],
) -> None:
    """
    Write the contents of WORKDIR to a local folder.

    Everything already in the folder is removed first, except paths matching
    an --exclude glob (or the config file's `excludes`).
    """
    cwd = Path.cwd()
    try:
        config, config_path = resolve_config(cwd, config_file)
        options = Options(
            GeneralOptions(cwd=cwd, console=console, config_path=config_path),
            FolderDestinationOptions(
                local_folder=folder_dir or config.folder_dir,
                default_root=default_root or Path(config.default_root),
                strategy=WriteStrategy(strategy) if strategy else config.strategy,
            ),
        )
        destination = FolderDestination.from_options(options, name or config.name or "")
        patterns: List[str] = [*config.excludes, *excludes]
        write_tree(destination.new_writer(), workdir.resolve(), patterns, console)
    except BaraError as e:
        _fail(e)
    console.print(f"✓ Wrote {workdir} to {destination.local_folder}", style="green")


@cli.command("format")
@click.argument("template")
@click.argument("args", nargs=-1)
def format_cmd(template: str, args: Tuple[str, ...]) -> None:
    """
    Render TEMPLATE with ARGS after type checking every directive.

    Each ARG is read as an integer, a float or a string: `1234` is an integer,
    `"'1234'"` is a string, and words such as `yes` or dates stay strings.
    """
    core = CoreModule(Options.default())
    try:
        rendered = core.format(template, [_parse_argument(a) for a in args])
    except BaraError as e:
        _fail(e)
    click.echo(rendered)


if __name__ == "__main__":
    cli()

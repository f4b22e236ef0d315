import contextlib
import enum
import json
import logging
import pathlib
from collections.abc import Iterator
from typing import Annotated, Optional

import typer
from rich.markup import escape
from rich.table import Table

from .. import operations
from ..config import Settings, converter
from ..errors import IniProfileError, ValidationError
from .console import console, err_console

LOG_LEVELS = [
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]


class BackendName(str, enum.Enum):
    auto = "auto"
    win32 = "win32"
    emulated = "emulated"


PathArg = Annotated[
    pathlib.Path, typer.Argument(dir_okay=False, help="Path to the INI file")
]
SectionArg = Annotated[str, typer.Argument(help="Name of the section")]
KeyArg = Annotated[str, typer.Argument(help="Name of the key")]
YesOpt = Annotated[
    bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")
]

app = typer.Typer(no_args_is_help=True)


@app.callback()
def common(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, min=0, max=5, help="set logging level"
        ),
    ] = 0,
    backend: Annotated[
        Optional[BackendName],
        typer.Option(help="Profile-string routines to use [env: INIPROFILE_BACKEND]"),
    ] = None,
    buffer_increment: Annotated[
        Optional[int],
        typer.Option(
            help="Buffer growth step in UTF-16 code units [env: INIPROFILE_BUFFER_INCREMENT]"
        ),
    ] = None,
):
    """Read and write INI files through the profile-string routines."""

    if verbose == 0:
        logging.disable()
    else:
        logging.disable(logging.NOTSET)
        logging.basicConfig(level=LOG_LEVELS[verbose - 1])

    try:
        settings = Settings.from_env()

        if backend is not None:
            settings.backend = backend.value
        if buffer_increment is not None:
            settings.increment = buffer_increment

    except ValueError as e:
        raise typer.BadParameter(str(e))

    ctx.obj = settings


@contextlib.contextmanager
def reporting() -> Iterator[None]:
    """Report errors from operations and exit with a non-zero status."""

    try:
        yield
    except IniProfileError as e:
        err_console.print(f"[red]error:[/red] {escape(str(e))}")
        raise typer.Exit(2 if isinstance(e, ValidationError) else 1)
    except ValueError as e:
        # Raised while creating the backend.
        err_console.print(f"[red]error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _confirm(settings: Settings, yes: bool) -> operations.Confirm | None:
    if yes or settings.assume_yes:
        return None

    return lambda prompt: typer.confirm(prompt, default=False)


@app.command()
def get(
    ctx: typer.Context,
    path: PathArg,
    section: SectionArg,
    key: KeyArg,
    default: Annotated[
        Optional[str], typer.Option(help="Value to print if the key does not exist")
    ] = None,
):
    """Print the value of a key."""

    with reporting():
        value = operations.get_value(
            path, section, key, default, accessor=ctx.obj.accessor()
        )

    if value is not None:
        typer.echo(value)


@app.command()
def sections(ctx: typer.Context, path: PathArg):
    """List the sections in an INI file."""

    with reporting():
        names = operations.list_sections(path, accessor=ctx.obj.accessor())

    for name in names:
        typer.echo(name)


@app.command()
def keys(ctx: typer.Context, path: PathArg, section: SectionArg):
    """List the keys in a section."""

    with reporting():
        names = operations.list_keys(path, section, accessor=ctx.obj.accessor())

    for name in names:
        typer.echo(name)


@app.command()
def dump(
    ctx: typer.Context,
    path: PathArg,
    section: Annotated[
        Optional[str], typer.Option(help="Only show the keys in this section")
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print entries as a JSON list")
    ] = False,
):
    """Show every key and value in an INI file."""

    with reporting():
        entries = list(
            operations.iter_entries(path, section, accessor=ctx.obj.accessor())
        )

    if as_json:
        typer.echo(json.dumps(converter.unstructure(entries), ensure_ascii=False))
        return

    table = Table()
    for column in ["Section", "Key", "Value"]:
        table.add_column(column)

    for entry in entries:
        table.add_row(escape(entry.section), escape(entry.key), escape(entry.value))

    console.print(table)


@app.command("set")
def set_(
    ctx: typer.Context,
    path: PathArg,
    section: SectionArg,
    key: KeyArg,
    value: Annotated[str, typer.Argument(help="Value to set")],
):
    """Set the value of a key, creating the file and section if needed."""

    with reporting():
        operations.set_value(path, section, key, value, accessor=ctx.obj.accessor())


@app.command()
def remove_key(
    ctx: typer.Context,
    path: PathArg,
    section: SectionArg,
    key: KeyArg,
    yes: YesOpt = False,
):
    """Remove a key from a section."""

    with reporting():
        done = operations.remove_key(
            path,
            section,
            key,
            _confirm(ctx.obj, yes),
            accessor=ctx.obj.accessor(),
        )

    if not done:
        err_console.print("Nothing removed.")


@app.command()
def remove_section(
    ctx: typer.Context,
    path: PathArg,
    section: SectionArg,
    yes: YesOpt = False,
):
    """Remove a section and all of its keys."""

    with reporting():
        done = operations.remove_section(
            path, section, _confirm(ctx.obj, yes), accessor=ctx.obj.accessor()
        )

    if not done:
        err_console.print("Nothing removed.")

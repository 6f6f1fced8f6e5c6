import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from goremovelines.cli.paths import resolve_paths
from goremovelines.core.clean import clean, clean_file
from goremovelines.core.modes import MODE_NAMES, Mode
from goremovelines.errors import CleanError
from goremovelines.models import CleanOptions

app = typer.Typer(
    name="goremovelines",
    help="Remove leading / trailing blank lines in Go functions, structs, if, switches, blocks.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
err_console = Console(stderr=True)

_MODE_PLACEHOLDER = "|".join(MODE_NAMES)


def _package_version() -> str:
    try:
        return version("goremovelines")
    except PackageNotFoundError:
        return "unknown"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"goremovelines {_package_version()}")
        raise typer.Exit()


def _configure_logging(debug: bool) -> None:
    package_logger = logging.getLogger("goremovelines")
    package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=err_console, show_path=False, markup=False))


def _parse_mode(remove: list[str] | None) -> Mode:
    if not remove:
        return Mode.ALL
    try:
        return Mode.from_names(remove)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="'--remove'") from None


def _clean_paths(paths: list[str], options: CleanOptions, to_source: bool) -> None:
    for path in paths:
        cleaned = clean_file(path, options)
        if to_source:
            Path(path).write_bytes(cleaned.encode("utf-8"))
        else:
            typer.echo(cleaned, nl=False)


def _clean_stdin(options: CleanOptions, to_source: bool) -> None:
    if to_source:
        raise CleanError("could not write to source if reading from stdin")
    source = typer.get_text_stream("stdin").read()
    typer.echo(clean(source, options), nl=False)


@app.command()
def main(
    paths: Annotated[
        list[str] | None,
        typer.Argument(help="Files or directories to clean. <path>/... will recurse. Reads stdin when omitted."),
    ] = None,
    remove: Annotated[
        list[str] | None,
        typer.Option(
            "--remove",
            "-r",
            metavar=_MODE_PLACEHOLDER,
            help="Remove blank lines for the context (repeatable, e.g.: -r func -r struct). Defaults to all.",
        ),
    ] = None,
    to_source: Annotated[
        bool,
        typer.Option("--to-source", "--toSource", "-w", help="Write result to (source) file instead of stdout."),
    ] = False,
    skip: Annotated[
        list[str] | None,
        typer.Option("--skip", "-s", metavar="DIR", help="Skip directories with this name when expanding '...'."),
    ] = None,
    vendor: Annotated[bool, typer.Option("--vendor", help="Skip 'vendor' directories.")] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", "-d", envvar="GOREMOVELINES_DEBUG", help="Display debug messages."),
    ] = False,
    show_version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Remove leading / trailing blank lines in Go functions, structs, if, switches, blocks."""
    _configure_logging(debug)
    mode = _parse_mode(remove)
    logging.getLogger(__name__).debug("Mode is %d (%s)", mode, ", ".join(mode.describe()))
    options = CleanOptions(mode=mode, debug=debug)

    skip_names = list(skip or [])
    if vendor:
        skip_names.append("vendor")

    try:
        if paths:
            _clean_paths(resolve_paths(paths, skip_names), options, to_source)
        else:
            _clean_stdin(options, to_source)
    except (CleanError, OSError, UnicodeDecodeError) as exc:
        err_console.print(f"[yellow]WARNING:[/yellow] Unable to clean: {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(1) from None


def run() -> None:
    app()

# src/eddy/cli.py
"""eddy Command Line Interface.

Entry point for the eddy CLI tool.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from eddy import __version__
from eddy.contracts import ConfigError, EngineError, ScanStatus, WaitStatus
from eddy.core.config import EddySettings, load_settings, resolve_settings_path

__all__ = [
    "app",
]

# Conventional exit status for a command ended by SIGINT
EXIT_CANCELLED = 130

app = typer.Typer(
    name="eddy",
    help="eddy: Operator tooling for a transactional dataflow engine.",
    no_args_is_help=True,
)

_SETTINGS_OPTION = typer.Option(
    None,
    "--settings",
    "-s",
    help="Path to settings YAML file (default: ./eddy.yaml).",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"eddy version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)  # Don't override existing env vars


def _load_settings_or_exit(settings: Path | None) -> EddySettings:
    """Load settings, turning every loading failure into a readable exit."""
    settings_path = resolve_settings_path(settings).expanduser()
    try:
        return load_settings(settings_path)
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings_path}: {e.problem}", err=True)
        raise typer.Exit(1) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings_path}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,  # Existence is checked in _load_dotenv for a better message
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """eddy: Operator tooling for a transactional dataflow engine."""
    from eddy.core.logging import configure_logging

    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(json_output=json_logs, level=log_level)

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


@app.command()
def wait(
    settings: Path | None = _SETTINGS_OPTION,
    workers: int | None = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Number of engine workers (overrides worker_instances).",
    ),
) -> None:
    """Block until all pending notifications have been processed.

    Exits 0 when the application is quiescent, 1 if the engine cannot be
    reached, and 130 if interrupted (Ctrl-C / SIGTERM).
    """
    from eddy.cli_helpers import open_store
    from eddy.core.backoff import BackoffPolicy
    from eddy.engine import QuiescenceDetector, shutdown_handler_context

    config = _load_settings_or_exit(settings)
    worker_count = workers if workers is not None else config.worker_instances

    try:
        with open_store(config) as client, shutdown_handler_context() as cancel_event:
            detector = QuiescenceDetector(
                client,
                client,
                worker_count,
                BackoffPolicy.from_settings(config.backoff),
            )
            status = detector.run(cancel_event)
    except EngineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    if status == WaitStatus.CANCELLED:
        typer.echo("Wait cancelled before processing finished.", err=True)
        raise typer.Exit(EXIT_CANCELLED)
    typer.echo(f"All processing has finished for '{config.application}'.")


@app.command()
def scan(
    settings: Path | None = _SETTINGS_OPTION,
    exact_row: str | None = typer.Option(
        None,
        "--exact-row",
        "-r",
        help="Scan exactly one row.",
    ),
    row_prefix: str | None = typer.Option(
        None,
        "--row-prefix",
        "-p",
        help="Scan every row starting with this prefix.",
    ),
    start_row: str | None = typer.Option(
        None,
        "--start",
        help="First row of the range (inclusive).",
    ),
    end_row: str | None = typer.Option(
        None,
        "--end",
        help="Last row of the range (inclusive).",
    ),
    columns: list[str] | None = typer.Option(
        None,
        "--column",
        "-c",
        help="Column to fetch as 'family' or 'family:qualifier'. Repeatable.",
    ),
    output_format: Literal["console", "json"] = typer.Option(
        "console",
        "--format",
        "-f",
        help="Output format: 'console' (human-readable) or 'json' (JSON lines).",
    ),
) -> None:
    """Scan a consistent snapshot of the application's data.

    Row selection modes are exclusive: use --exact-row, --row-prefix, or
    --start/--end, never more than one.
    """
    from eddy.cli_formatters import create_sink
    from eddy.cli_helpers import open_store, scan_options_from_cli
    from eddy.core.span import build_scan_query
    from eddy.engine import ScanExecutor

    config = _load_settings_or_exit(settings)

    options = scan_options_from_cli(
        exact_row=exact_row,
        row_prefix=row_prefix,
        start_row=start_row,
        end_row=end_row,
        columns=columns,
    )
    try:
        query = build_scan_query(options)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    if output_format == "console":
        typer.echo(f"Scanning snapshot of data in '{config.application}' application.")

    try:
        with open_store(config) as client:
            result = ScanExecutor(client).run(query, create_sink(output_format))
    except EngineError as e:
        typer.echo(f"Scan failed - {e}", err=True)
        raise typer.Exit(1) from None

    if result.status == ScanStatus.FAILED:
        typer.echo(f"Scan failed - {result.failure}", err=True)
        raise typer.Exit(1)
    if result.status == ScanStatus.NO_DATA:
        typer.echo("\nNo data found\n", err=output_format == "json")


@app.command()
def cleanup(
    settings: Path | None = _SETTINGS_OPTION,
) -> None:
    """Remove the local mini deployment's data directory."""
    from eddy.cli_helpers import remove_mini_data_dir

    config = _load_settings_or_exit(settings)
    try:
        removed = remove_mini_data_dir(config)
    except OSError as e:
        typer.echo(f"Error: could not remove {config.mini.data_dir}: {e}", err=True)
        raise typer.Exit(1) from None

    if removed:
        typer.echo(f"Removed local data directory: {config.mini.data_dir}")
    else:
        typer.echo("Nothing to clean up.")


if __name__ == "__main__":
    app()

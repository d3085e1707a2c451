# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from chronoplan import configuration
from chronoplan.repository.configuration import CONFIGURATION_REPO
from chronoplan.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("user_id", config["user_id"])
    table.add_row("timezone", config["timezone"])
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("log_level", config["log_level"])
    table.add_row(
        "log_file", config["log_file"] or str(configuration.DEFAULT_LOG_FILE)
    )
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )

    console.print(table)


@app.command("set, s")
def set(
    user_id: Annotated[
        Optional[str], typer.Option("--user-id", help="Owner id of your data")
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option("--timezone", help="IANA timezone name, e.g. Europe/Amsterdam"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory path for storing data files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="Use the default data directory"),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL"),
    ] = None,
    log_file: Annotated[
        Optional[str], typer.Option("--log-file", help="Path of the log file")
    ] = None,
    remove_log_file: Annotated[
        bool, typer.Option("--remove-log-file", help="Use the default log file")
    ] = False,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable report headers",
        ),
    ] = None,
) -> None:
    """Update configuration settings."""
    if timezone is not None:
        try:
            pendulum.timezone(timezone)
        except (KeyError, ValueError) as e:
            raise typer.BadParameter(f"Unknown timezone {timezone}: {e}")
    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            raise typer.BadParameter(f"Unknown log level {log_level}")

    CONFIGURATION_REPO.update_config(
        user_id=user_id,
        timezone=timezone,
        data_path=data_path,
        remove_data_path=remove_data_path,
        log_level=log_level,
        log_file=log_file,
        remove_log_file=remove_log_file,
        show_header=show_header,
    )
    CONFIGURATION_REPO.flush()

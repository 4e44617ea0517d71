"""
Reusable Typer Options Module

Typer options shared by the main callback and the commands. Use them as
``Annotated`` metadata, e.g. ``json_output: Annotated[bool, json_output_option] = False``.
"""

from __future__ import annotations

import typer

from animapper.shared.constants import CLIHelp

# Verbose option - count-based for multiple -v flags
verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help=CLIHelp.VERBOSE_HELP,
)

# Log level option - enum-based with case-insensitive choices
log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help=CLIHelp.LOG_LEVEL_HELP,
)

# JSON output option - flag-based
json_output_option = typer.Option(
    "--json",
    help=CLIHelp.JSON_HELP,
)

# Config file option - for main app only
config_option = typer.Option(
    "--config",
    "-c",
    help=CLIHelp.CONFIG_HELP,
)

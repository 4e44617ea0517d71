"""
Animapper Typer CLI Application

Command-line access to the HTTP server, to single episode lookups and to the
title matching internals (scores and word variants) for debugging matches.
"""

from __future__ import annotations

import asyncio
from dataclasses import asdict
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from animapper.cli.common.context import CliContext, LogLevel, get_cli_context, set_cli_context
from animapper.cli.common.options import (
    config_option,
    json_output_option,
    log_level_option,
    verbose_option,
)
from animapper.cli.json_formatter import format_json_output
from animapper.config.loader import get_config, reload_config
from animapper.core.matching.scoring import ScoreBreakdown, TitleScorer
from animapper.core.matching.variations import expand_word
from animapper.services.episode_mapper import (
    EpisodeMapper,
    LookupOutcome,
    LookupStatus,
    parse_anilist_id,
)
from animapper.shared.constants import CLIDefaults, CLIHelp, CLIMessages
from animapper.shared.errors import AnimapperError, DomainError
from animapper.shared.logging import setup_structured_logger

# Version information
__version__ = CLIDefaults.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=True,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.INFO,
    config: Annotated[Optional[str], config_option] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version information and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Process the global options and configure logging."""
    context = CliContext(verbose=verbose, log_level=log_level, config_path=config)
    set_cli_context(context)

    try:
        settings = reload_config(config) if config else get_config()
    except (AnimapperError, FileNotFoundError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(CLIDefaults.EXIT_ERROR) from e

    setup_structured_logger(
        level=context.get_effective_log_level(),
        log_file=settings.logging.file,
        use_rich_console=settings.logging.rich_console,
    )


@app.command("serve", help=CLIHelp.SERVE_HELP)
def serve_command(
    host: Annotated[Optional[str], typer.Option("--host", help=CLIHelp.HOST_HELP)] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help=CLIHelp.PORT_HELP)] = None,
    reload: Annotated[bool, typer.Option("--reload", help=CLIHelp.RELOAD_HELP)] = False,
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_config()
    bind_host = host or settings.server.host
    bind_port = port or settings.server.port

    typer.echo(CLIMessages.SERVER_STARTING.format(host=bind_host, port=bind_port))
    uvicorn.run(
        "animapper.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=get_cli_context().get_effective_log_level().lower(),
    )


async def _lookup_episodes(anilist_id: int) -> LookupOutcome:
    mapper = EpisodeMapper.from_settings(get_config())
    try:
        return await mapper.get_episodes(anilist_id)
    finally:
        await mapper.close()


def _print_episodes(console: Console, outcome: LookupOutcome) -> None:
    response = outcome.response
    if response is None:
        return

    console.print(f"[bold]{response.title}[/bold] ({response.hianime_id})")
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Episode ID")
    for episode in response.episodes:
        table.add_row(str(episode.number), episode.title, episode.episode_id)
    console.print(table)
    console.print(f"{response.total_episodes} episode(s)")


@app.command("episodes", help=CLIHelp.EPISODES_HELP)
def episodes_command(
    anilist_id: Annotated[str, typer.Argument(help="AniList anime id")],
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    """Resolve and print the episode listing of an AniList id."""
    try:
        parsed_id = parse_anilist_id(anilist_id)
    except DomainError as e:
        message = CLIMessages.INVALID_ID.format(raw_id=anilist_id)
        if json_output:
            typer.echo(format_json_output(False, "episodes", errors=[message]).decode())
        else:
            typer.echo(message, err=True)
        raise typer.Exit(CLIDefaults.EXIT_INVALID_INPUT) from e

    outcome = asyncio.run(_lookup_episodes(parsed_id))

    if outcome.status is LookupStatus.MATCHED and outcome.response is not None:
        if json_output:
            data = outcome.response.model_dump(by_alias=True, mode="json")
            typer.echo(format_json_output(True, "episodes", data=data).decode())
        else:
            _print_episodes(Console(), outcome)
        return

    if outcome.status is LookupStatus.NOT_FOUND:
        message = CLIMessages.NOT_FOUND
    else:
        message = CLIMessages.LOOKUP_FAILED.format(message=outcome.message)

    if json_output:
        typer.echo(format_json_output(False, "episodes", errors=[message]).decode())
    else:
        typer.echo(message, err=True)
    raise typer.Exit(CLIDefaults.EXIT_ERROR)


def _breakdown_table(breakdown: ScoreBreakdown) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("search", breakdown.search_title)
    table.add_row("candidate", breakdown.candidate_title)
    table.add_row("full matches", f"{breakdown.full_matches}/{breakdown.word_count}")
    table.add_row("partial matches", f"{breakdown.partial_matches:.3f}")
    table.add_row("word match score", f"{breakdown.word_match_score:.3f}")
    table.add_row("string similarity", f"{breakdown.string_similarity:.3f}")
    table.add_row("score", f"[bold]{breakdown.score:.3f}[/bold]")
    return table


@app.command("score", help=CLIHelp.SCORE_HELP)
def score_command(
    search_title: Annotated[str, typer.Argument(help="Title from the AniList bundle")],
    candidate_title: Annotated[str, typer.Argument(help="Search result title")],
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    """Print the score breakdown of a candidate title."""
    weights = get_config().matching
    breakdown = TitleScorer(weights=weights).explain(search_title, candidate_title)
    accepted = breakdown.score > weights.acceptance_threshold

    if json_output:
        data = {**asdict(breakdown), "accepted": accepted}
        typer.echo(format_json_output(True, "score", data=data).decode())
        return

    console = Console()
    console.print(_breakdown_table(breakdown))
    verdict = "[green]accepted[/green]" if accepted else "[red]rejected[/red]"
    console.print(f"{verdict} (threshold {weights.acceptance_threshold})")


@app.command("variations", help=CLIHelp.VARIATIONS_HELP)
def variations_command(
    word: Annotated[str, typer.Argument(help="Word to expand")],
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    """Print the lexical variants of a word."""
    variants = sorted(expand_word(word))

    if json_output:
        typer.echo(format_json_output(True, "variations", data=variants).decode())
        return

    for variant in variants:
        typer.echo(variant)


if __name__ == "__main__":
    app()

"""
CLI Constants

Command names, help texts and messages for the Typer application.
"""


class CLIDefaults:
    """CLI default values."""

    VERSION = "0.1.0"
    DEFAULT_LOG_LEVEL = "INFO"

    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INVALID_INPUT = 2


class CLIHelp:
    """Help texts for the CLI."""

    APP_NAME = "animapper"
    APP_DESCRIPTION = "Map AniList anime ids to Hianime episode listings."
    APP_STYLE = "rich"
    VERSION_TEXT = "animapper {version}"

    SERVE_HELP = "Run the HTTP API server."
    EPISODES_HELP = "Resolve the episode listing for an AniList id."
    SCORE_HELP = "Score a candidate title against a search title."
    VARIATIONS_HELP = "Show the lexical variants of a word."

    HOST_HELP = "Interface to bind (defaults to the configured server host)."
    PORT_HELP = "Port to bind (defaults to the configured server port)."
    RELOAD_HELP = "Reload the server on code changes."
    JSON_HELP = "Output results in JSON format."
    LOG_LEVEL_HELP = "Logging level."
    VERBOSE_HELP = "Enable debug logging."
    CONFIG_HELP = "Path to a TOML configuration file."


class CLIMessages:
    """Messages printed by CLI commands."""

    NOT_FOUND = "Anime not found or no episodes available"
    LOOKUP_FAILED = "Lookup failed: {message}"
    INVALID_ID = "Invalid Anilist ID: {raw_id}"
    SERVER_STARTING = "Server is running on {host}:{port}"

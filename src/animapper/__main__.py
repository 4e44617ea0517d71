"""Entry point for ``python -m animapper``."""

from animapper.cli.typer_app import app

if __name__ == "__main__":
    app()

"""Animapper: map AniList anime ids to Hianime episode listings."""

from animapper.shared.constants import CLIDefaults

__version__ = CLIDefaults.VERSION

__all__ = ["__version__"]

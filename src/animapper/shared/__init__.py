"""Shared errors, logging and constants for Animapper."""

"""Core title matching functionality for Animapper."""

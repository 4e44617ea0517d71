"""Animapper HTTP API."""

from .app import create_app, get_episode_mapper

__all__ = ["create_app", "get_episode_mapper"]

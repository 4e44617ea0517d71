"""Shared CLI building blocks: context, reusable options."""

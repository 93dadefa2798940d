"""Command-line interface."""

from users_api.cli.app import app, cli

__all__ = ["app", "cli"]

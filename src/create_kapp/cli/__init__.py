"""Command-line entry point for create-kapp."""

from create_kapp.cli.app import app, run

__all__ = ["app", "run"]

"""CLI entry points."""

from __future__ import annotations

from flask import Flask

from .convert import convert_amount, list_currencies


def register_cli(app: Flask) -> None:
    """Register CLI commands on the given Flask app."""

    app.cli.add_command(convert_amount)
    app.cli.add_command(list_currencies)

"""CLI commands for listing the catalog and converting an amount."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from fxconvert.errors import ValidationError
from fxconvert.services import CurrencyServiceException, MissingRateError
from fxconvert.validation import parse_amount, validate_currency_code


@click.command("currencies")
@with_appcontext
def list_currencies() -> None:
    """List the supported currency codes with their picker index."""

    symbols = current_app.extensions["currency_symbols"]
    for index, code in enumerate(symbols):
        click.echo(f"{index:>3}  {code}")


@click.command("convert")
@click.argument("source")
@click.argument("target")
@click.argument("amount")
@with_appcontext
def convert_amount(source: str, target: str, amount: str) -> None:
    """Fetch the latest rates and convert AMOUNT from SOURCE to TARGET."""

    symbols = current_app.extensions["currency_symbols"]
    try:
        source_code = validate_currency_code(source, symbols, field="source")
        target_code = validate_currency_code(target, symbols, field="target")
        value = parse_amount(amount)
    except ValidationError as exc:
        raise click.BadParameter(exc.message) from exc

    service = current_app.extensions["currency_service"]
    try:
        converter = service.fetch_converter()
    except CurrencyServiceException as exc:
        raise click.ClickException(exc.error.message) from exc

    try:
        result = converter.convert(source_code, target_code, value)
    except MissingRateError as exc:
        raise click.ClickException(str(exc)) from exc

    formatter = current_app.extensions["money_formatter"]
    click.echo(f"{formatter.format(value)} {source_code} = {formatter.format(result)} {target_code}")

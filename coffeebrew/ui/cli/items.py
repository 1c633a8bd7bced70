"""
CLI commands for listing installable items.

Thin wrappers over ``coffeebrew.core.use_cases.listing``.
"""

from __future__ import annotations

import json
import sys

import click

from coffeebrew.core.models.items import CASK, FORMULA, ItemKind


def _emit(kind: ItemKind, as_json: bool) -> None:
    from coffeebrew.core.use_cases.listing import run_listing

    result = run_listing(kind)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    for name in result.items:
        click.echo(name)


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def formulae(as_json: bool) -> None:
    """List all locally installable formulae including short names."""
    _emit(FORMULA, as_json)


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def casks(as_json: bool) -> None:
    """List all locally installable casks including short names."""
    _emit(CASK, as_json)

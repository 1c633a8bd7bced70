"""
coffeebrew core — CLI entrypoint.

Normally started by the ``brew`` bootstrap with a filtered environment:

    brew formulae
    brew casks --json

or directly, when HOMEBREW_LIBRARY is already set:

    python -m coffeebrew.main --help
"""

from __future__ import annotations

import json
import os
import sys

import click

from coffeebrew import __version__
from coffeebrew.core.observability.logging_config import setup_logging_from_env


@click.group()
@click.version_option(version=__version__, prog_name="coffeebrew")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """coffeebrew — the missing package manager, in a cup."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging_from_env(os.environ, debug=debug, verbose=verbose, quiet=quiet)


@cli.command("config")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_cmd(ctx: click.Context, as_json: bool) -> None:
    """Show the library, cache and taps the core is working with."""
    from coffeebrew.core.use_cases.config_check import check_config

    result = check_config()

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.settings is not None:
        settings = result.settings
        click.echo(f"HOMEBREW_LIBRARY: {settings.library}")
        click.echo(f"HOMEBREW_CACHE: {settings.cache or '(unset)'}")
        click.echo(f"HOMEBREW_NO_INSTALL_FROM_API: {'set' if settings.no_install_from_api else 'unset'}")
        for kind, present in result.caches.items():
            click.echo(f"Cached {kind} names: {'yes' if present else 'no'}")
        click.echo(f"Taps: {', '.join(result.taps) or '(none)'}")

    if not ctx.obj.get("quiet"):
        for warn in result.warnings:
            click.echo(f"Warning: {warn}", err=True)

    if not result.valid:
        for err in result.errors:
            click.echo(f"Error: {err}", err=True)
        sys.exit(1)


# ── Register commands from coffeebrew/ui/cli/ ─────────────────────

from coffeebrew.ui.cli.items import casks, formulae  # noqa: E402

cli.add_command(formulae)
cli.add_command(casks)


if __name__ == "__main__":
    cli(prog_name="brew")

"""
coffeebrew bootstrap — the ``brew`` entrypoint.

Checks preconditions, resolves the installation, loads the layered
``brew.env`` files, filters the environment, and replaces itself with
the core (``python -m coffeebrew.main``). Every argument is passed
through untouched, including ``--help``.
"""

from __future__ import annotations

import json
import os
import sys

import click

from coffeebrew.adapters.process import exec_handoff
from coffeebrew.core.observability.logging_config import setup_logging_from_env
from coffeebrew.core.use_cases.bootstrap import prepare_handoff

# Exit status when the core's interpreter cannot be started.
EXIT_NO_INTERPRETER = 127


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
        "help_option_names": [],
    },
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def main(args: tuple[str, ...]) -> None:
    """Start the coffeebrew core with a sanitized environment."""
    env = dict(os.environ)
    setup_logging_from_env(env)

    result = prepare_handoff(args, entrypoint=sys.argv[0], env=env)

    if result.error:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    assert result.plan is not None  # guaranteed after error check above

    if env.get("HOMEBREW_BOOTSTRAP_DRY_RUN"):
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    error = exec_handoff(result.plan)
    click.echo(f"Error: {error}", err=True)
    sys.exit(EXIT_NO_INTERPRETER)


if __name__ == "__main__":
    main()

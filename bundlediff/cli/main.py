"""bundlediff CLI main entry point.

Usage::

    bundlediff compare base-report.json head-report.json --percent-min 0.05
    bundlediff compare base.json head.json --config bundlediff.json --format json
    bundlediff validate report.json --strict
    bundlediff schemas export schemas/
"""

from __future__ import annotations

import click

from bundlediff.cli.commands_compare import compare
from bundlediff.cli.commands_schemas import schemas_group
from bundlediff.cli.commands_validate import validate


@click.group()
@click.version_option(package_name="bundlediff")
def cli() -> None:
    """Compare bundle sizes between two builds."""


cli.add_command(compare)
cli.add_command(validate)
cli.add_command(schemas_group)

if __name__ == "__main__":
    cli()

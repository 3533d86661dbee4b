"""
CLI command: check

Reports whether any CDC measles data source is currently reachable.
"""

import logging
from typing import Tuple

import click

from cdcmeasles.data import is_data_available, list_dataset_types

logger = logging.getLogger("cdcmeasles.cli.check")


@click.command("check")
@click.option(
    "--type",
    "dataset_types",
    type=click.Choice(list_dataset_types(), case_sensitive=False),
    multiple=True,
    help="Dataset type to probe (repeatable); defaults to weekly and yearly",
)
@click.pass_context
def cli(ctx: click.Context, dataset_types: Tuple[str, ...]) -> None:
    """
    Check if CDC measles data is available.
    """
    kwargs = {"dataset_types": dataset_types} if dataset_types else {}
    if is_data_available(verbose=True, **kwargs):
        click.echo("✓ CDC measles data is available.")
        return

    logger.warning("No CDC measles data source answered")
    click.echo(
        "✗ CDC measles data is currently unavailable. Please try again later "
        "or check your internet connection."
    )
    ctx.exit(1)

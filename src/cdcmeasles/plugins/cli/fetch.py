"""
CLI command: fetch

Downloads one CDC measles dataset, trying each candidate source in turn.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from cdcmeasles.data import DatasetUnavailableError, fetch_dataset, list_dataset_types
from cdcmeasles.settings import settings

# Configure module-level logger
logger = logging.getLogger("cdcmeasles.cli.fetch")


@click.command("fetch")
@click.argument(
    "dataset",
    type=click.Choice(list_dataset_types(), case_sensitive=False),
    default="weekly",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Save the table as CSV to this path",
)
@click.option(
    "--save",
    is_flag=True,
    help="Save the table to the configured output directory",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every attempted URL")
def cli(dataset: str, output: Optional[Path], save: bool, verbose: bool) -> None:
    """
    Fetch the DATASET table (weekly, yearly or legacy) from CDC.
    """
    if save and output is None:
        settings.create_directories()
        output = Path(settings.output_dir) / f"cdc_measles_{dataset}.csv"

    click.echo(f"Fetching {dataset} measles data...")
    try:
        table = fetch_dataset(
            dataset,
            verbose=verbose,
            save_file=output is not None,
            file_name=output or "cdc_measles_data.csv",
        )
    except DatasetUnavailableError as exc:
        logger.error("Failed to fetch %s data: %s", dataset, exc)
        click.echo(f"✗ {dataset}: no candidate source returned data")
        for attempt in exc.attempts:
            click.echo(f"  - {attempt.url}: {attempt.detail}")
        click.echo(exc.hint)
        raise click.Abort()

    click.echo(f"✓ {dataset}: {len(table)} rows, {len(table.columns)} columns")
    click.echo(f"  columns: {', '.join(map(str, table.columns))}")
    if output is not None:
        click.echo(f"Data saved to {output}")

"""
CLI command: info

Displays cdcmeasles package version, dataset metadata and the candidate
sources known for each dataset type.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

import click

from cdcmeasles.data import get_measles_metadata
from cdcmeasles.data.sources import load_catalog

# Configure module-level logger
logger = logging.getLogger("cdcmeasles.cli.info")


@click.command("info")
def cli() -> None:
    """
    Show package metadata and the known candidate sources.
    """
    # Retrieve package version, fallback if not installed
    try:
        pkg_version = version("cdcmeasles")
        logger.debug("Retrieved package version: %s", pkg_version)
    except PackageNotFoundError:
        pkg_version = "0.0.0-dev"
        logger.warning(
            "Package 'cdcmeasles' not found; using development version placeholder."
        )

    click.echo(f"cdcmeasles version: {pkg_version}")

    metadata = get_measles_metadata()
    click.echo("\nDataset metadata:")
    for key, value in metadata.model_dump().items():
        click.echo(f"  {key}: {value}")

    catalog = load_catalog()
    click.echo("\nCandidate sources:")
    for dataset, candidates in catalog.candidates.items():
        description = catalog.descriptions.get(dataset, "")
        click.echo(f"  {dataset.value}: {description}")
        for candidate in candidates:
            click.echo(f"    - [{candidate.format.value}] {candidate.url}")

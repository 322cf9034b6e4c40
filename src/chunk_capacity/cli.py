"""chunk-capacity command line interface."""

from __future__ import annotations

import logging

import click

from chunk_capacity.allocator import Raid10Layout, calculate
from chunk_capacity.drive import Drive
from chunk_capacity.loaders import load_pool_json
from chunk_capacity.profiles import Profile, configuration_of, parse_profile
from chunk_capacity.report import show_comparison, show_drives, show_result
from chunk_capacity.types import CapacityError, InsufficientDrivesError
from chunk_capacity.units import GIB, ChunkSize, parse_size

logger = logging.getLogger(__name__)


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _drives_from_sizes(sizes: tuple[str, ...], chunk_size: ChunkSize) -> list[Drive]:
    drives = []
    for i, size in enumerate(sizes):
        nbytes = parse_size(size)
        # Bare numbers are allocation units, suffixed sizes are bytes
        units = int(size) if size.isdigit() else chunk_size.to_units(nbytes)
        drives.append(Drive(units, i))
    return drives


def _chunk_size(value: str | None) -> ChunkSize:
    return ChunkSize.parse(value) if value else GIB


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv).")
def main(verbose):
    """Estimate usable capacity of a multi-device pool."""
    _configure_logging(verbose)


@main.command()
@click.argument("sizes", nargs=-1, required=True)
@click.option("--profile", "-p", "profile_name", required=True, help="Profile name, e.g. raid1c3.")
@click.option("--chunk-size", help="Allocation unit for suffixed sizes (default 1GiB).")
@click.option(
    "--raid10-layout",
    type=click.Choice([layout.value for layout in Raid10Layout]),
    default=Raid10Layout.FIXED.value,
    show_default=True,
    help="Stripe width policy for raid10.",
)
@click.option("--show-drives", "with_drives", is_flag=True, help="Print the final state of every drive.")
def calc(sizes, profile_name, chunk_size, raid10_layout, with_drives):
    """Calculate usable capacity for drives of the given SIZES."""
    try:
        unit = _chunk_size(chunk_size)
        profile = parse_profile(profile_name)
        drives = _drives_from_sizes(sizes, unit)
        result = calculate(profile, drives, raid10_layout=Raid10Layout(raid10_layout))
    except CapacityError as e:
        raise click.ClickException(str(e))

    click.echo(show_result(result, unit))
    if with_drives:
        click.echo()
        click.echo(show_drives(drives, unit))


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--show-drives", "with_drives", is_flag=True, help="Print the final state of every drive.")
def pool(path, with_drives):
    """Calculate a pool described by a JSON definition file."""
    try:
        definition = load_pool_json(path)
        drives = list(definition.drives)
        result = calculate(definition.profile, drives)
    except CapacityError as e:
        raise click.ClickException(str(e))

    click.echo(f"Pool: {definition.pool_id}")
    click.echo(show_result(result, definition.chunk_size))
    if with_drives:
        click.echo()
        click.echo(show_drives(drives, definition.chunk_size))


@main.command()
@click.argument("sizes", nargs=-1, required=True)
@click.option("--chunk-size", help="Allocation unit for suffixed sizes (default 1GiB).")
def compare(sizes, chunk_size):
    """Compare every profile for drives of the given SIZES."""
    try:
        unit = _chunk_size(chunk_size)
        # Validate sizes once before running each profile on fresh drives
        _drives_from_sizes(sizes, unit)
    except CapacityError as e:
        raise click.ClickException(str(e))

    results = []
    unavailable = []
    for profile in Profile:
        try:
            results.append(calculate(profile, _drives_from_sizes(sizes, unit)))
        except InsufficientDrivesError as e:
            logger.info("Skipping %s: %s", profile.label, e)
            unavailable.append(
                (profile.label, f"needs {configuration_of(profile).copies} drives")
            )

    click.echo(show_comparison(results, unavailable, unit))


if __name__ == "__main__":
    main()

"""
bingwall list-images

This module defines the 'list-images' subcommand, which prints one tab separated line per tracked
image, oldest first. The columns are chosen with --format, e.g.

    $ bingwall list-images --format title --format time --relative short
    Fjord at dawn	3d, 4h
"""

from datetime import datetime

import click

from bingwall.config import BingwallConfig
from bingwall.state import load_state
from bingwall.selector import EmptyCatalogError
from bingwall.image_data import file_name
from bingwall.image_data import image_url

from bingwall.cli_utils.decorators import pass_config
from bingwall.cli_utils.decorators import catch_errors
from bingwall.cli_utils.utils import to_relative
from bingwall.cli_utils.console import output

IMAGE_PARTS = ("path", "full-path", "title", "url", "time", "current")


def parse_now(ctx, param, value):
    """
    click callback: parse an ISO 8601 timestamp, naive values are taken as local time.
    """

    if value is None:
        return None

    try:
        return datetime.fromisoformat(value).astimezone()

    except ValueError:
        raise click.BadParameter(f"{value!r} is not an ISO 8601 timestamp.")


@click.command(name="list-images")
@click.option(
    "--format",
    "-f",
    "parts",
    multiple=True,
    type=click.Choice(IMAGE_PARTS),
    help="Column to print, can be used multiple times e.g. -f title -f time",
)
@click.option(
    "--all",
    "all_parts",
    is_flag=True,
    default=False,
    help="Print every column (the default when no --format is given).",
)
@click.option("--date", "date_format", type=str, help="strftime format for the time column.")
@click.option(
    "--relative",
    type=click.Choice(["short", "long", "raw"]),
    is_flag=False,
    flag_value="long",
    help="Print the time column relative to now.",
)
@click.option(
    "--approx",
    is_flag=True,
    default=False,
    help="(--relative only) round relative times to days.",
)
@click.option(
    "--now",
    callback=parse_now,
    help="ISO 8601 timestamp to use as 'now' for relative times.",
)
@pass_config
@catch_errors
def cli(
    config: BingwallConfig,
    parts,
    all_parts,
    date_format,
    relative,
    approx,
    now,
):
    """List the tracked images."""

    state = load_state(config.project.state_file_path)
    if not len(state.image_data):
        raise EmptyCatalogError("No images found. Try running the 'update' command.")

    if all_parts or not parts:
        parts = IMAGE_PARTS

    now = now or datetime.now().astimezone()

    for image in state.image_data.sorted():
        name = file_name(image, config.size, config.ext)
        line = []

        for part in parts:
            if part == "path":
                line.append(name)
            elif part == "full-path":
                line.append(str(config.project.data_dir / name))
            elif part == "title":
                line.append(image.title)
            elif part == "url":
                line.append(image_url(image, config.size, config.ext))
            elif part == "time":
                if relative:
                    line.append(
                        to_relative(image.full_start_date, now, relative, approx)
                    )
                elif date_format:
                    line.append(image.full_start_date.strftime(date_format))
                else:
                    line.append(image.full_start_date.isoformat())
            elif part == "current":
                line.append(str(state.current_image == name).lower())

        output("\t".join(line))

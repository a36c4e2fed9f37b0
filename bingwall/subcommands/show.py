"""
bingwall show

This module defines the 'show' subcommand which prints the path of the current, a random or the
latest image.
"""

import click

from bingwall.config import BingwallConfig
from bingwall.state import load_state
from bingwall.state import save_state
from bingwall.state import NoCurrentImageError
from bingwall.selector import select_image
from bingwall.selector import EmptyCatalogError
from bingwall.image_data import file_name

from bingwall.cli_utils.decorators import pass_config
from bingwall.cli_utils.decorators import catch_errors
from bingwall.cli_utils.console import output


@click.command(name="show")
@click.argument(
    "kind",
    type=click.Choice(["current", "random", "latest"]),
    default="current",
)
@click.option(
    "--update",
    is_flag=True,
    default=False,
    help="(random only) save the random image as the current image.",
)
@pass_config
@catch_errors
def cli(config: BingwallConfig, kind: str, update: bool):
    """Print the path of the current, a random or the latest image."""

    state = load_state(config.project.state_file_path)

    image_path = None
    if kind == "current":
        image_path = state.current_image

    elif kind == "random":
        image_path = select_image(
            state.image_data, state.current_image, config.size, config.ext
        )
        if update:
            state.current_image = image_path
            save_state(config.project.state_file_path, state)

    else:
        latest = state.image_data.latest()
        if latest is None:
            raise EmptyCatalogError("No images found. Try running the 'update' command.")
        image_path = file_name(latest, config.size, config.ext)

    if image_path is None:
        raise NoCurrentImageError("No current image set")

    output(str(config.project.data_dir / image_path))

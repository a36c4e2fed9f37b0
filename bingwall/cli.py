"""
bingwall

Keep a local collection of the Bing "image of the day" wallpapers and pick one of them as the
current wallpaper.

This module defines the entry point to the bingwall CLI. The 'cli' command group resolves the
configuration (config file merged with any global options) and hands it to the invoked subcommand
through the click context. Subcommands are discovered in the subcommands/ folder and attached at
startup by main().

Invoked without a subcommand, bingwall picks a new current image from the images it already has
and prints its path, which makes it easy to use from a wallpaper setter script:

    $ feh --bg-fill "$(bingwall)"
"""

from pathlib import Path

import click

from bingwall.config import load_config
from bingwall.state import load_state
from bingwall.state import save_state
from bingwall.selector import select_image

from bingwall.cli_utils.decorators import catch_errors
from bingwall.cli_utils.utils import import_commands
from bingwall.cli_utils.utils import attach_commands
from bingwall.cli_utils.console import console
from bingwall.cli_utils.console import output


@click.group(invoke_without_command=True)
@catch_errors
@click.pass_context
@click.option(
    "--config-path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Read configuration from this file instead of ~/.config/bingwall/config.json",
)
@click.option(
    "--data-path",
    type=click.Path(path_type=Path, file_okay=False),
    help="Store downloaded images in this directory.",
)
@click.option(
    "--state-path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Keep the image index (state file) at this path.",
)
@click.option(
    "--number",
    type=click.IntRange(min=1),
    help="Number of images to request from the archive (default: 8).",
)
@click.option(
    "--index",
    type=click.IntRange(min=0),
    help="How many days back the archive page should start, 0 is today.",
)
@click.option("--market", type=str, help="Market code for the archive, e.g. en-CA")
@click.option(
    "--size",
    type=str,
    help="Image size to download, e.g. UHD or 1920x1080 (default: UHD).",
)
@click.option(
    "--ext", type=str, help="Image extension to download, e.g. jpg or webp (default: jpg)."
)
@click.option(
    "--verbose",
    "verbosity",
    flag_value="verbose",
    default=True,
    help="Print all output to stdout or the terminal",
)
@click.option(
    "--quiet",
    "verbosity",
    flag_value="quiet",
    help="Silence all output except results (image paths, JSON).",
)
@click.version_option(package_name="bingwall")
def cli(
    ctx: click.Context,
    config_path,
    data_path,
    state_path,
    number,
    index,
    market,
    size,
    ext,
    verbosity,
):
    """
    bingwall

    keep a local collection of Bing wallpapers and pick one as your current wallpaper.

    Without a command, pick a new current image from the local collection and print its path.

    ====================
    Quickstart
    ====================

    Download the latest images and choose a current one:

        $ bingwall update

    Print the path of the current image:

        $ bingwall show

    List the images you have, with how long ago they were published:

        $ bingwall list-images --format title --format time --relative
    """

    # rich consoles are module level, so reset quiet on every invocation
    console.quiet = verbosity == "quiet"

    ctx.obj = load_config(
        config_path=config_path,
        data_path=data_path,
        state_path=state_path,
        number=number,
        index=index,
        market=market,
        size=size,
        ext=ext,
    )

    if ctx.invoked_subcommand is None:
        config = ctx.obj
        state = load_state(config.project.state_file_path)
        state.current_image = select_image(
            state.image_data, state.current_image, config.size, config.ext
        )
        save_state(config.project.state_file_path, state)
        output(str(config.project.data_dir / state.current_image))


def main():

    commands = import_commands()
    attach_commands(cli, commands)
    cli()


if __name__ == "__main__":
    main()

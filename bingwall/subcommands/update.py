"""
bingwall update

This module defines the 'update' subcommand: fetch the latest image metadata from the Bing archive,
download any image that isn't on disk yet, start tracking new images and pick a new current image.

If some downloads fail, the newly tracked images are still saved to the state file (running update
again will retry the missing files) but the current image is left alone and the command fails.
"""

import click
import requests
from rich.markup import escape
from rich.progress import Progress

from bingwall.config import BingwallConfig
from bingwall.state import load_state
from bingwall.state import save_state
from bingwall.selector import select_image
from bingwall.image_handler import SyncError
from bingwall.image_handler import fetch_image_data
from bingwall.image_handler import sync_images

from bingwall.cli_utils.decorators import pass_config
from bingwall.cli_utils.decorators import catch_errors
from bingwall.cli_utils.console import console
from bingwall.cli_utils.console import describe
from bingwall.cli_utils.console import confirm
from bingwall.cli_utils.console import log


def report_tracked(titles: list[str]):
    for title in titles:
        describe(f":sparkles-emoji: Tracking image {escape(repr(title))}...")


@click.command(name="update")
@pass_config
@catch_errors
def cli(config: BingwallConfig):
    """Download new images from Bing and pick a new current image."""

    project = config.project
    project.ensure_dirs()

    state = load_state(project.state_file_path)

    url = config.to_url()
    describe(f":earth_asia-emoji: getting image metadata from {url} ...")

    with requests.Session() as session:
        remote = fetch_image_data(session, url, timeout=config.timeout)

        with Progress(console=console, disable=console.quiet) as progress:
            try:
                tracked = sync_images(
                    state.image_data,
                    remote,
                    session,
                    project.data_dir,
                    config.size,
                    config.ext,
                    timeout=config.timeout,
                    progress=progress,
                )

            except SyncError as error:
                report_tracked(error.tracked)
                save_state(project.state_file_path, state)
                raise

    report_tracked(tracked)
    if not tracked:
        log("no new images to track")

    state.current_image = select_image(
        state.image_data, state.current_image, config.size, config.ext
    )
    save_state(project.state_file_path, state)

    confirm(
        f"tracking {len(state.image_data)} images, current image is {escape(state.current_image)}"
    )

"""
bingwall state

This module defines the 'state' subcommand which prints image metadata as JSON: what the archive
currently serves, or with --frozen what bingwall has saved locally.
"""

import json

import click
import requests

from bingwall.config import BingwallConfig
from bingwall.state import load_state
from bingwall.image_handler import fetch_json
from bingwall.image_handler import fetch_image_data

from bingwall.cli_utils.decorators import pass_config
from bingwall.cli_utils.decorators import catch_errors
from bingwall.cli_utils.console import output


@click.command(name="state")
@click.option("--url", "show_url", is_flag=True, help="Only print the archive url.")
@click.option(
    "--raw",
    is_flag=True,
    help="Print the archive response as is instead of the parsed image data.",
)
@click.option(
    "--frozen",
    is_flag=True,
    help="Print the local state file instead of fetching from the archive.",
)
@pass_config
@catch_errors
def cli(config: BingwallConfig, show_url: bool, raw: bool, frozen: bool):
    """Print the remote image metadata or the local state as JSON."""

    if frozen:
        state = load_state(config.project.state_file_path)
        output(json.dumps(state.to_json(), indent=2))
        return

    url = config.to_url()
    if show_url:
        output(url)
        return

    with requests.Session() as session:
        if raw:
            value = fetch_json(session, url, timeout=config.timeout)
        else:
            value = fetch_image_data(session, url, timeout=config.timeout).to_json()

    output(json.dumps(value, indent=2))

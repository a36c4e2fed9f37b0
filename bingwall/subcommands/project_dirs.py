import json
from dataclasses import asdict

import click

from bingwall.config import BingwallConfig
from bingwall.config import PathEncoder

from bingwall.cli_utils.decorators import pass_config
from bingwall.cli_utils.decorators import catch_errors
from bingwall.cli_utils.console import output


@click.command(name="project-dirs")
@pass_config
@catch_errors
def cli(config: BingwallConfig):
    """Print the files and folders bingwall uses as JSON."""

    output(json.dumps(asdict(config.project), indent=2, cls=PathEncoder))

"""
bingwall Decorators

Use these decorators to turn plain functions into well behaved bingwall subcommands. A subcommand
receives the BingwallConfig resolved by the 'cli' group through @pass_config and should let errors
propagate: @catch_errors formats them with the "fail" console template and exits with an error
code. Here's a sample of how a subcommand looks:

    @click.command(name="count")
    @pass_config
    @catch_errors
    def cli(config: BingwallConfig):
        '''Print how many images are tracked.'''

        state = load_state(config.project.state_file_path)
        output(str(len(state.image_data)))
"""

from sys import exit
from functools import wraps

import click

from bingwall.config import BingwallConfig
from bingwall.cli_utils.console import fail

pass_config = click.make_pass_decorator(BingwallConfig)


def catch_errors(func):
    """
    Catch and format errors with the "fail" console template and gracefully
    exit the application with an error code. Click's own exceptions (usage errors,
    aborts) are left for click to report.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as error:
            fail(str(error))
            exit(1)

    return wrapper

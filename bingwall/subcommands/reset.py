"""
bingwall reset

This module defines the 'reset' subcommand which removes downloaded images and/or the state file,
e.g. as part of an uninstall.
"""

import shutil

import click

from bingwall.config import BingwallConfig

from bingwall.cli_utils.decorators import pass_config
from bingwall.cli_utils.decorators import catch_errors
from bingwall.cli_utils.console import describe
from bingwall.cli_utils.console import confirm
from bingwall.cli_utils.console import warn


def remove_dir(directory, dry_run: bool, count: bool = False):
    if dry_run:
        count_str = ""
        if count and directory.is_dir():
            total = sum(1 for _ in directory.iterdir())
            count_str = " (1 image)" if total == 1 else f" ({total} images)"
        describe(f"[DRY RUN]: Removing {directory}{count_str}...", markup=False, soft_wrap=True)
        return

    if not directory.exists():
        warn(f"{directory} does not exist, nothing to remove.")
        return

    shutil.rmtree(directory)
    confirm(f"removed {directory}")


def remove_state_file(state_file, dry_run: bool):
    """
    Remove the state file, then its directory if nothing else is left in it. The state file may
    live anywhere (--state-path) so its directory is never removed wholesale.
    """

    if dry_run:
        describe(f"[DRY RUN]: Removing {state_file}...", markup=False, soft_wrap=True)
        return

    if not state_file.exists():
        warn(f"{state_file} does not exist, nothing to remove.")
        return

    state_file.unlink()
    confirm(f"removed {state_file}")

    directory = state_file.parent
    if not any(directory.iterdir()):
        directory.rmdir()
        confirm(f"removed {directory}")


@click.command(name="reset")
@click.option("--all", "reset_all", is_flag=True, help="Remove images and state.")
@click.option(
    "--dry-run", is_flag=True, help="Only describe what would be removed."
)
@click.argument("items", nargs=-1, type=click.Choice(["images", "state"]))
@pass_config
@catch_errors
def cli(config: BingwallConfig, reset_all: bool, dry_run: bool, items):
    """Remove downloaded images and/or the state file."""

    if not reset_all and not items:
        raise click.UsageError("Specify what to reset ('images', 'state') or use --all.")

    if reset_all or "images" in items:
        remove_dir(config.project.data_dir, dry_run, count=True)

    if reset_all or "state" in items:
        remove_state_file(config.project.state_file_path, dry_run)

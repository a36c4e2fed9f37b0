"""
bingwall CLI Utilities

This module contains utilities shared across Click subcommands: importing subcommands from
directories and describing the time elapsed since an image was published.
"""


import sys
import calendar
import inspect
import importlib.util

from datetime import datetime
from pathlib import Path
from collections.abc import Iterable

import click

from bingwall.cli_utils.console import warn

SUBCOMMANDS_DIR = Path(__file__).parent.parent / "subcommands"

# (name, short suffix) for each unit of a relative time, largest first
UNITS = (
    ("year", "y"),
    ("month", "mo"),
    ("day", "d"),
    ("hour", "h"),
    ("minute", "m"),
    ("second", "s"),
)


def import_commands(
    module_paths: Iterable = None,
) -> list[click.Command]:
    """
    Retrieve a set of click Commands from module_paths. Default directory is the built in subcommands
    directory for commands that come pre-installed with bingwall.

    A valid bingwall command should define a "cli" function that is wrapped as
    a click Command object. This function will be exposed as a command to the end user.
    Set the 'name' keyword argument in the @click.command decorator to set the
    name of the command intended for the end user.
    """

    if module_paths is None:
        module_paths = SUBCOMMANDS_DIR.rglob("*.py")

    commands = []

    for path in sorted(module_paths):
        name = inspect.getmodulename(path)
        if name is None or name == "__init__":
            continue

        # Recipe for loading and executing modules from given filepath
        # comes from importlib docs:
        # https://docs.python.org/3/library/importlib.html#importing-a-source-file-directly

        module_name = f"bingwall.subcommands.{name}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)

        try:
            cli = getattr(module, "cli")
            commands.append(cli)

        except AttributeError:
            warn(f"Cannot add command {name}: no 'cli' function found.")

    return commands


def attach_commands(group: click.Group, commands: list[click.Command]):
    """
    Attach each command in a list of click Command objects to a provided group. Useful when
    retrieving a dynamic list of subcommands with import_commands().
    """

    for command in commands:
        group.add_command(command)


def add_months(moment: datetime, months: int) -> datetime:
    """Shift moment by a number of months, clamping the day to the end of the target month."""

    month = moment.month - 1 + months
    year = moment.year + month // 12
    month = month % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])

    return moment.replace(year=year, month=month, day=day)


def relative_parts(start: datetime, end: datetime) -> dict[str, int]:
    """
    Break the time between start and end down into calendar units (years, months, days, hours,
    minutes and seconds). The order of start and end does not matter.
    """

    if end < start:
        start, end = end, start

    months = (end.year - start.year) * 12 + end.month - start.month
    if months and add_months(start, months) > end:
        months -= 1

    rest = end - add_months(start, months)

    return {
        "year": months // 12,
        "month": months % 12,
        "day": rest.days,
        "hour": rest.seconds // 3600,
        "minute": rest.seconds % 3600 // 60,
        "second": rest.seconds % 60,
    }


def to_relative(start: datetime, end: datetime, flag: str = "long", approx: bool = False) -> str:
    """
    Describe the time between start and end.

    flag is one of:
        short   "1y, 2mo, 3d"
        long    "1 year, 2 months, 3 days"
        raw     ISO 8601 duration, "P1Y2M3D"

    With approx, anything smaller than a day is dropped.
    """

    parts = relative_parts(start, end)
    if approx:
        parts.update(hour=0, minute=0, second=0)

    if flag == "raw":
        date_part = "".join(
            f"{parts[unit]}{code}" for unit, code in zip(("year", "month", "day"), "YMD") if parts[unit]
        )
        time_part = "".join(
            f"{parts[unit]}{code}" for unit, code in zip(("hour", "minute", "second"), "HMS") if parts[unit]
        )
        if not date_part and not time_part:
            return "P0D" if approx else "PT0S"
        return f"P{date_part}" + (f"T{time_part}" if time_part else "")

    fmt = []
    for unit, short in UNITS:
        value = parts[unit]
        if value > 0:
            if flag == "short":
                fmt.append(f"{value}{short}")
            else:
                fmt.append(f"{value} {unit if value == 1 else unit + 's'}")

    if not fmt:
        fmt.append("today" if approx else "now")

    return ", ".join(fmt)

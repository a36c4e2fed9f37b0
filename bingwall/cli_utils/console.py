"""
console.py - provide application level access to a Rich Console object for
handling writing to stdout and stderr.

'console' is for people and is silenced by --quiet. Results are printed with output(), which is
never silenced.
"""

import click
from rich.console import Console
from rich.theme import Theme

bingwall_theme = Theme(
    {"warning": "orange_red1", "fail": "bold red", "confirm": "bold", "describe": ""}
)

console = Console(theme=bingwall_theme)
error_console = Console(theme=bingwall_theme, stderr=True)

"""
Formatting helpers
"""


def warn(msg: str):
    """
    Format msg and print to stderr.
    """

    error_console.print(f":warning-emoji:  {msg}", style="warning")


def describe(msg: str, **kwargs):
    """
    Format descriptive msg and print to stdout.
    """

    console.print(f"{msg}", style="describe", **kwargs)


def confirm(msg: str):
    """
    Format confirmation msg and print to stdout.
    """

    console.print(f":white_check_mark-emoji: {msg}", style="confirm")


def fail(msg: str):
    """
    Format failure msg and print to stderr.
    """

    error_console.print(f":x-emoji: {msg}", style="fail", markup=False, emoji=True)


def log(msg: str):
    """
    Print msg to stdout with a timestamp.
    """

    console.log(msg)


def output(msg: str):
    """
    Print msg exactly as given to stdout. Results other programs consume (image paths, tab separated
    lines, JSON) go through click so rich never wraps them or expands their tabs.
    """

    click.echo(msg)

"""
__main__.py

This file adds support for running bingwall as a python module instead of invoking the "bingwall" command line entrypoint.

See the following for a nice high level overview of what __main__ is intended for:

https://docs.python.org/3/using/cmdline.html#cmdoption-m
"""


from bingwall.cli import main


if __name__ == "__main__":
    main()

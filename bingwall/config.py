"""
bingwall Configuration Management

This file handles resolving the directories bingwall works with and loading variables from a
configuration file. Raise a ConfigError for any issues that arise in processing or retrieving
these configuration variables.

Directories follow the XDG base directory conventions:

    config  ~/.config/bingwall/config.json         (or $BINGWALL_CONFIG_DIR/config.json)
    images  ~/.local/share/bingwall/
    state   ~/.local/state/bingwall/image_index.json

Each value in the configuration file may be overridden by an option on the command line. The
configuration file is a flat JSON object, e.g.

    {"number": 8, "market": "en-CA", "size": "UHD", "ext": "jpg"}
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from pathlib import PurePath
from typing import Optional

from bingwall import bing_handler

APP_NAME = "bingwall"
CONFIG_KEYS = ("number", "index", "market", "size", "ext", "timeout")


class ConfigError(Exception):
    """Raise when an issue occurs with handling bingwall configuration."""

    pass


class PathEncoder(json.JSONEncoder):
    """
    custom encoder adds support for serializing pathlib objects as strings
    """

    def default(self, o):
        if isinstance(o, PurePath):
            return str(o)

        else:
            return json.JSONEncoder.default(self, o)


def base_dir(env_var: str, default: str) -> Path:
    """
    Return the directory named by env_var, or default with the user's home expanded.
    """

    value = os.environ.get(env_var)
    if value:
        return Path(value)

    try:
        return Path(default).expanduser()

    except RuntimeError as error:
        raise ConfigError(f"Failed to detect project directories: {error}")


@dataclass
class Project:
    """
    Locations of the files and folders bingwall reads and writes.
    """

    config_file_path: Path
    data_dir: Path
    state_file_path: Path

    @classmethod
    def initialize(
        cls,
        config_path: Path = None,
        data_path: Path = None,
        state_path: Path = None,
    ) -> "Project":
        """
        Resolve project directories, preferring explicitly provided paths.
        """

        if config_path is None:
            try:
                config_dir = Path(os.environ["BINGWALL_CONFIG_DIR"])

            except KeyError:
                config_dir = base_dir("XDG_CONFIG_HOME", "~/.config") / APP_NAME

            config_path = config_dir / "config.json"

        if data_path is None:
            data_path = base_dir("XDG_DATA_HOME", "~/.local/share") / APP_NAME

        if state_path is None:
            state_path = (
                base_dir("XDG_STATE_HOME", "~/.local/state") / APP_NAME / "image_index.json"
            )

        return cls(
            config_file_path=Path(config_path),
            data_dir=Path(data_path),
            state_file_path=Path(state_path),
        )

    def ensure_dirs(self):
        """
        Make sure the image and state directories exist.
        """

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self.state_file_path.parent.mkdir(parents=True, exist_ok=True)

        except OSError as error:
            raise ConfigError(f"There was an error creating project directories: {error}")


@dataclass
class BingwallConfig:
    """
    Configuration for a bingwall invocation: which page of the archive to request (number, index,
    market), which rendition of each image to download (size, ext), the HTTP timeout in seconds and
    the project directories.
    """

    project: Project
    number: int = 8
    index: Optional[int] = None
    market: Optional[str] = None
    size: str = "UHD"
    ext: str = "jpg"
    timeout: float = 30

    def __post_init__(self):
        """
        Values loaded from JSON are not type checked by the dataclass, so validate them here.
        """

        try:
            self.number = int(self.number)
            self.index = None if self.index is None else int(self.index)
            self.timeout = float(self.timeout)

        except (TypeError, ValueError) as error:
            raise ConfigError(f"Invalid configuration value: {error}")

        if self.number < 1:
            raise ConfigError(f"'number' must be at least 1, got {self.number}.")

        # an empty market means "let the archive decide"
        if not self.market:
            self.market = None

    def to_url(self) -> str:
        """Get the URL to retrieve image metadata from."""

        return bing_handler.archive_url(self.number, self.index, self.market)


def read_config_file(config_src: Path) -> dict:
    """
    Read a config.json and return its values. Raise ConfigError if the file can't be read, is not
    valid JSON or holds keys bingwall doesn't know about.
    """

    try:
        with Path(config_src).open("r", encoding="utf-8") as file:
            from_json = json.loads(file.read())

    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise ConfigError(f"There was an issue reading the config: {error}")

    except OSError as error:
        raise ConfigError(f"There was an issue opening the config: {error}")

    if not isinstance(from_json, dict):
        raise ConfigError(f"The config at {config_src} must be a JSON object.")

    unknown = sorted(set(from_json) - set(CONFIG_KEYS))
    if unknown:
        raise ConfigError(f"Unknown config keys in {config_src}: {', '.join(unknown)}")

    return from_json


def load_config(
    config_path: Path = None,
    data_path: Path = None,
    state_path: Path = None,
    **options,
) -> BingwallConfig:
    """
    Merge the config file with options passed on the command line. Options that are None fall back
    to the config file, then to the defaults. An explicitly given config_path must exist, the default
    config file is only read if it is there.
    """

    project = Project.initialize(config_path, data_path, state_path)

    raw_config = {}
    if config_path is not None or project.config_file_path.exists():
        raw_config = read_config_file(project.config_file_path)

    values = {}
    for key in CONFIG_KEYS:
        value = options.get(key)
        if value is None:
            value = raw_config.get(key)
        if value is not None:
            values[key] = value

    return BingwallConfig(project=project, **values)

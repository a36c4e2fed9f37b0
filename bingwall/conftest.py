"""
conftest.py

Test configuration for bingwall tests.

Defines Pytest fixtures for supplying test data to tests across the entire
test suite: sample archive metadata, project paths in a temporary directory,
mocked requests sessions and the CLI with its subcommands attached.
"""

import unittest.mock

import pytest
import click
import requests

from bingwall.cli import cli
from bingwall.config import Project
from bingwall.image_data import ImageData
from bingwall.image_data import ImageRecord
from bingwall.cli_utils.utils import import_commands
from bingwall.cli_utils.utils import attach_commands


def image_json(
    hash: str,
    day: int = 1,
    title: str = None,
    url_base: str = None,
) -> dict:
    """
    Return an element of the archive's 'images' array for the given hash, published on day 'day'
    of January 2024.
    """

    url_base = url_base or f"/th?id=OHR.{hash.capitalize()}_EN-CA{day:04d}"
    return {
        "startdate": f"202401{day:02d}",
        "fullstartdate": f"202401{day:02d}0800",
        "enddate": f"202401{day + 1:02d}",
        "url": f"{url_base}_1920x1080.jpg&rf=LaDigue_1920x1080.jpg&pid=hp",
        "urlbase": url_base,
        "copyright": f"{hash} copyright (© Someone)",
        "copyrightlink": f"https://www.bing.com/search?q={hash}",
        "title": title or f"Title of {hash}",
        "quiz": "/search?q=Bing+homepage+quiz",
        "wp": True,
        "hsh": hash,
        "drk": 1,
        "top": 1,
        "bot": 1,
        "hs": [],
    }


@pytest.fixture
def make_image():
    """
    Return a factory for ImageRecords, accepting the same arguments as image_json().
    """

    def inner(*args, **kwargs) -> ImageRecord:
        return ImageRecord.from_json(image_json(*args, **kwargs))

    return inner


@pytest.fixture
def archive_json() -> dict:
    """
    A response from the archive with three images, newest first like the real thing.
    """

    return {
        "images": [image_json("ccc", day=3), image_json("bbb", day=2), image_json("aaa", day=1)],
        "tooltips": {"loading": "Loading..."},
    }


@pytest.fixture
def remote(archive_json) -> ImageData:
    return ImageData.from_json(archive_json)


@pytest.fixture
def project(tmp_path) -> Project:
    return Project(
        config_file_path=tmp_path / "config" / "config.json",
        data_dir=tmp_path / "share",
        state_file_path=tmp_path / "state" / "image_index.json",
    )


def mock_response(content: bytes = b"", json_data=None, status_code: int = 200):
    """
    Build a MagicMock standing in for a requests Response.
    """

    response = unittest.mock.MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.headers = {"content-length": str(len(content))}
    response.iter_content.return_value = [content[:4], content[4:]]
    response.json.return_value = json_data

    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error"
        )

    return response


@pytest.fixture
def make_response():
    return mock_response


@pytest.fixture
def session():
    """
    A mocked requests Session. Every GET returns a successful response with some image bytes
    unless get.side_effect is replaced by the test.
    """

    mock_session = unittest.mock.MagicMock(spec=requests.Session)
    mock_session.get.side_effect = lambda url, **kwargs: mock_response(
        content=f"image bytes for {url}".encode()
    )

    return mock_session


@pytest.fixture(scope="session")
def subcommands():
    """
    Import all of the commands found in the /subcommands folder *without*
    invoking the entrypoint (cli).
    """

    return import_commands()


@pytest.fixture
def app(subcommands, entry_point: click.Group = cli):
    """
    The 'cli' group with every subcommand attached. Commands are removed again afterwards
    to keep the test environment clean.
    """

    attach_commands(entry_point, subcommands)
    yield entry_point
    entry_point.commands = {}

"""
Tests for config.py

Verify where project directories are resolved and how command line options,
the config file and the defaults are merged.

*** Fixtures ***
- monkeypatch, tmp_path (defined by Pytest)
"""

import json
from pathlib import Path

import pytest

# following entities are tested in this module:
from bingwall.config import BingwallConfig
from bingwall.config import ConfigError
from bingwall.config import PathEncoder
from bingwall.config import Project
from bingwall.config import load_config


@pytest.fixture
def xdg_home(tmp_path, monkeypatch) -> Path:
    """
    Point every XDG base directory into tmp_path.
    """

    monkeypatch.delenv("BINGWALL_CONFIG_DIR", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "share"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    return tmp_path


@pytest.fixture
def write_config(xdg_home):
    def inner(values) -> Path:
        config_file = xdg_home / "config" / "bingwall" / "config.json"
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(values if isinstance(values, str) else json.dumps(values))
        return config_file

    return inner


def test_project_dirs_from_xdg(xdg_home):
    project = Project.initialize()

    assert project.config_file_path == xdg_home / "config" / "bingwall" / "config.json"
    assert project.data_dir == xdg_home / "share" / "bingwall"
    assert project.state_file_path == xdg_home / "state" / "bingwall" / "image_index.json"


def test_project_dirs_default_to_home(monkeypatch, tmp_path):
    for var in ("BINGWALL_CONFIG_DIR", "XDG_CONFIG_HOME", "XDG_DATA_HOME", "XDG_STATE_HOME"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    project = Project.initialize()

    assert project.config_file_path == tmp_path / ".config" / "bingwall" / "config.json"
    assert project.data_dir == tmp_path / ".local" / "share" / "bingwall"
    assert project.state_file_path == tmp_path / ".local" / "state" / "bingwall" / "image_index.json"


def test_config_dir_from_environment(xdg_home, monkeypatch):
    monkeypatch.setenv("BINGWALL_CONFIG_DIR", str(xdg_home / "elsewhere"))

    assert Project.initialize().config_file_path == xdg_home / "elsewhere" / "config.json"


def test_explicit_paths_win(xdg_home):
    project = Project.initialize(
        config_path=xdg_home / "c.json", data_path=xdg_home / "d", state_path=xdg_home / "s.json"
    )

    assert project == Project(xdg_home / "c.json", xdg_home / "d", xdg_home / "s.json")


def test_ensure_dirs(xdg_home):
    project = Project.initialize()
    project.ensure_dirs()

    assert project.data_dir.is_dir()
    assert project.state_file_path.parent.is_dir()
    assert not project.state_file_path.exists()


def test_defaults_without_config_file(xdg_home):
    config = load_config()

    assert (config.number, config.index, config.market) == (8, None, None)
    assert (config.size, config.ext, config.timeout) == ("UHD", "jpg", 30)
    assert config.to_url() == "https://www.bing.com/HPImageArchive.aspx?format=js&n=8"


def test_values_from_config_file(write_config):
    write_config({"market": "en-CA", "size": "1920x1080", "ext": "webp"})

    config = load_config()

    assert config.market == "en-CA"
    assert config.size == "1920x1080"
    assert config.ext == "webp"
    assert config.to_url() == "https://www.bing.com/HPImageArchive.aspx?format=js&n=8&mkt=en-CA"


def test_options_override_config_file(write_config):
    write_config({"market": "en-CA", "number": 4, "size": "UHD"})

    config = load_config(number=1, index=1, size="1366x768", ext=None)

    assert config.to_url() == "https://www.bing.com/HPImageArchive.aspx?format=js&n=1&idx=1&mkt=en-CA"
    assert config.size == "1366x768"
    assert config.ext == "jpg"


def test_empty_market_is_omitted(write_config):
    write_config({"market": ""})

    assert load_config().market is None


def test_explicit_config_path(xdg_home):
    config_file = xdg_home / "custom.json"
    config_file.write_text(json.dumps({"number": 2}))

    assert load_config(config_path=config_file).number == 2


def test_explicit_config_path_must_exist(xdg_home):
    with pytest.raises(ConfigError):
        load_config(config_path=xdg_home / "missing.json")


@pytest.mark.parametrize(
    "contents",
    [
        "{not json",
        "[1, 2]",
        json.dumps({"colour": "blue"}),
        json.dumps({"number": "eight"}),
        json.dumps({"number": 0}),
    ],
)
def test_invalid_config_file(write_config, contents):
    write_config(contents)

    with pytest.raises(ConfigError):
        load_config()


def test_config_file_invalid_utf8(write_config):
    write_config("{}").write_bytes(b'{"market": "\xff\xfe"}')

    with pytest.raises(ConfigError):
        load_config()


def test_project_json(tmp_path):
    project = Project(tmp_path / "c.json", tmp_path / "d", tmp_path / "s.json")
    config = BingwallConfig(project=project)

    encoded = json.loads(json.dumps(config.project.__dict__, cls=PathEncoder))

    assert encoded == {
        "config_file_path": str(tmp_path / "c.json"),
        "data_dir": str(tmp_path / "d"),
        "state_file_path": str(tmp_path / "s.json"),
    }

import importlib

import dotenv
import pytest

from qbittorrent_webui import config


SETTINGS = [
    "VERBOSE",
    "LOG_PATH",
    "LOG_LEVEL",
    "QBITTORRENT_URL",
    "QBITTORRENT_USERNAME",
    "QBITTORRENT_PASSWORD",
    "QBITTORRENT_TIMEOUT",
]


@pytest.fixture
def load(monkeypatch):
    """Re-read Config from the given environment, ignoring any .env file."""
    monkeypatch.setattr(dotenv, "load_dotenv", lambda *args, **kwargs: False)
    for name in SETTINGS:
        monkeypatch.delenv(name, raising=False)

    def load(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config).Config

    yield load
    monkeypatch.undo()
    importlib.reload(config)


def test_defaults(load):
    Config = load()
    assert Config.VERBOSE is False
    assert Config.LOG_PATH == ""
    assert Config.LOG_LEVEL == "INFO"
    assert Config.QBITTORRENT_URL == "http://localhost:8080"
    assert Config.QBITTORRENT_USERNAME == "admin"
    assert Config.QBITTORRENT_PASSWORD == ""


def test_unset_timeout_is_none(load):
    assert load().QBITTORRENT_TIMEOUT is None


def test_empty_timeout_is_none(load):
    assert load(QBITTORRENT_TIMEOUT="").QBITTORRENT_TIMEOUT is None


def test_numeric_timeout_is_float(load):
    timeout = load(QBITTORRENT_TIMEOUT="2.5").QBITTORRENT_TIMEOUT
    assert timeout == 2.5
    assert isinstance(timeout, float)


@pytest.mark.parametrize("value, expected", [
    ("true", True),
    ("True", True),
    ("TRUE", True),
    ("false", False),
    ("1", False),
    ("yes", False),
])
def test_verbose_flag(load, value, expected):
    assert load(VERBOSE=value).VERBOSE is expected


def test_url_trailing_slash_stripped(load):
    assert load(QBITTORRENT_URL="http://seedbox:8080/").QBITTORRENT_URL == "http://seedbox:8080"


def test_credentials_from_environment(load):
    Config = load(QBITTORRENT_USERNAME="me", QBITTORRENT_PASSWORD="secret")
    assert Config.QBITTORRENT_USERNAME == "me"
    assert Config.QBITTORRENT_PASSWORD == "secret"

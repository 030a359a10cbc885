"""Shared fixtures: every test gets an isolated home and no ambient credentials."""

import pytest

from gcomet.config import ConfigManager, RemoteConfig
from gcomet.output import set_verbose

NOW = 1_700_000_000_000
HOUR = 60 * 60 * 1000


class FakeFetcher:
    """Stands in for the network. Records every fetch attempt."""

    def __init__(self, result: RemoteConfig | None = None):
        self.result = result
        self.calls = []

    def __call__(self, url, timeout):
        self.calls.append((url, timeout))
        return self.result


class FakeHelper:
    """Stands in for `gh auth token`."""

    def __init__(self, token: str | None = None):
        self.token = token
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.token


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GCOMET_DEBUG", raising=False)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "home")
    set_verbose(False)


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / ".gcomet"


@pytest.fixture
def make_manager(config_dir):
    """Return a factory for managers wired to fakes instead of network and gh."""
    def _make(fetcher=None, helper=None, now=NOW):
        return ConfigManager(
            config_dir=config_dir,
            fetcher=fetcher if fetcher is not None else FakeFetcher(),
            credential_helper=helper if helper is not None else FakeHelper(),
            clock=lambda: now,
        )
    return _make

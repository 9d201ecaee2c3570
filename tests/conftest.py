"""Shared fixtures."""

import pytest

from mdir import Dir


@pytest.fixture
def maildir(tmp_path):
    """An empty maildir in a temp directory."""
    return Dir.create(tmp_path / "Maildir")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's config and environment."""
    monkeypatch.setenv("MDIR_CONFIG", str(tmp_path / "config" / "config.yaml"))
    monkeypatch.delenv("MAILDIR", raising=False)
    monkeypatch.delenv("MDIR_SEPARATOR", raising=False)

"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture(autouse=True)
def clean_depadd_env(monkeypatch, tmp_path):
    """Keep DEPADD_* variables and stray .env files out of every test."""
    for name in ("DEPADD_UNSTABLE_OPTIONS", "DEPADD_PACKAGE", "DEPADD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def unstable():
    """Keyword arguments enabling unstable syntax."""
    return {"unstable_options": True}


@pytest.fixture
def add_args():
    """Minimal CLI arguments selecting a package."""
    return ["-p", "app"]

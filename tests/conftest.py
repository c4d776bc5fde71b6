"""Shared fixtures."""

import pytest

from aidice.config import settings as settings_module


@pytest.fixture(autouse=True)
def reset_global_settings(monkeypatch, tmp_path):
    """Give each test a fresh global Settings, never reading a developer's .env."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings_module, "_settings", None)

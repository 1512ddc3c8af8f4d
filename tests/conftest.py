"""Shared fixtures for framework tests."""
import os

# Headless pygame for input source tests
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

import hopkit.logging as hop_logging


@pytest.fixture
def log_config(monkeypatch):
    """Isolated copy of the logging configuration, restored after the test."""
    monkeypatch.setitem(hop_logging._config, 'default_level', hop_logging.LogLevel.INFO)
    monkeypatch.setitem(hop_logging._config, 'module_levels', {})
    monkeypatch.setitem(hop_logging._config, 'modules', {})
    monkeypatch.setitem(hop_logging._config, 'log_dir', None)
    return hop_logging._config

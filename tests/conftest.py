"""Pytest configuration and shared fixtures."""

import logging

import pytest
import structlog

from emitter.events import Emitter, RecordingSink, reset_emitter
from emitter.logging_config import reset_logging


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def emitter(sink):
    return Emitter(sink=sink)


@pytest.fixture(autouse=True)
def _isolate_globals():
    """Drop the global emitter and logging config between tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    reset_emitter()
    reset_logging()
    structlog.reset_defaults()
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)

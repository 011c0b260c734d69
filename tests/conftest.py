"""Pytest fixtures and configuration."""

import logging

import pytest

from secure_log.sinks import registry


class RecordingBackend:
    """Console sink that records every call instead of printing it."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def record(*args):
            self.calls.append((name, args))
        return record

    def calls_for(self, name):
        return [args for op, args in self.calls if op == name]


class RecordingHandler(logging.Handler):
    """Handler collecting emitted records."""

    def __init__(self):
        super().__init__(logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def backend():
    """A fresh recording backend."""
    return RecordingBackend()


@pytest.fixture
def make_handler():
    """Factory for recording handlers."""
    return RecordingHandler


@pytest.fixture
def secret_env():
    """Environment store with a single secret."""
    return {"API_KEY": "sk-123"}


@pytest.fixture
def fresh_registry(monkeypatch):
    """Process-wide console slot reset to an uninstalled recording sink."""
    sink = RecordingBackend()
    monkeypatch.setattr(registry, "_current_sink", sink)
    monkeypatch.setattr(registry, "_installed", False)
    return sink


@pytest.fixture
def isolated_logger(request):
    """Non-propagating logger whose only handler is a recording one.

    Handlers and filters already on the logger are set aside for the test
    and restored afterwards.
    """
    logger = logging.getLogger(f"tests.{request.node.name}")
    saved = (logger.handlers[:], logger.filters[:], logger.level, logger.propagate)

    handler = RecordingHandler()
    logger.handlers[:] = [handler]
    logger.filters[:] = []
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger, handler

    handler.filters[:] = []
    handlers, filters, level, propagate = saved
    logger.handlers[:] = handlers
    logger.filters[:] = filters
    logger.setLevel(level)
    logger.propagate = propagate

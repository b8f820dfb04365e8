"""Shared fixtures for the ticket estimator tests."""

import os
import tempfile

import pytest

from ticket_estimator.database import DatabaseManager


@pytest.fixture
def db_manager():
    """Route fare store backed by a throwaway SQLite file."""
    handle, path = tempfile.mkstemp(suffix=".db")
    os.close(handle)
    manager = DatabaseManager(f"sqlite:///{path}")
    manager.init_default_route_fares()
    yield manager
    manager.engine.dispose()
    os.remove(path)

"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Tests never touch the default data/ database (JACKUT_DATABASE_URL points at memory)
    - Every lifecycle fixture gets its own SQLite file under tmp_path
"""

import os

import pytest

from jackut.config import Settings
from jackut.core.system_context import SystemContext
from jackut.services.facade import JackutFacade
from jackut.services.system_lifecycle import SystemLifecycle

# Ensure tests don't accidentally write to the working directory's data/ folder
os.environ.setdefault("JACKUT_DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JACKUT_LOG_FORMAT", "text")


@pytest.fixture
def context():
    """Fresh context with three registered users: joao, maria, ana."""
    ctx = SystemContext()
    ctx.identity.create("joao", "123", "João")
    ctx.identity.create("maria", "456", "Maria")
    ctx.identity.create("ana", "789", "Ana")
    return ctx


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'data' / 'jackut.db'}",
        log_format="text",
    )


@pytest.fixture
def lifecycle(settings):
    return SystemLifecycle(settings, configure_logging=False)


@pytest.fixture
def facade(lifecycle):
    return JackutFacade(lifecycle)


@pytest.fixture
def reopen(settings):
    """Build a new facade over the same database — simulates a process restart."""
    def _reopen():
        return JackutFacade(SystemLifecycle(settings, configure_logging=False))
    return _reopen

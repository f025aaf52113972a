"""Shared pytest setup: keep structlog quiet and off stdout."""

import pytest

from pocketcalc.config import configure_logging


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging():
    configure_logging("WARNING")

"""
Pytest configuration for Lox tests.
"""
from pathlib import Path
import sys

import pytest


# The root-level `lox` CLI module is imported by the CLI tests
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def no_debug(monkeypatch):
    """
    Keep LOXDEBUG dumps out of captured output.
    """
    monkeypatch.delenv("LOXDEBUG", raising=False)

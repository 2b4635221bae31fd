"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path
import pytest

# Make the module importable without installing the project
sys.path.insert(0, str(Path(__file__).parent.parent))

import offset_cipher
from offset_cipher import Transcoder


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Start every test with verbose logging off; restored afterwards."""
    monkeypatch.setattr(offset_cipher, "VERBOSE", False)


@pytest.fixture
def transcoder():
    """Create a transcoder with the default offset character."""
    return Transcoder()


@pytest.fixture
def verbose(monkeypatch):
    """Enable [INFO]/[WARN] output for the duration of a test."""
    monkeypatch.setattr(offset_cipher, "VERBOSE", True)

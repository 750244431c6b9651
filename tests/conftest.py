"""Root-level pytest configuration and shared fixtures.

This module provides:
- Automatic sys.path configuration for all tests
- In-memory engine streams for driving the dispatcher without a process
- Command lines for the scripted fake engine in ``tests/fake_engine.py``
"""
from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Callable, List, Tuple

import pytest

# ---------------------------------------------------------------------------
# Path Configuration (automatically applied to all tests)
# ---------------------------------------------------------------------------

# Add project root to sys.path so imports work from any test directory
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

FAKE_ENGINE = Path(__file__).resolve().parent / "fake_engine.py"


# ---------------------------------------------------------------------------
# Stream Fixtures
# ---------------------------------------------------------------------------

class RecordingStream(io.StringIO):
    """StringIO that counts flushes, standing in for an engine's stdin."""

    def __init__(self) -> None:
        super().__init__()
        self.flushes = 0

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


@pytest.fixture
def engine_streams() -> Callable[[str], Tuple[RecordingStream, io.StringIO]]:
    """Factory fixture returning ``(stdin, stdout)`` for canned engine output.

    Usage:
        stdin, stdout = engine_streams("= 2\\n\\n= GNU Go\\n\\n")
    """
    def _make(output: str) -> Tuple[RecordingStream, io.StringIO]:
        return RecordingStream(), io.StringIO(output)
    return _make


# ---------------------------------------------------------------------------
# Fake Engine Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_engine_args() -> Callable[..., Tuple[str, List[str]]]:
    """Return ``(executable, args)`` for spawning the scripted engine.

    Extra switches (``--moves``, ``--hang-on`` ...) are appended verbatim.
    """
    def _args(*extra: str) -> Tuple[str, List[str]]:
        return sys.executable, [str(FAKE_ENGINE), "--mode", "gtp", *extra]
    return _args


@pytest.fixture
def fake_session(fake_engine_args):
    """Start a session on the scripted engine and close it afterwards."""
    from api import gnugo

    sessions = []

    def _start(*extra: str) -> "gnugo.Session":
        executable, args = fake_engine_args(*extra)
        session = gnugo.start(executable, args)
        sessions.append(session)
        return session

    yield _start

    for session in sessions:
        session.close()


# ---------------------------------------------------------------------------
# Pytest Configuration
# ---------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "subprocess: tests spawning the scripted fake engine"
    )

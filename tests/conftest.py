"""
Shared fixtures: src/ on sys.path and an in-memory terminal surface
"""

import sys
from pathlib import Path

import pytest

# Add src (and the test helpers next to this file) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from fakes import FakeTerminalSurface
from utils.logger import configure_logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep log output out of test reports"""
    configure_logger(enabled=False)
    yield
    configure_logger(enabled=False)


@pytest.fixture
def make_surface():
    def _make(size=(80, 24), keys=(), fail_on_frame=None) -> FakeTerminalSurface:
        return FakeTerminalSurface(size=size, keys=keys, fail_on_frame=fail_on_frame)
    return _make

"""Pytest fixtures for crun-mcp tests."""

import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from crun_mcp.config import RunConfig  # noqa: E402


def make_process(returncode: int = 0, stderr_chunks: list[bytes] | None = None):
    """Build a mock asyncio subprocess."""
    process = AsyncMock()
    process.pid = 1234
    process.returncode = returncode
    process.stderr = MagicMock()
    process.stderr.read = AsyncMock(side_effect=[*(stderr_chunks or []), b""])
    process.wait = AsyncMock(return_value=returncode)
    return process


@pytest.fixture
def sample_config():
    """Configuration with launching enabled and known compilers."""
    return RunConfig(
        c_compiler="gcc",
        cpp_compiler="g++",
        c_compiler_options="-Wall -O2",
        cpp_compiler_options="-std=c++17",
        make_command="make",
    )


@pytest.fixture
def c_source(tmp_path):
    """A C source file on disk."""
    path = tmp_path / "x.c"
    path.write_text("int main(void) { return 0; }\n")
    return path


@pytest.fixture
def cpp_source(tmp_path):
    """A C++ source file on disk."""
    path = tmp_path / "main.cpp"
    path.write_text("int main() { return 0; }\n")
    return path

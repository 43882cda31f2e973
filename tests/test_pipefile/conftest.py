"""
Pytest fixtures for pipefile tests.

Shared fixtures for unit and integration tests.
"""

from pathlib import Path
from typing import Dict

import pytest

from pipefile.config import PipeFileConfig, reset_config, set_config
from pipefile.infrastructure.filesystem import InMemoryFileSystem
from pipefile.testing import RecordingSink


# ═══════════════════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture(autouse=True)
def pipefile_config():
    """Install the test config (4-byte chunks) for every test."""
    config = PipeFileConfig.for_testing()
    set_config(config)
    yield config
    reset_config()


# ═══════════════════════════════════════════════════════════════════════════════
# Collaborators
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def memory_fs(pipefile_config) -> InMemoryFileSystem:
    """In-memory filesystem with a couple of source files."""
    return InMemoryFileSystem(
        {
            "/src/hello.txt": b"hello",
            "/src/app.js": b"console.log('app');\n",
        },
        chunk_size=pipefile_config.chunk_size,
    )


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def errors():
    """List usable as an error handler: errors.append."""
    return []


# ═══════════════════════════════════════════════════════════════════════════════
# Temporary File Fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def sample_files(tmp_path) -> Dict[str, Path]:
    """Create sample source files with known content."""
    files = {}

    text_path = tmp_path / "src" / "notes.txt"
    text_path.parent.mkdir(parents=True)
    text_path.write_text("pipeline stage input\n", encoding="utf-8")
    files["txt"] = text_path

    binary_path = tmp_path / "src" / "logo.bin"
    binary_path.write_bytes(bytes(range(256)) * 4)
    files["bin"] = binary_path

    empty_path = tmp_path / "src" / "empty.txt"
    empty_path.write_bytes(b"")
    files["empty"] = empty_path

    return files

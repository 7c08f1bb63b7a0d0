from __future__ import annotations

import pytest

from tests.fs_mock import MemoryFileSystem


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()

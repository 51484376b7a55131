"""Common test fixtures for pipeline-xray."""

from pathlib import Path

import pytest

from pipeline_xray.recorder import TraceRecorder
from pipeline_xray.trace_store.local import FileTraceStore
from pipeline_xray.trace_store.memory import MemoryTraceStore


@pytest.fixture
def memory_store() -> MemoryTraceStore:
    return MemoryTraceStore()


@pytest.fixture
def file_store(tmp_path: Path) -> FileTraceStore:
    """File store whose parent directory does not exist yet."""
    return FileTraceStore(tmp_path / "data" / "traces.json")


@pytest.fixture
def recorder(memory_store: MemoryTraceStore) -> TraceRecorder:
    return TraceRecorder(memory_store, regression_mode=False)

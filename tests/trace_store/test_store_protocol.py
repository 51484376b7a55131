"""Tests for the TraceStore protocol, the factory, and the database placeholder."""

from pathlib import Path

import pytest

from pipeline_xray.models import Trace, TracesData
from pipeline_xray.settings import Settings
from pipeline_xray.trace_store import (
    FileTraceStore,
    MemoryTraceStore,
    PostgresTraceStore,
    TraceStore,
    create_trace_store,
)


class _DummyStore:
    """Minimal class implementing the TraceStore protocol."""

    async def read_traces(self) -> TracesData:
        return TracesData()

    async def write_trace(self, trace: Trace) -> None:
        pass

    async def get_trace(self, trace_id: str) -> Trace | None:
        return None

    async def delete_trace(self, trace_id: str) -> bool:
        return False

    async def is_available(self) -> bool:
        return True


class _IncompleteStore:
    """Class missing required protocol methods."""

    async def read_traces(self) -> TracesData:
        return TracesData()


def test_trace_store_is_runtime_checkable_protocol():
    assert isinstance(_DummyStore(), TraceStore)


def test_incomplete_class_does_not_satisfy_protocol():
    assert not isinstance(_IncompleteStore(), TraceStore)


class TestCreateTraceStore:
    def test_file_backend_by_default(self, tmp_path: Path):
        store = create_trace_store(Settings(xray_traces_file=tmp_path / "t.json"))
        assert isinstance(store, FileTraceStore)
        assert store.file_path == tmp_path / "t.json"

    def test_memory_backend(self):
        assert isinstance(create_trace_store(Settings(xray_trace_store="memory")), MemoryTraceStore)

    def test_each_call_builds_a_new_store(self):
        memory = Settings(xray_trace_store="memory")
        assert create_trace_store(memory) is not create_trace_store(memory)


class _CompletePostgresStore(PostgresTraceStore):
    async def read_traces(self) -> TracesData:
        return TracesData()

    async def write_trace(self, trace: Trace) -> None:
        pass

    async def get_trace(self, trace_id: str) -> Trace | None:
        return None

    async def delete_trace(self, trace_id: str) -> bool:
        return False

    async def is_available(self) -> bool:
        return False


class TestPostgresTraceStore:
    def test_cannot_instantiate_placeholder(self):
        with pytest.raises(TypeError):
            PostgresTraceStore("postgresql://localhost/xray")  # type: ignore[abstract]

    def test_partial_subclass_cannot_instantiate(self):
        class _Partial(PostgresTraceStore):
            async def read_traces(self) -> TracesData:
                return TracesData()

        with pytest.raises(TypeError):
            _Partial("postgresql://localhost/xray")  # type: ignore[abstract]

    def test_complete_subclass_satisfies_protocol(self):
        store = _CompletePostgresStore("postgresql://localhost/xray")
        assert store.dsn == "postgresql://localhost/xray"
        assert isinstance(store, TraceStore)

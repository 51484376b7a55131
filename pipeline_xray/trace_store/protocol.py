"""Trace store protocol.

Defines the TraceStore protocol that every storage backend implements. The
recorder depends only on this protocol, so backends can be swapped without
touching recording code.
"""

from typing import Protocol, runtime_checkable

from pipeline_xray.models import Trace, TracesData


@runtime_checkable
class TraceStore(Protocol):
    """Protocol for trace storage backends.

    Implementations: FileTraceStore (CLI/dashboard), MemoryTraceStore (testing).
    PostgresTraceStore is an abstract placeholder for a database backend.
    """

    async def read_traces(self) -> TracesData:
        """Return every stored trace, oldest first. Never raises; degrades to an empty document."""
        ...

    async def write_trace(self, trace: Trace) -> None:
        """Append a trace and persist the whole document. Failures propagate."""
        ...

    async def get_trace(self, trace_id: str) -> Trace | None:
        """Return the first stored trace with this id, or None."""
        ...

    async def delete_trace(self, trace_id: str) -> bool:
        """Remove every trace with this id. Returns True if anything was removed."""
        ...

    async def is_available(self) -> bool:
        """Best-effort check that writes are currently possible."""
        ...

"""In-memory trace store for testing.

List-based storage implementing the full TraceStore protocol.
Not for production use: all traces are lost when the process exits.
"""

from pipeline_xray.models import Trace, TracesData


class MemoryTraceStore:
    """List-backed trace store for unit tests.

    Traces are copied on the way in and on the way out, so callers never share
    mutable state with the store.
    """

    def __init__(self) -> None:
        self._traces: list[Trace] = []

    async def read_traces(self) -> TracesData:
        """Return copies of all stored traces, oldest first."""
        return TracesData(traces=[t.model_copy(deep=True) for t in self._traces])

    async def write_trace(self, trace: Trace) -> None:
        """Append a copy of the trace."""
        self._traces.append(trace.model_copy(deep=True))

    async def get_trace(self, trace_id: str) -> Trace | None:
        """Return a copy of the first trace with this id."""
        found = next((t for t in self._traces if t.id == trace_id), None)
        return found.model_copy(deep=True) if found is not None else None

    async def delete_trace(self, trace_id: str) -> bool:
        """Remove all traces with this id."""
        initial = len(self._traces)
        self._traces = [t for t in self._traces if t.id != trace_id]
        return len(self._traces) != initial

    async def is_available(self) -> bool:
        """Always writable."""
        return True

    def clear(self) -> None:
        """Drop every stored trace."""
        self._traces.clear()

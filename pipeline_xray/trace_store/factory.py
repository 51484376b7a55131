"""Factory function for creating trace store instances based on settings."""

from pipeline_xray.settings import Settings
from pipeline_xray.trace_store.protocol import TraceStore


def create_trace_store(settings: Settings) -> TraceStore:
    """Create a TraceStore based on settings.

    Selects MemoryTraceStore when ``xray_trace_store`` is ``memory``,
    otherwise a FileTraceStore at ``xray_traces_file``.

    Backends are imported lazily to avoid circular imports.
    """
    if settings.xray_trace_store == "memory":
        from pipeline_xray.trace_store.memory import MemoryTraceStore

        return MemoryTraceStore()

    from pipeline_xray.trace_store.local import FileTraceStore

    return FileTraceStore(settings.xray_traces_file)

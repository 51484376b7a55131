"""Trace store protocol and backends for recorded pipeline traces."""

from .factory import create_trace_store
from .local import FileTraceStore
from .memory import MemoryTraceStore
from .postgres import PostgresTraceStore
from .protocol import TraceStore

__all__ = [
    "FileTraceStore",
    "MemoryTraceStore",
    "PostgresTraceStore",
    "TraceStore",
    "create_trace_store",
]

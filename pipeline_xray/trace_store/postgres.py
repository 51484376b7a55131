"""Database-backed trace store placeholder.

No database backend ships with pipeline-xray. PostgresTraceStore declares the
TraceStore operations as abstract methods so a concrete backend can subclass
it; the class itself cannot be instantiated.
"""

from abc import ABC, abstractmethod

from pipeline_xray.models import Trace, TracesData


class PostgresTraceStore(ABC):
    """Abstract base for a PostgreSQL trace store.

    Subclasses implement the five TraceStore operations against the database
    named by ``dsn``.
    """

    def __init__(self, dsn: str) -> None:
        self._dsn = dsn

    @property
    def dsn(self) -> str:
        """Connection string the backend was configured with."""
        return self._dsn

    @abstractmethod
    async def read_traces(self) -> TracesData: ...

    @abstractmethod
    async def write_trace(self, trace: Trace) -> None: ...

    @abstractmethod
    async def get_trace(self, trace_id: str) -> Trace | None: ...

    @abstractmethod
    async def delete_trace(self, trace_id: str) -> bool: ...

    @abstractmethod
    async def is_available(self) -> bool: ...

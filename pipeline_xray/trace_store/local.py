"""Local filesystem trace store.

Layout:
    {file_path}    <- one JSON document: {"traces": [Trace, ...]}, oldest first

Every write reads the whole document, appends and rewrites it. There is no
locking: two processes writing at once can lose an update.
"""

import asyncio
import json
from pathlib import Path

from pipeline_xray.exceptions import TraceStoreReadError
from pipeline_xray.logging import get_pipeline_logger
from pipeline_xray.models import Trace, TracesData

logger = get_pipeline_logger(__name__)

DEFAULT_TRACES_PATH = Path("data") / "traces.json"


class FileTraceStore:
    """Trace store backed by a single JSON file.

    Reads degrade to an empty document when the file is missing or unreadable.
    Writes and deletes read strictly, so a corrupt file is reported through
    TraceStoreReadError instead of being overwritten with only the new trace.
    """

    def __init__(self, file_path: Path | None = None) -> None:
        self._file_path = file_path or Path.cwd() / DEFAULT_TRACES_PATH

    @property
    def file_path(self) -> Path:
        """Location of the JSON document."""
        return self._file_path

    async def read_traces(self) -> TracesData:
        """Load all traces. Missing or corrupt files read as empty."""
        try:
            return await self.read_traces_strict()
        except TraceStoreReadError as e:
            logger.warning(f"Failed to read traces from {self._file_path}: {e}")
            return TracesData()

    async def read_traces_strict(self) -> TracesData:
        """Load all traces, raising TraceStoreReadError if the file exists but is unusable."""
        return await asyncio.to_thread(self._load_sync)

    async def write_trace(self, trace: Trace) -> None:
        """Append a trace and rewrite the document."""
        await asyncio.to_thread(self._write_trace_sync, trace)

    async def get_trace(self, trace_id: str) -> Trace | None:
        """Return the first (oldest) trace with this id."""
        data = await self.read_traces()
        return next((t for t in data.traces if t.id == trace_id), None)

    async def delete_trace(self, trace_id: str) -> bool:
        """Remove all traces with this id, rewriting the file only if one was found."""
        return await asyncio.to_thread(self._delete_trace_sync, trace_id)

    async def is_available(self) -> bool:
        """Check that the parent directory exists or can be created."""
        try:
            await asyncio.to_thread(self._ensure_directory)
        except OSError as e:
            logger.warning(f"Trace directory {self._file_path.parent} is not writable: {e}")
            return False
        return True

    # --- Sync implementation (called via asyncio.to_thread) ---

    def _ensure_directory(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    def _load_sync(self) -> TracesData:
        if not self._file_path.exists():
            return TracesData()
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict) or "traces" not in raw:
                raise ValueError('document has no "traces" array')
            return TracesData.model_validate(raw)
        except (OSError, ValueError) as e:  # includes JSON decoding and validation errors
            raise TraceStoreReadError(f"cannot load {self._file_path}: {e}") from e

    def _dump_sync(self, data: TracesData) -> None:
        payload = data.model_dump(mode="json", by_alias=True)
        self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def _write_trace_sync(self, trace: Trace) -> None:
        self._ensure_directory()
        data = self._load_sync()
        data.traces.append(trace)
        self._dump_sync(data)
        logger.debug(f"Wrote trace '{trace.id}' to {self._file_path} ({len(data.traces)} stored)")

    def _delete_trace_sync(self, trace_id: str) -> bool:
        data = self._load_sync()
        remaining = [t for t in data.traces if t.id != trace_id]
        if len(remaining) == len(data.traces):
            return False
        self._dump_sync(TracesData(traces=remaining))
        logger.debug(f"Deleted {len(data.traces) - len(remaining)} trace(s) with id '{trace_id}'")
        return True

"""Read payload served to the trace dashboard.

The dashboard checks for a ``traces`` array, so every outcome, including an
unreadable file, is reported in that shape:

    missing file      -> {"traces": []}
    unreadable file   -> {"traces": [], "error": "Failed to load traces"}
    otherwise         -> {"traces": [...]}   most recent first
"""

from pathlib import Path
from typing import Any

from pipeline_xray.exceptions import TraceStoreReadError
from pipeline_xray.logging import get_pipeline_logger
from pipeline_xray.trace_store.local import FileTraceStore

logger = get_pipeline_logger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load traces"


async def build_traces_payload(file_path: Path) -> dict[str, Any]:
    """Build the dashboard payload for the trace document at ``file_path``."""
    store = FileTraceStore(file_path)
    try:
        data = await store.read_traces_strict()
    except TraceStoreReadError as e:
        logger.error(f"Error reading traces: {e}")
        return {"traces": [], "error": LOAD_ERROR_MESSAGE}

    traces = [trace.model_dump(mode="json", by_alias=True) for trace in reversed(data.traces)]
    return {"traces": traces}

"""pipeline-xray - record and inspect multi-step AI pipeline runs.

A trace captures every step of one pipeline run: its structured input and
output, the reasoning behind it, whether it succeeded, and when it ran. Traces
are persisted through a pluggable trace store and can be compared with earlier
runs to spot structural regressions in step payloads.

Quick Start:
    >>> from pipeline_xray import StepData, StepStatus, TraceRecorder
    >>> from pipeline_xray.trace_store import FileTraceStore
    >>>
    >>> recorder = TraceRecorder(FileTraceStore())
    >>> recorder.start_trace("run-7", "Competitor selection")
    >>> recorder.add_step(StepData(
    ...     step_name="Candidate Search",
    ...     input={"keywords": ["yoga mat"]},
    ...     output={"candidates": [{"asin": "B01", "price": 21.5}]},
    ...     reasoning="Top 50 marketplace results",
    ... ))
    >>> result = await recorder.check_regression("run-6")
    >>> await recorder.save()

Environment Variables:
    - XRAY_TRACES_FILE: JSON document used by the file trace store
    - XRAY_TRACE_STORE: ``file`` (default) or ``memory``
    - XRAY_REGRESSION_MODE: Default regression tracking for new recorders
"""

from .exceptions import NoActiveTraceError, TraceStoreError, TraceStoreReadError, XRayError
from .logging import LoggingConfig, get_pipeline_logger, setup_logging
from .models import RegressionChange, RegressionResult, Step, StepData, StepStatus, Trace, TracesData
from .payload import build_traces_payload
from .recorder import TraceRecorder
from .regression import compare_traces
from .settings import Settings, settings
from .structure import StructureDiff, diff_structures, structure_of
from .trace_store import FileTraceStore, MemoryTraceStore, TraceStore, create_trace_store

__version__ = "0.1.0"

__all__ = [
    # Config/Settings
    "Settings",
    "settings",
    # Logging
    "LoggingConfig",
    "get_pipeline_logger",
    "setup_logging",
    # Errors
    "NoActiveTraceError",
    "TraceStoreError",
    "TraceStoreReadError",
    "XRayError",
    # Models
    "RegressionChange",
    "RegressionResult",
    "Step",
    "StepData",
    "StepStatus",
    "Trace",
    "TracesData",
    # Recording
    "TraceRecorder",
    # Structure / regression
    "StructureDiff",
    "compare_traces",
    "diff_structures",
    "structure_of",
    # Storage
    "build_traces_payload",
    "FileTraceStore",
    "MemoryTraceStore",
    "TraceStore",
    "create_trace_store",
]

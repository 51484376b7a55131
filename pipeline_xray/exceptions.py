"""Exception hierarchy for pipeline-xray.

All exceptions inherit from XRayError. Write-side I/O failures are not wrapped
and surface as the underlying ``OSError``.
"""


class XRayError(Exception):
    """Base exception for all pipeline-xray errors."""


class NoActiveTraceError(XRayError):
    """Raised when a step is added or a trace saved before ``start_trace``."""


class TraceStoreError(XRayError):
    """Base exception for trace store failures."""


class TraceStoreReadError(TraceStoreError):
    """Raised when an existing backing store cannot be read, parsed or validated."""

"""Trace recorder: builds one trace at a time and persists it.

A recorder is an explicit object; create one per recording session and pass
it to the code that records steps. It holds a single mutable trace and no
locks, so it must be driven by one caller at a time.

Example:
    >>> recorder = TraceRecorder(MemoryTraceStore())
    >>> recorder.start_trace("run-42", "Competitor selection")
    >>> recorder.add_step(StepData(step_name="Search", input={"q": "mug"}, output={"hits": 3}))
    >>> await recorder.save()
"""

import copy
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from pipeline_xray.exceptions import NoActiveTraceError
from pipeline_xray.logging import get_pipeline_logger
from pipeline_xray.models import RegressionResult, Step, StepData, StepStatus, Trace
from pipeline_xray.regression import compare_traces
from pipeline_xray.settings import settings
from pipeline_xray.structure import structure_of
from pipeline_xray.trace_store import TraceStore, create_trace_store

logger = get_pipeline_logger(__name__)

__all__ = ["TraceRecorder"]


def _snapshot(payload: Any) -> Any:
    """Detach a step payload from the caller's objects."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True)
    return copy.deepcopy(payload)


class TraceRecorder:
    """Records pipeline steps into a trace and saves it through a TraceStore.

    Args:
        store: Backend used by ``save`` and ``check_regression``. Defaults to
            the backend selected by the global settings.
        regression_mode: Track the structural fingerprint of each step's
            input and output while recording. Defaults to
            ``settings.xray_regression_mode``.
    """

    def __init__(self, store: TraceStore | None = None, *, regression_mode: bool | None = None) -> None:
        self._store: TraceStore = store if store is not None else create_trace_store(settings)
        self._regression_mode = settings.xray_regression_mode if regression_mode is None else regression_mode
        self._current_trace: Trace | None = None
        self._structures: dict[str, list[str]] = {}

    @property
    def store(self) -> TraceStore:
        return self._store

    @store.setter
    def store(self, store: TraceStore) -> None:
        self._store = store

    @property
    def current_trace(self) -> Trace | None:
        """A copy of the trace being recorded, or None between ``save`` and ``start_trace``.

        The recorder owns the live trace; change it only through ``add_step`` and
        ``set_trace_status``.
        """
        return self._current_trace.model_copy(deep=True) if self._current_trace is not None else None

    @property
    def regression_mode(self) -> bool:
        return self._regression_mode

    @property
    def tracked_structures(self) -> Mapping[str, list[str]]:
        """Fingerprints keyed ``"<step_name>.input"`` / ``"<step_name>.output"``."""
        return MappingProxyType(self._structures)

    def enable_regression_mode(self) -> None:
        self._regression_mode = True

    def disable_regression_mode(self) -> None:
        """Stop tracking and forget all tracked fingerprints."""
        self._regression_mode = False
        self._structures.clear()

    def start_trace(self, trace_id: str, name: str) -> Trace:
        """Open a new trace, replacing any unsaved one without persisting it.

        Returns a copy of the new trace.
        """
        if self._current_trace is not None:
            logger.debug(f"Discarding unsaved trace '{self._current_trace.id}' ({len(self._current_trace.steps)} steps)")
        self._current_trace = Trace(id=trace_id, name=name, timestamp=datetime.now(UTC))
        self._structures.clear()
        return self._current_trace.model_copy(deep=True)

    def add_step(self, step_data: StepData) -> Step:
        """Append a step to the current trace.

        A failed step marks the whole trace as failed; later successful steps
        do not undo that. The returned step is a copy.

        Raises:
            NoActiveTraceError: If no trace has been started.
        """
        trace = self._current_trace
        if trace is None:
            raise NoActiveTraceError("No active trace. Call start_trace() first.")

        timestamp = datetime.now(UTC)
        if trace.steps and timestamp < trace.steps[-1].timestamp:
            timestamp = trace.steps[-1].timestamp

        step = Step(
            step_name=step_data.step_name,
            input=_snapshot(step_data.input),
            output=_snapshot(step_data.output),
            reasoning=step_data.reasoning,
            status=step_data.status,
            timestamp=timestamp,
        )
        trace.steps.append(step)

        if step.status == StepStatus.FAILURE:
            trace.status = StepStatus.FAILURE

        if self._regression_mode:
            self._structures[f"{step.step_name}.input"] = structure_of(step.input)
            self._structures[f"{step.step_name}.output"] = structure_of(step.output)

        return step.model_copy(deep=True)

    def set_trace_status(self, status: StepStatus) -> None:
        """Override the current trace's status. No-op without an open trace."""
        if self._current_trace is not None:
            self._current_trace.status = status

    async def check_regression(self, previous_trace_id: str) -> RegressionResult:
        """Compare the current trace's step structures with a stored trace.

        Returns an empty result when no trace is open or the stored trace is
        not found.
        """
        if self._current_trace is None:
            return RegressionResult()

        previous = await self._store.get_trace(previous_trace_id)
        if previous is None:
            logger.debug(f"No stored trace '{previous_trace_id}' to compare against")
            return RegressionResult()

        result = compare_traces(previous, self._current_trace)
        if result.has_regression:
            logger.warning(
                f"Trace '{self._current_trace.id}' differs structurally from '{previous_trace_id}' "
                f"in {len(result.changes)} field(s)"
            )
        return result

    async def save(self) -> Trace:
        """Persist the current trace and close it.

        Raises:
            NoActiveTraceError: If no trace is open, including after a previous save.
        """
        trace = self._current_trace
        if trace is None:
            raise NoActiveTraceError("No active trace to save.")

        await self._store.write_trace(trace)
        logger.info(f"Trace '{trace.id}' saved ({len(trace.steps)} steps, {trace.status})")
        self._current_trace = None
        return trace

    @asynccontextmanager
    async def recording(self, trace_id: str, name: str) -> AsyncIterator["TraceRecorder"]:
        """Record a trace for the duration of the block and save it on exit.

        If the block raises, the trace is marked failed, saved, and the
        exception propagates.
        """
        self.start_trace(trace_id, name)
        try:
            yield self
        except Exception:
            self.set_trace_status(StepStatus.FAILURE)
            if self._current_trace is not None:
                await self.save()
            raise
        if self._current_trace is not None:
            await self.save()

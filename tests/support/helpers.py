"""Builders for steps and traces with fixed timestamps."""

from datetime import UTC, datetime
from typing import Any

from pipeline_xray.models import Step, StepData, StepStatus, Trace

FIXED_TIME = datetime(2025, 3, 14, 9, 26, 53, tzinfo=UTC)


def make_step(
    step_name: str,
    input: dict[str, Any] | None = None,
    output: dict[str, Any] | None = None,
    status: StepStatus = StepStatus.SUCCESS,
) -> Step:
    """Create a Step stamped with FIXED_TIME."""
    return Step(
        step_name=step_name,
        input=input or {},
        output=output or {},
        reasoning=f"{step_name} reasoning",
        status=status,
        timestamp=FIXED_TIME,
    )


def make_trace(trace_id: str, *steps: Step, name: str | None = None) -> Trace:
    """Create a Trace whose status reflects its steps."""
    status = StepStatus.FAILURE if any(s.status == StepStatus.FAILURE for s in steps) else StepStatus.SUCCESS
    return Trace(id=trace_id, name=name or f"Trace {trace_id}", timestamp=FIXED_TIME, status=status, steps=list(steps))


def step_data(step_name: str, input: dict[str, Any] | None = None, output: dict[str, Any] | None = None, **kwargs: Any) -> StepData:
    """Create StepData with empty payloads by default."""
    return StepData(step_name=step_name, input=input or {}, output=output or {}, **kwargs)

#!/usr/bin/env python3
"""Trace recorder showcase. Runs standalone without external services.

Demonstrates:
  - Recording steps with TraceRecorder into MemoryTraceStore
  - The recording() context manager and failure propagation
  - FileTraceStore persistence and the dashboard payload
  - Regression mode and structural comparison against a stored trace

Usage:
  python examples/showcase_recorder.py
"""

import asyncio
from pathlib import Path
from tempfile import TemporaryDirectory

from pipeline_xray import (
    FileTraceStore,
    MemoryTraceStore,
    StepData,
    StepStatus,
    TraceRecorder,
    build_traces_payload,
)

# ---------------------------------------------------------------------------
# 1. MemoryTraceStore: record and read back
# ---------------------------------------------------------------------------


async def demo_memory_store() -> None:
    print("\n=== MemoryTraceStore Demo ===\n")

    store = MemoryTraceStore()
    recorder = TraceRecorder(store, regression_mode=False)

    recorder.start_trace("run-1", "Mug search")
    recorder.add_step(StepData(step_name="Search", input={"q": "mug"}, output={"hits": 3}, reasoning="Top 3 results"))
    recorder.add_step(StepData(step_name="Filter", input={"min_price": 10}, output={"kept": 0}, status=StepStatus.FAILURE))
    trace = await recorder.save()

    print(f"Saved '{trace.id}' with {len(trace.steps)} steps, status={trace.status}")
    stored = await store.get_trace("run-1")
    assert stored is not None
    print(f"Read back: {[s.step_name for s in stored.steps]}")

    # Context manager: an exception marks the trace failed, saves it, and propagates
    try:
        async with recorder.recording("run-2", "Crashing run") as active:
            active.add_step(StepData(step_name="Search", input={"q": "lamp"}, output={"hits": 1}))
            raise RuntimeError("ranking service unavailable")
    except RuntimeError as e:
        print(f"\nrecording() re-raised: {e}")
    crashed = await store.get_trace("run-2")
    assert crashed is not None
    print(f"'run-2' saved anyway, status={crashed.status}")


# ---------------------------------------------------------------------------
# 2. FileTraceStore and dashboard payload
# ---------------------------------------------------------------------------


async def demo_file_store(base: Path) -> None:
    print("\n=== FileTraceStore Demo ===\n")

    traces_file = base / "data" / "traces.json"
    recorder = TraceRecorder(FileTraceStore(traces_file), regression_mode=False)

    for i in range(3):
        async with recorder.recording(f"run-{i}", f"Nightly run {i}"):
            recorder.add_step(StepData(step_name="Search", input={"q": "bottle"}, output={"hits": 10 + i}))

    print(f"Wrote {traces_file} ({traces_file.stat().st_size} bytes)")
    payload = await build_traces_payload(traces_file)
    print(f"Dashboard payload (most recent first): {[t['id'] for t in payload['traces']]}")


# ---------------------------------------------------------------------------
# 3. Regression mode
# ---------------------------------------------------------------------------


async def demo_regression() -> None:
    print("\n=== Regression Demo ===\n")

    store = MemoryTraceStore()
    recorder = TraceRecorder(store, regression_mode=True)

    async with recorder.recording("baseline", "Baseline"):
        recorder.add_step(StepData(step_name="Search", input={"q": "mat"}, output={"candidates": [{"asin": "B01", "price": 20}]}))

    recorder.start_trace("candidate", "Candidate")
    recorder.add_step(StepData(step_name="Search", input={"q": "mat"}, output={"candidates": [{"asin": "B01", "cost": 20}]}))
    print(f"Tracked structures: {dict(recorder.tracked_structures)}")

    result = await recorder.check_regression("baseline")
    print(f"has_regression={result.has_regression}")
    for change in result.changes:
        print(f"  {change.step_name}.{change.field}: +{change.added_keys} -{change.removed_keys}")
    await recorder.save()


async def main() -> None:
    await demo_memory_store()
    with TemporaryDirectory() as tmp:
        await demo_file_store(Path(tmp))
    await demo_regression()


if __name__ == "__main__":
    asyncio.run(main())

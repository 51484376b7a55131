"""CLI for inspecting recorded traces and generating demo data."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from pipeline_xray.demo import generate_demo_traces
from pipeline_xray.exceptions import TraceStoreReadError
from pipeline_xray.models import Trace
from pipeline_xray.payload import build_traces_payload
from pipeline_xray.recorder import TraceRecorder
from pipeline_xray.regression import compare_traces
from pipeline_xray.settings import settings
from pipeline_xray.trace_store.local import FileTraceStore


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def _format_trace_line(trace: Trace) -> str:
    return f"{trace.id:<20} {trace.status:<8} {len(trace.steps):>3} steps  {trace.timestamp.isoformat()}  {trace.name}"


async def _run_list(store: FileTraceStore) -> int:
    data = await store.read_traces()
    if not data.traces:
        print("No traces recorded.")
        return 0
    for trace in reversed(data.traces):
        print(_format_trace_line(trace))
    return 0


async def _run_show(store: FileTraceStore, trace_id: str) -> int:
    trace = await store.get_trace(trace_id)
    if trace is None:
        print(f"Trace '{trace_id}' not found", file=sys.stderr)
        return 1
    _print_json(trace.model_dump(mode="json", by_alias=True))
    return 0


async def _run_delete(store: FileTraceStore, trace_id: str) -> int:
    if not await store.delete_trace(trace_id):
        print(f"Trace '{trace_id}' not found", file=sys.stderr)
        return 1
    print(f"Deleted trace '{trace_id}'")
    return 0


async def _run_export(store: FileTraceStore) -> int:
    payload = await build_traces_payload(store.file_path)
    _print_json(payload)
    return 1 if "error" in payload else 0


async def _run_regress(store: FileTraceStore, current_id: str, previous_id: str) -> int:
    current = await store.get_trace(current_id)
    previous = await store.get_trace(previous_id)
    missing = [trace_id for trace_id, trace in ((current_id, current), (previous_id, previous)) if trace is None]
    if missing:
        print(f"Trace(s) not found: {', '.join(missing)}", file=sys.stderr)
        return 2
    assert current is not None and previous is not None
    result = compare_traces(previous, current)
    _print_json(result.model_dump(mode="json", by_alias=True))
    return 1 if result.has_regression else 0


async def _run_demo(store: FileTraceStore, seed: int | None) -> int:
    traces = await generate_demo_traces(TraceRecorder(store), seed=seed)
    for trace in traces:
        print(_format_trace_line(trace))
    print(f"Saved {len(traces)} traces to {store.file_path}")
    return 0


async def _dispatch(args: argparse.Namespace, store: FileTraceStore) -> int:
    if args.command == "list":
        return await _run_list(store)
    if args.command == "show":
        return await _run_show(store, args.trace_id)
    if args.command == "delete":
        return await _run_delete(store, args.trace_id)
    if args.command == "export":
        return await _run_export(store)
    if args.command == "regress":
        return await _run_regress(store, args.current_id, args.previous_id)
    return await _run_demo(store, args.seed)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xray", description="Inspect recorded pipeline traces")
    parser.add_argument(
        "--traces-file",
        type=Path,
        default=settings.xray_traces_file,
        help=f"Trace document (default: {settings.xray_traces_file})",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("list", help="List traces, most recent first")
    show = subparsers.add_parser("show", help="Print one trace as JSON")
    show.add_argument("trace_id")
    delete = subparsers.add_parser("delete", help="Delete every trace with an id")
    delete.add_argument("trace_id")
    subparsers.add_parser("export", help="Print the dashboard payload as JSON")
    regress = subparsers.add_parser("regress", help="Compare step structures of two stored traces")
    regress.add_argument("current_id")
    regress.add_argument("previous_id")
    demo = subparsers.add_parser("demo", help="Record the competitor-selection demo traces")
    demo.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the xray CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    store = FileTraceStore(args.traces_file)
    try:
        return asyncio.run(_dispatch(args, store))
    except TraceStoreReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Tests for the xray CLI."""

import asyncio
import json
from pathlib import Path

import pytest

from pipeline_xray.cli import main
from pipeline_xray.trace_store.local import FileTraceStore
from tests.support.helpers import make_step, make_trace


@pytest.fixture
def traces_file(tmp_path: Path) -> Path:
    return tmp_path / "traces.json"


def _seed(path: Path, *traces) -> None:
    store = FileTraceStore(path)

    async def _write() -> None:
        for trace in traces:
            await store.write_trace(trace)

    asyncio.run(_write())


def _run(traces_file: Path, *args: str) -> int:
    return main(["--traces-file", str(traces_file), *args])


class TestNoCommand:
    def test_prints_help_and_fails(self, capsys: pytest.CaptureFixture[str]):
        assert main([]) == 1
        assert "usage: xray" in capsys.readouterr().out


class TestList:
    def test_empty(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        assert _run(traces_file, "list") == 0
        assert capsys.readouterr().out.strip() == "No traces recorded."

    def test_most_recent_first(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        _seed(traces_file, make_trace("first"), make_trace("second"))

        assert _run(traces_file, "list") == 0

        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[0].startswith("second")
        assert lines[1].startswith("first")

    def test_corrupt_file_lists_nothing(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        traces_file.write_text("nope", encoding="utf-8")
        assert _run(traces_file, "list") == 0
        assert "No traces recorded." in capsys.readouterr().out


class TestShow:
    def test_prints_trace_json(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        _seed(traces_file, make_trace("t1", make_step("Search")))

        assert _run(traces_file, "show", "t1") == 0

        shown = json.loads(capsys.readouterr().out)
        assert shown["id"] == "t1"
        assert shown["steps"][0]["stepName"] == "Search"

    def test_missing(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        assert _run(traces_file, "show", "nope") == 1
        assert "not found" in capsys.readouterr().err


class TestDelete:
    def test_deletes(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        _seed(traces_file, make_trace("t1"), make_trace("t2"))

        assert _run(traces_file, "delete", "t1") == 0

        assert "Deleted trace 't1'" in capsys.readouterr().out
        data = json.loads(traces_file.read_text(encoding="utf-8"))
        assert [t["id"] for t in data["traces"]] == ["t2"]

    def test_missing(self, traces_file: Path):
        assert _run(traces_file, "delete", "nope") == 1

    def test_corrupt_file_is_an_error(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        traces_file.write_text("nope", encoding="utf-8")

        assert _run(traces_file, "delete", "t1") == 1

        assert capsys.readouterr().err.startswith("Error:")
        assert traces_file.read_text(encoding="utf-8") == "nope"


class TestExport:
    def test_prints_payload(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        _seed(traces_file, make_trace("t1"), make_trace("t2"))

        assert _run(traces_file, "export") == 0

        payload = json.loads(capsys.readouterr().out)
        assert [t["id"] for t in payload["traces"]] == ["t2", "t1"]

    def test_corrupt_file(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        traces_file.write_text("nope", encoding="utf-8")

        assert _run(traces_file, "export") == 1

        assert json.loads(capsys.readouterr().out) == {"traces": [], "error": "Failed to load traces"}


class TestRegress:
    def test_no_regression(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        _seed(
            traces_file,
            make_trace("old", make_step("Search", output={"a": 1})),
            make_trace("new", make_step("Search", output={"a": 2})),
        )

        assert _run(traces_file, "regress", "new", "old") == 0

        assert json.loads(capsys.readouterr().out) == {"hasRegression": False, "changes": []}

    def test_regression_exit_code(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        _seed(
            traces_file,
            make_trace("old", make_step("Search", output={"a": 1})),
            make_trace("new", make_step("Search", output={"a": 1, "b": 2})),
        )

        assert _run(traces_file, "regress", "new", "old") == 1

        result = json.loads(capsys.readouterr().out)
        assert result["hasRegression"] is True
        assert result["changes"][0]["addedKeys"] == ["b"]

    def test_missing_trace(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        _seed(traces_file, make_trace("old"))

        assert _run(traces_file, "regress", "new", "old") == 2

        assert "new" in capsys.readouterr().err


class TestDemo:
    def test_writes_three_traces(self, traces_file: Path, capsys: pytest.CaptureFixture[str]):
        assert _run(traces_file, "demo", "--seed", "1") == 0

        out = capsys.readouterr().out
        assert "Saved 3 traces" in out
        data = json.loads(traces_file.read_text(encoding="utf-8"))
        assert [t["id"] for t in data["traces"]] == ["trace-001", "trace-002", "trace-003"]
        assert [t["status"] for t in data["traces"]] == ["success", "failure", "success"]

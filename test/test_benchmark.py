# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging

import pytest

from revpath.__main__ import main
from revpath.toolbox.benchmark import BENCHMARK_LOGGING_LEVEL, Benchmark, reportSteps
from .util import *


@pytest.fixture(autouse=True)
def freshSteps(monkeypatch):
    monkeypatch.setattr(Benchmark, "steps", [])


def testReportOrdersNestedSteps(caplog):
    with Benchmark("Open") as outer:
        with Benchmark("Locate") as inner:
            pass
    with Benchmark("Print"):
        pass

    assert Benchmark.nesting == []
    assert outer.elapsedMs >= inner.elapsedMs >= 0

    with caplog.at_level(BENCHMARK_LOGGING_LEVEL, logger="revpath.toolbox.benchmark"):
        steps = reportSteps("cat")

    assert [s.path for s in steps] == ["Open", "Open/Locate", "Print"]
    assert [s.depth for s in steps] == [0, 1, 0]
    assert Benchmark.steps == []

    messages = [r.getMessage() for r in caplog.records]
    assert messages[0].startswith("cat: ")
    assert messages[1].endswith(" Open")
    assert messages[2].endswith("  Open/Locate")
    assert messages[3].endswith(" Print")
    assert logging.getLevelName(BENCHMARK_LOGGING_LEVEL) == "BENCHMARK"


def testFailedStep(caplog):
    with caplog.at_level(BENCHMARK_LOGGING_LEVEL, logger="revpath.toolbox.benchmark"):
        with pytest.raises(ValueError):
            with Benchmark("Build"):
                raise ValueError("boom")
        steps = reportSteps("history")

    assert Benchmark.nesting == []
    assert steps[0].failed
    messages = [r.getMessage() for r in caplog.records]
    assert any("EXCEPTION RAISED! ValueError" in m for m in messages)
    assert messages[-1].endswith("Build (failed)")


def testEmptyReport():
    assert reportSteps("resolve") == []


def testCommandsRecordSteps(tempDir, monkeypatch):
    captured = []
    monkeypatch.setattr("revpath.__main__.reportSteps", lambda command: captured.extend(reportSteps(command)))

    path = f"{tempPath(tempDir)}/repo"
    makeLinearRepo(path, [{"f": "1\n"}])
    assert main(["history", path]) == 0
    assert [s.path for s in captured] == ["Locate", "Build", "Dump"]

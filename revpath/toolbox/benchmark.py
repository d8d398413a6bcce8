# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Step timings for CLI commands.

Each command wraps its steps (locating the repo, building the graph,
printing...) in Benchmark blocks. Finished steps accumulate until
reportSteps() logs a per-command breakdown and starts afresh.
"""

import dataclasses
import logging
import os
import time

BENCHMARK_LOGGING_LEVEL = 5

logger = logging.getLogger(__name__)
logging.addLevelName(BENCHMARK_LOGGING_LEVEL, "BENCHMARK")

try:
    import psutil
except ModuleNotFoundError:
    psutil = None


def getRSS() -> int:
    if psutil:
        return psutil.Process(os.getpid()).memory_info().rss
    return 0


@dataclasses.dataclass
class StepTiming:
    path: str
    elapsedMs: float
    rssDeltaKb: int
    failed: bool = False

    @property
    def depth(self) -> int:
        return self.path.count("/")


class Benchmark:
    """ Context manager that times one step of a command. Steps may nest. """

    nesting: list[str] = []
    steps: list[StepTiming] = []

    def __init__(self, name: str):
        self.name = name
        self.startTime = 0.0
        self.startBytes = 0
        self.elapsedMs = 0.0

    def __enter__(self):
        Benchmark.nesting.append(self.name)
        self.startBytes = getRSS()
        self.startTime = time.perf_counter()
        return self

    def __exit__(self, exc_type=None, exc_value=None, traceback=None):
        self.elapsedMs = 1000 * (time.perf_counter() - self.startTime)
        kb = (getRSS() - self.startBytes) // 1024

        step = StepTiming("/".join(Benchmark.nesting), self.elapsedMs, kb, failed=exc_type is not None)
        Benchmark.steps.append(step)
        Benchmark.nesting.pop()

        if exc_type:
            logger.log(BENCHMARK_LOGGING_LEVEL, f"{step.path}: EXCEPTION RAISED! {exc_type.__name__}")


def reportSteps(command: str) -> list[StepTiming]:
    """
    Log the steps recorded since the last report with each top-level step's
    share of the total, then clear them. Returns the steps in report order:
    each top-level step followed by the steps nested in it.
    """
    recorded = Benchmark.steps
    Benchmark.steps = []

    # Steps are recorded as they finish, so nested steps come before their parent
    ordered = []
    pending = []
    for step in recorded:
        if step.depth == 0:
            ordered.append(step)
            ordered.extend(sorted(pending, key=lambda s: s.depth))
            pending = []
        else:
            pending.append(step)
    ordered.extend(pending)

    totalMs = sum(s.elapsedMs for s in ordered if s.depth == 0)
    logger.log(BENCHMARK_LOGGING_LEVEL, f"{command}: {totalMs:.1f} ms total")

    for step in ordered:
        share = f"{100 * step.elapsedMs / totalMs:5.1f}%" if step.depth == 0 and totalMs > 0 else " " * 6
        failed = " (failed)" if step.failed else ""
        indent = "  " * step.depth
        logger.log(BENCHMARK_LOGGING_LEVEL,
                   f"{step.elapsedMs:8.1f} ms {step.rssDeltaKb:6,d}K {share} {indent}{step.path}{failed}")

    return ordered

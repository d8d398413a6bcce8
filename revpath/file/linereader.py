# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from collections.abc import Callable, Generator

LineVisitor = Callable[[int, str], bool | None]


def iterLines(data: bytes, firstLine: int = 1) -> Generator[tuple[int, str], None, None]:
    """
    Yield (line number, text) for each line in `data`.
    Lines are split on LF; the terminator isn't included. A trailing
    fragment without a terminator still counts as a line.
    """
    lineno = firstLine
    start = 0
    end = len(data)

    while start != end:
        nl = data.find(b"\n", start)
        if nl < 0:
            yield lineno, data[start:].decode("utf-8", errors="replace")
            return
        yield lineno, data[start:nl].decode("utf-8", errors="replace")
        lineno += 1
        start = nl + 1


def forEachLine(data: bytes, visit: LineVisitor, firstLine: int = 1) -> bool:
    """
    Feed each line of `data` to `visit`. Stops early if `visit` returns False.
    Returns False if stopped early, True if all lines were consumed.
    """
    for lineno, text in iterLines(data, firstLine):
        if visit(lineno, text) is False:
            return False
    return True

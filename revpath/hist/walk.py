# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Generator
from typing import TextIO

from revpath.appconsts import *
from revpath.hist.commitnode import CommitNode, HistoryGraph, RealCommit, UncommittedChanges
from revpath.settings import prefs


def _countNewerInSubgraph(graph: HistoryGraph, root: CommitNode) -> list[int]:
    """
    For each node reachable from `root`, count the newer nodes that are also
    reachable from `root`. Unreachable nodes keep a count of 0.
    """
    reachable = [False] * len(graph)
    reachable[root.index] = True
    pending = [root.index]
    while pending:
        for index in graph[pending.pop()].older:
            if not reachable[index]:
                reachable[index] = True
                pending.append(index)

    counts = [0] * len(graph)
    for node in graph:
        if reachable[node.index]:
            counts[node.index] = sum(1 for i in node.newer if reachable[i])
    return counts


def walkHistory(graph: HistoryGraph, root: CommitNode | None = None) -> Generator[CommitNode, None, None]:
    """
    Yield nodes newest-first: a node only comes out after all of its newer
    nodes (children) have come out.

    Each node keeps count of how many of its children have been seen.
    When the count reaches the number of children that are reachable from
    `root`, the node is ready.
    """

    if root is None:
        root = graph.root

    seen = [0] * len(graph)
    expected = _countNewerInSubgraph(graph, root)

    if APP_DEBUG:
        debugVisited: set[int] = set()

    yield root
    stack = [iter(root.older)]

    while stack:
        for index in stack[-1]:
            seen[index] += 1
            node = graph[index]
            if seen[index] == expected[index]:
                if APP_DEBUG:
                    assert index not in debugVisited, f"{node} visited twice"
                    debugVisited.add(index)
                yield node
                stack.append(iter(node.older))
                break
        else:
            stack.pop()


def iterateHistory(graph: HistoryGraph, root: CommitNode | None, visit: Callable[[CommitNode], None]):
    for node in walkHistory(graph, root):
        visit(node)


def shortId(node: CommitNode) -> str:
    match node.content:
        case RealCommit(commit=commit):
            if prefs.shortHashChars > 0:
                return str(commit.id)[:prefs.shortHashChars]
            return commit.short_id
        case UncommittedChanges():
            return ""


def commitRevision(node: CommitNode) -> str | None:
    """ Full hex id of the node's commit, or None for uncommitted changes. """
    match node.content:
        case RealCommit(commit=commit):
            return str(commit.id)
        case UncommittedChanges():
            return None


def commitSummary(node: CommitNode) -> str:
    return node.summary


def describeCommit(node: CommitNode) -> str:
    match node.content:
        case RealCommit(commit=commit):
            committer = commit.committer
            return (f"{shortId(node)} {time.ctime(commit.commit_time)}\n"
                    f"{committer.name} <{committer.email}>\n"
                    f"{node.summary}")
        case UncommittedChanges():
            return UNCOMMITTED_SUMMARY


def dumpHistory(graph: HistoryGraph, out: TextIO | None = None, limit: int = 0):
    """ Print one line per node, indented by branch. """
    out = out or sys.stdout
    for count, node in enumerate(walkHistory(graph)):
        if 0 < limit <= count:
            break
        if node.isUncommitted:
            print("dirty", file=out)
        else:
            indent = " " * (2 * node.branch)
            print(f"{indent}{shortId(node)}  {node.summary}", file=out)

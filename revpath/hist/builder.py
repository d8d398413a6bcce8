# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Build the ancestry graph of HEAD.

CAVEAT: We assume a single head. Each open branch has its own head, so
commits that are only reachable from other branches don't appear.
"""

from __future__ import annotations

import dataclasses
import logging

from revpath.appconsts import *
from revpath.errors import NotFoundError, RepositoryNotFoundError
from revpath.hist.commitnode import CommitNode, HistoryGraph, RealCommit, UncommittedChanges
from revpath.porcelain import *

_logger = logging.getLogger(__name__)


@dataclasses.dataclass
class _Frame:
    node: CommitNode
    parents: list[Commit]
    branches: list[CommitNode]
    # Start nodes of the branches visible from this node (excluding itself).
    # Owned by this frame: children get a copy.
    nextParent: int = 0


def _findInBranches(graph: HistoryGraph, branches: list[CommitNode], oid: Oid) -> CommitNode | None:
    """
    Look for `oid` in the branches that are visible from the current node.
    From each branch start, only descend along the edge that discovered the
    node below (newer[0]), so that each node is examined once per branch.
    """
    for start in branches:
        pending = [start]
        while pending:
            node = pending.pop()
            if node.commitId == oid:
                return node
            for i in reversed(node.older):
                older = graph[i]
                if older.newer[0] == node.index:
                    pending.append(older)
    return None


def buildHistoryFromCommit(head: Commit, dirty: bool = False) -> HistoryGraph:
    graph = HistoryGraph()

    headNode = graph.newNode(RealCommit(head), branch=0)
    graph.head = headNode
    graph.root = headNode

    frames = [_Frame(headNode, list(head.parents), [])]
    _logger.debug(f"commit {id7(head)}: 1 + {len(frames[0].parents)}")

    while frames:
        frame = frames[-1]

        if frame.nextParent >= len(frame.parents):
            frames.pop()
            continue

        parent = frame.parents[frame.nextParent]
        frame.nextParent += 1

        found = _findInBranches(graph, frame.branches, parent.id)
        if found is not None:
            # Branch lines merge here
            graph.link(frame.node, found)
            continue

        newNode = graph.newNode(RealCommit(parent), branch=len(frame.branches))
        graph.link(frame.node, newNode)

        childFrame = _Frame(newNode, list(parent.parents), list(frame.branches))
        frame.branches.append(newNode)
        frames.append(childFrame)
        _logger.debug(f"commit {id7(parent)}: {len(frame.branches)} + {len(childFrame.parents)}")

    if APP_DEBUG:
        for node in graph:
            if not node.isUncommitted:
                assert len(node.older) == len(node.commit.parent_ids), f"{node} lost some parents"

    if dirty:
        dirtyNode = graph.newNode(UncommittedChanges(), branch=0)
        graph.link(dirtyNode, headNode)
        graph.root = dirtyNode

    _logger.debug(f"{len(graph)} nodes in history of {id7(head)}")
    return graph


def buildHistory(repo: Repo, countUntracked: bool = False) -> HistoryGraph:
    if repo.head_is_unborn:
        raise NotFoundError(repo.path, "HEAD doesn't point to a commit yet")

    head = repo.head.peel(Commit)
    dirty = not repo.is_bare and repo.is_dirty(untracked=countUntracked)
    return buildHistoryFromCommit(head, dirty)


def openHistory(path: str, countUntracked: bool = False) -> HistoryGraph:
    """ Build the history of the repository at (or above) `path`. """
    try:
        repo = Repo(path)
    except (GitError, KeyError) as exc:
        raise RepositoryNotFoundError(path) from exc
    return buildHistory(repo, countUntracked)

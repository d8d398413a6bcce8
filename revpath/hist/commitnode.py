# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
from collections.abc import Iterator

from revpath.appconsts import *
from revpath.porcelain import *


@dataclasses.dataclass(frozen=True)
class RealCommit:
    commit: Commit

    @property
    def id(self) -> Oid:
        return self.commit.id

    @property
    def summary(self) -> str:
        return messageSummary(self.commit.message)


@dataclasses.dataclass(frozen=True)
class UncommittedChanges:
    summary: str = UNCOMMITTED_SUMMARY


@dataclasses.dataclass
class CommitNode:
    index: int
    content: RealCommit | UncommittedChanges
    branch: int = 0

    newer: list[int] = dataclasses.field(default_factory=list)
    # Children, in the order they were linked. newer[0] discovered this node.

    older: list[int] = dataclasses.field(default_factory=list)
    # Parents, in the commit's own parent order.

    def __repr__(self):
        match self.content:
            case RealCommit(commit=commit):
                return f"({self.index},{id7(commit)},b{self.branch})"
            case UncommittedChanges():
                return f"({self.index},dirty)"

    @property
    def isUncommitted(self) -> bool:
        return isinstance(self.content, UncommittedChanges)

    @property
    def commit(self) -> Commit:
        assert isinstance(self.content, RealCommit), "uncommitted changes don't have a commit"
        return self.content.commit

    @property
    def commitId(self) -> Oid | None:
        match self.content:
            case RealCommit(commit=commit):
                return commit.id
            case UncommittedChanges():
                return None

    @property
    def summary(self) -> str:
        return self.content.summary


class HistoryGraph:
    """
    Arena that owns every node reachable from a head commit.
    Nodes refer to each other by index into the arena.
    """

    nodes: list[CommitNode]

    head: CommitNode
    """ Node of the commit that HEAD points to. """

    root: CommitNode
    """ Top of the graph: either the head node or an uncommitted changes node. """

    def __init__(self):
        self.nodes = []

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, index: int) -> CommitNode:
        return self.nodes[index]

    def __iter__(self) -> Iterator[CommitNode]:
        return iter(self.nodes)

    def newNode(self, content: RealCommit | UncommittedChanges, branch: int) -> CommitNode:
        node = CommitNode(len(self.nodes), content, branch)
        self.nodes.append(node)
        return node

    def link(self, child: CommitNode, parent: CommitNode):
        """ Make `parent` the next entry in `child`'s parent list. """
        child.older.append(parent.index)
        parent.newer.append(child.index)

    def older(self, node: CommitNode) -> list[CommitNode]:
        return [self.nodes[i] for i in node.older]

    def newer(self, node: CommitNode) -> list[CommitNode]:
        return [self.nodes[i] for i in node.newer]

    def nodesForCommit(self, oid: Oid) -> list[CommitNode]:
        return [node for node in self.nodes if node.commitId == oid]

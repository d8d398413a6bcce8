# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Reconstruct the commit ancestry graph of a repository's HEAD and walk it
newest-first for display.

CAVEAT: Only HEAD's ancestry is considered.
"""

from revpath.hist.builder import (
    buildHistory,
    buildHistoryFromCommit,
    openHistory,
)
from revpath.hist.commitnode import (
    CommitNode,
    HistoryGraph,
    RealCommit,
    UncommittedChanges,
)
from revpath.hist.walk import (
    commitRevision,
    commitSummary,
    describeCommit,
    dumpHistory,
    iterateHistory,
    shortId,
    walkHistory,
)

# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Locate files in git repositories, including files that only exist at some
past revision, and read them line by line.
"""

from revpath.file.blobfetch import fetchBlob, findFile, lookUpBlob, pickRevision
from revpath.file.canonpath import canonicalPathIntoRepo, normalizeDeadTail, splitDeadTail
from revpath.file.fileopen import OpenedFile, openFile, parseDesignator
from revpath.file.gitfile import GitFile, graftRelative, openGitFile
from revpath.file.linereader import LineVisitor, forEachLine, iterLines
from revpath.file.locator import selectRepo, tryRepo

# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Open a file by designator: `[revision:]path`.

Without a revision, the file on disk wins over the repository, unless the
file is being opened on behalf of a related file that came from git.
"""

from __future__ import annotations

import dataclasses
import logging
import os

from revpath.errors import ResolveError
from revpath.file.gitfile import GitFile, graftRelative, openGitFile
from revpath.file.linereader import LineVisitor, forEachLine
from revpath.settings import prefs

_logger = logging.getLogger(__name__)


@dataclasses.dataclass
class OpenedFile:
    name: str
    data: bytes
    gitFile: GitFile | None = None
    related: OpenedFile | None = None

    @property
    def isGit(self) -> bool:
        return self.gitFile is not None

    def forEachLine(self, visit: LineVisitor) -> bool:
        return forEachLine(self.data, visit)


def parseDesignator(designator: str) -> tuple[str | None, str]:
    """
    Split "rev:path" into (rev, path). If there's no revision (or if the
    designator names an existing file that happens to contain a colon),
    the revision is None.
    """
    revision, colon, path = designator.partition(":")
    if not colon or not revision or os.path.exists(designator):
        return None, designator
    return revision, path


def _readPlainFile(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def _openPlain(name: str, related: OpenedFile | None) -> OpenedFile | None:
    candidates = []
    if related is not None and not related.isGit:
        graft = graftRelative(related.name, name)
        if graft is not None:
            candidates.append(graft)
    candidates.append(name)

    for path in candidates:
        try:
            data = _readPlainFile(path)
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError):
            continue
        _logger.info(f"reading {path}")
        return OpenedFile(path, data, None, related)

    return None


def _wrap(gitFile: GitFile, related: OpenedFile | None) -> OpenedFile:
    return OpenedFile(gitFile.name, gitFile.data, gitFile, related)


def openFile(designator: str, related: OpenedFile | None = None) -> OpenedFile:
    """
    Open a file from git or from the filesystem.
    Raises ResolveError (or OSError for unreadable plain files) if all
    strategies fail.
    """

    revision, name = parseDesignator(designator)
    relatedGit = related.gitFile if related is not None else None

    if revision:
        return _wrap(openGitFile(name, revision, relatedGit), related)

    if relatedGit is not None:
        try:
            return _wrap(openGitFile(name, None, relatedGit), related)
        except ResolveError as exc:
            _logger.info(f"{exc}, trying the file system")

    plain = _openPlain(name, related)
    if plain is not None:
        return plain

    return _wrap(openGitFile(name, prefs.defaultRevision), related)

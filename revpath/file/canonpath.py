# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Turn a path that may be partially dead (directories that existed at some
revision but not in the current checkout) into a path relative to a
repository's root directory.
"""

import logging
import os
import stat

from revpath.errors import (
    CannotClimbError, CannotResolveError, DivergentPathsError, OutsideRepositoryError, RootNotADirectoryError)
from revpath.file.locator import selectRepo

_logger = logging.getLogger(__name__)


def _exists(path: str) -> os.stat_result | None:
    try:
        return os.stat(path)
    except OSError:
        return None


def absolutePath(path: str) -> str:
    """ Make `path` absolute without touching the filesystem, and drop one trailing slash. """
    if not path.startswith("/"):
        path = os.getcwd() + "/" + path
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    return path


def splitDeadTail(path: str) -> tuple[str, str]:
    """
    Split an absolute path into the longest prefix that exists on disk and
    the "dead" tail that doesn't.
    """
    live = path
    deadSegments = []

    while True:
        _logger.debug(f"probing \"{live}\" tail \"{'/'.join(reversed(deadSegments))}\"")
        if _exists(live) is not None:
            break
        if live == "/" or not live:
            raise CannotResolveError(path)
        live, _sep, segment = live.rpartition("/")
        deadSegments.append(segment)
        if not live:
            live = "/"

    return live, "/".join(reversed(deadSegments))


def normalizeDeadTail(tail: str, path: str = "") -> str:
    """
    Remove "." and ".." from a dead tail. The tail doesn't exist on disk,
    so this is purely lexical. Raises CannotClimbError if ".." would climb
    out of the tail (e.g. /home/repo/dead/../../foo).
    """
    _logger.debug(f"input tail \"{tail}\"")

    out: list[str] = []
    for segment in tail.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not out:
                raise CannotClimbError(path or tail)
            out.pop()
            continue
        out.append(segment)

    normalized = "/".join(out)
    _logger.debug(f"output tail \"{normalized}\"")
    return normalized


def canonicalPathIntoRepo(repoDir: str, path: str) -> str:
    """
    Return `path` relative to the root of the repository at `repoDir`.

    Symlinks in the live part of the path are resolved; the dead part is
    normalized lexically.
    """

    # Identify inode of repo root
    repoStat = os.stat(repoDir)
    if not stat.S_ISDIR(repoStat.st_mode):
        raise RootNotADirectoryError(repoDir)

    # Separate the part that is valid on the current system from the dead tail
    live, tail = splitDeadTail(absolutePath(path))
    tail = normalizeDeadTail(tail, path)

    # Resolve all symlinks, then put the tail back on
    real = os.path.realpath(live)
    _logger.debug(f"realpath(\"{live}\") = \"{real}\"")
    if tail:
        full = real.rstrip("/") + "/" + tail
    else:
        full = real
    _logger.debug(f"full object path \"{full}\"")

    # A symlink may have taken us somewhere else entirely
    landing = selectRepo(full)
    if landing is None:
        raise OutsideRepositoryError(full)
    landing.free()

    # Find which part of the path is inside the repo
    head = full
    inRepo: list[str] = []
    while True:
        _logger.debug(f"trying \"{head}\" tail \"{'/'.join(reversed(inRepo))}\"")
        headStat = _exists(head)
        if headStat is not None and (headStat.st_dev, headStat.st_ino) == (repoStat.st_dev, repoStat.st_ino):
            break

        if head in ("", "/"):
            # "this cannot happen"
            raise DivergentPathsError(repoDir, full)

        head, _sep, segment = head.rpartition("/")
        inRepo.append(segment)
        if not head:
            head = "/"

    result = "/".join(reversed(inRepo))
    _logger.debug(f"path in repo \"{result}\"")
    return result

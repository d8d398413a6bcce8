# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging

from revpath.porcelain import *

_logger = logging.getLogger(__name__)


def selectRepo(path: str) -> Repo | None:
    """
    Find the repository containing `path`.

    The path may point to something that doesn't exist in the currently
    checked-out tree, so we trim off elements until a repository opens.
    Returns None if we run out of path.
    """

    tmp = path

    while True:
        _logger.debug(f"trying \"{tmp}\"")
        try:
            return Repo(tmp or "/")
        except (GitError, KeyError, OSError):
            pass

        head, sep, _tail = tmp.rpartition("/")
        if not sep:
            return None
        tmp = head


def tryRepo(path: str) -> bool:
    """ Is there a non-empty repository at (or above) `path`? """
    try:
        with RepoContext(path) as repo:
            return not repo.is_empty
    except (GitError, KeyError, OSError):
        return False

# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging

from revpath.appconsts import *
from revpath.errors import NotABlobError, NotFoundError
from revpath.file.canonpath import canonicalPathIntoRepo
from revpath.porcelain import *

_logger = logging.getLogger(__name__)


def pickRevision(repo: Repo, revision: str = DEFAULT_REVISION) -> tuple[Commit, Tree]:
    commit = repo.peel_commit(revision)
    return commit, commit.tree


def lookUpBlob(tree: Tree, repoRelativePath: str) -> Blob:
    if not repoRelativePath:
        raise NotFoundError("/", "repository root is not a file")

    try:
        obj = tree[repoRelativePath]
    except KeyError as exc:
        raise NotFoundError(repoRelativePath) from exc

    if not isinstance(obj, Blob):
        raise NotABlobError(repoRelativePath)

    _logger.debug(f"object {obj.short_id}")
    return obj


def findFile(repo: Repo, tree: Tree, path: str) -> Blob:
    """
    Look up `path` (absolute, or relative to the working directory, and
    possibly dead in the current checkout) in `tree`.
    """
    repoDir = repo.root_dir
    _logger.debug(f"repo dir \"{repoDir}\"")

    repoRelativePath = canonicalPathIntoRepo(repoDir, path)
    blob = lookUpBlob(tree, repoRelativePath)
    _logger.info(f"reading {path}")
    return blob


def fetchBlob(repo: Repo, revision: str | None, repoRelativePath: str) -> Blob:
    _commit, tree = pickRevision(repo, revision or DEFAULT_REVISION)
    return lookUpBlob(tree, repoRelativePath)

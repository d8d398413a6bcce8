# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Open a file from a git repository, possibly at a historical revision.

A file may be opened relative to another file that's already been opened
(e.g. a sub-sheet referenced from a top sheet). In that case we try to
fetch it from the same commit as the related file.
"""

from __future__ import annotations

import dataclasses
import logging

from revpath.appconsts import *
from revpath.errors import CrossRepositoryError, NotFoundError, RepositoryNotFoundError, ResolveError, warnOnce
from revpath.file.blobfetch import findFile, pickRevision
from revpath.file.linereader import LineVisitor, forEachLine
from revpath.file.locator import selectRepo
from revpath.porcelain import *

_logger = logging.getLogger(__name__)


@dataclasses.dataclass
class GitFile:
    name: str
    revision: str | None = None
    related: GitFile | None = None

    repo: Repo | None = None
    commit: Commit | None = None
    tree: Tree | None = None
    blob: Blob | None = None
    # Must remain the last field: the record is sealed once it's set.

    def __setattr__(self, key, value):
        if self.__dict__.get("blob", None) is not None:
            raise dataclasses.FrozenInstanceError(f"cannot assign to '{key}': blob already fetched")
        super().__setattr__(key, value)

    def __repr__(self):
        where = id7(self.commit) if self.commit is not None else (self.revision or "?")
        return f"GitFile({where}:{self.name})"

    @property
    def isResolved(self) -> bool:
        return self.blob is not None

    @property
    def data(self) -> bytes:
        assert self.blob is not None, "blob not fetched yet"
        return self.blob.data

    @property
    def size(self) -> int:
        assert self.blob is not None, "blob not fetched yet"
        return self.blob.size

    @property
    def blobId(self) -> Oid:
        assert self.blob is not None, "blob not fetched yet"
        return self.blob.id

    def sameContents(self, other: GitFile) -> bool:
        return self.blobId == other.blobId

    def forEachLine(self, visit: LineVisitor) -> bool:
        return forEachLine(self.data, visit)


def graftRelative(base: str, name: str) -> str | None:
    """
    Interpret `name` relative to the directory containing `base`.
    Purely textual. Absolute names can't be grafted.
    """
    if name.startswith("/"):
        return None
    baseDir, sep, _baseName = base.rpartition("/")
    if not sep:
        return name
    return f"{baseDir}/{name}"


def _accessFileData(gitFile: GitFile, repo: Repo, commit: Commit, tree: Tree, path: str):
    blob = findFile(repo, tree, path)
    gitFile.repo = repo
    gitFile.commit = commit
    gitFile.tree = tree
    gitFile.name = path
    gitFile.blob = blob  # seal


def _relatedSameRepo(gitFile: GitFile):
    related = gitFile.related
    _accessFileData(gitFile, related.repo, related.commit, related.tree, gitFile.name)


def _relatedOtherRepo(gitFile: GitFile, repo: Repo):
    # TODO: look up the newest revision in `repo` that isn't newer than the related commit
    warnOnce("opening a related file from another repository is not yet implemented")
    raise CrossRepositoryError(gitFile.name, f"related file is in {gitFile.related.repo.path}, not {repo.path}")


def _relatedInRepo(gitFile: GitFile, repo: Repo):
    if repo.is_same_repo(gitFile.related.repo):
        _relatedSameRepo(gitFile)
    else:
        _relatedOtherRepo(gitFile, repo)


def _relatedOnlyRepo(gitFile: GitFile):
    related = gitFile.related

    _logger.debug(f"trying graft \"{related.name}\" \"{gitFile.name}\"")
    graft = graftRelative(related.name, gitFile.name)
    if graft is None:
        raise NotFoundError(gitFile.name, "cannot graft absolute path")

    # We now have a new path, but where does it lead? If it contains a
    # symlink, we may end up in an entirely different repo.
    repo = selectRepo(graft)
    if repo is not None:
        gitFile.name = graft
        with RepoContext(repo):
            _relatedInRepo(gitFile, repo)
        return

    _accessFileData(gitFile, related.repo, related.commit, related.tree, graft)


def _tryRelated(gitFile: GitFile) -> bool:
    related = gitFile.related
    if related is None or not related.isResolved:
        return False
    if gitFile.revision:
        return False

    try:
        repo = selectRepo(gitFile.name)
        if repo is not None:
            with RepoContext(repo):
                _relatedInRepo(gitFile, repo)
        else:
            _relatedOnlyRepo(gitFile)
        return True
    except ResolveError as exc:
        _logger.info(f"related lookup failed: {exc}")
        return False


def openGitFile(name: str, revision: str | None = None, related: GitFile | None = None) -> GitFile:
    """
    Fetch `name` from a repository.

    Without an explicit revision, a related file makes us look in the
    related file's commit first. Otherwise we use `revision` (HEAD by default)
    in whatever repository contains `name`.

    Raises a ResolveError subclass if the file can't be found.
    """

    gitFile = GitFile(name, revision, related)
    if _tryRelated(gitFile):
        return gitFile

    # The related attempt may have rewritten the name: start over.
    gitFile = GitFile(name, revision, related)

    repo = selectRepo(name)
    if repo is None:
        raise RepositoryNotFoundError(name)
    _logger.debug(f"using repository {repo.path}")

    commit, tree = pickRevision(repo, revision or DEFAULT_REVISION)
    _accessFileData(gitFile, repo, commit, tree, name)
    return gitFile

# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Thin layer over pygit2 with the few repository operations RevPath needs.
"""

from __future__ import annotations

import os
from os import PathLike

import pygit2
from pygit2 import Blob, Commit, GitError, Object, Oid, Signature, Tree
from pygit2.enums import RepositoryOpenFlag

from revpath.errors import NotACommitError, NotFoundError

DOT_GIT_SUFFIX = "/.git"


def id7(obj: Oid | Object | str) -> str:
    try:
        oid = obj.id
    except AttributeError:
        oid = obj
    return str(oid)[:7]


def messageSummary(message: str) -> str:
    """
    One-line summary of a commit message, like git_commit_summary:
    the first paragraph with its lines joined by spaces.
    """
    paragraph = message.lstrip().split("\n\n", 1)[0]
    return " ".join(line.strip() for line in paragraph.splitlines()).strip()


class Repo(pygit2.Repository):
    """
    Read-only repository handle.
    """

    def __init__(self, path: str | PathLike, flags: RepositoryOpenFlag = RepositoryOpenFlag.CROSS_FS):
        super().__init__(os.fspath(path), flags)

    @property
    def root_dir(self) -> str:
        """
        Directory that repo-relative paths start from.
        Uses the workdir rather than the git dir so that submodules resolve
        to their own checkout.
        """
        root = self.workdir or self.path
        if len(root) > 1:
            root = root.removesuffix("/")
        if root.endswith(DOT_GIT_SUFFIX):
            root = root.removesuffix(DOT_GIT_SUFFIX) or "/"
        return root

    def is_same_repo(self, other: Repo) -> bool:
        return os.path.normpath(self.path) == os.path.normpath(other.path)

    def peel_commit(self, revision: str) -> Commit:
        try:
            obj = self.revparse_single(revision)
        except (KeyError, ValueError, GitError) as exc:
            raise NotFoundError(revision, f"unknown revision ({exc})") from exc

        if not isinstance(obj, Commit):
            raise NotACommitError(revision)
        return obj

    def is_dirty(self, untracked: bool = False) -> bool:
        """ Whether the working tree or index differ from HEAD. """
        status = self.status(untracked_files="normal" if untracked else "no")
        return bool(status)


class RepoContext:
    """
    Open a repository for the duration of a with-block, then free it.
    """

    def __init__(self, repo: Repo | str | PathLike, flags: RepositoryOpenFlag = RepositoryOpenFlag.CROSS_FS):
        if isinstance(repo, Repo):
            self.repo = repo
        else:
            self.repo = Repo(repo, flags)

    def __enter__(self) -> Repo:
        return self.repo

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.repo.free()


__all__ = [
    "Blob",
    "Commit",
    "GitError",
    "Object",
    "Oid",
    "Repo",
    "RepoContext",
    "RepositoryOpenFlag",
    "Signature",
    "Tree",
    "id7",
    "messageSummary",
]

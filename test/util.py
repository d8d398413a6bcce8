# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
import tempfile

import pygit2

from revpath.porcelain import *

TEST_SIGNATURE = Signature("Test Person", "toto@example.com", 1672600000, 0)


def tempPath(tempDir: tempfile.TemporaryDirectory | str) -> str:
    # Resolve symlinks in the temp dir itself (e.g. /tmp -> /private/tmp on macOS)
    # so that paths compare equal to what the resolver produces.
    return os.path.realpath(tempDir if isinstance(tempDir, str) else tempDir.name)


def writeFile(path, text):
    # Prevent accidental littering of current working directory
    assert os.path.isabs(path), "pass me an absolute path"

    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(text.encode("utf-8"))


def readFile(path) -> str:
    with open(path, "rb") as f:
        return f.read().decode("utf-8")


def makeRepo(path: str) -> Repo:
    pygit2.init_repository(path, initial_head="master")
    return Repo(path)


def commitFiles(
        repo: Repo,
        message: str,
        files: dict[str, str | None],
        parents: list[Oid] | None = None,
        ref: str | None = "HEAD",
        time: int = 0,
) -> Oid:
    """
    Write `files` (repo-relative path -> text, or None to delete) into the
    working directory, stage them, and commit.
    """
    workdir = repo.workdir
    repo.index.read()

    for relPath, text in files.items():
        fullPath = os.path.join(workdir, relPath)
        if text is None:
            os.unlink(fullPath)
            repo.index.remove(relPath)
        else:
            writeFile(fullPath, text)
            repo.index.add(relPath)

    repo.index.write()
    treeId = repo.index.write_tree()

    if parents is None:
        parents = [] if repo.head_is_unborn else [repo.head.target]

    sig = TEST_SIGNATURE
    if time:
        sig = Signature(sig.name, sig.email, time, 0)

    return repo.create_commit(ref, sig, sig, message, treeId, parents)


def moveHead(repo: Repo, oid: Oid):
    """ Point the current branch at `oid` and check it out. """
    repo.reset(oid, pygit2.enums.ResetMode.HARD)


def makeLinearRepo(path: str, revisions: list[dict[str, str | None]]) -> Repo:
    """ Create a repo with one commit per entry in `revisions`, oldest first. """
    repo = makeRepo(path)
    for i, files in enumerate(revisions, start=1):
        commitFiles(repo, f"C{i}", files, time=1672600000 + 60 * i)
    return repo

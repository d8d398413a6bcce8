# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Errors raised while resolving files and history.

ResolveError subclasses describe an expected absence. Callers may fall back
to another strategy (or skip the file) when they catch one.

IntegrityError subclasses mean that an assumption about the filesystem or
the repository has been violated. They should terminate the run.
"""

import logging

_logger = logging.getLogger(__name__)
_shownWarnings: set[str] = set()


class ResolveError(Exception):
    defaultMessage = "cannot resolve"

    def __init__(self, path: str = "", message: str = ""):
        self.path = path
        if not message:
            message = self.defaultMessage
        super().__init__(f"{path}: {message}" if path else message)


class NotFoundError(ResolveError):
    defaultMessage = "not found"


class OutsideRepositoryError(ResolveError):
    defaultMessage = "outside repository"


class CannotResolveError(ResolveError):
    defaultMessage = "cannot resolve"


class NotACommitError(ResolveError):
    defaultMessage = "not a commit"


class NotABlobError(ResolveError):
    defaultMessage = "entry is not a blob"


class RepositoryNotFoundError(ResolveError):
    defaultMessage = "no repository found"


class CrossRepositoryError(ResolveError):
    defaultMessage = "related file lives in another repository"


class IntegrityError(Exception):
    def __init__(self, path: str = "", message: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class CannotClimbError(IntegrityError):
    def __init__(self, path: str):
        super().__init__(path, "can't climb out of dead path")


class RootNotADirectoryError(IntegrityError):
    def __init__(self, path: str):
        super().__init__(path, "not a directory")


class DivergentPathsError(IntegrityError):
    def __init__(self, repoDir: str, objectPath: str):
        self.repoDir = repoDir
        super().__init__(objectPath, f"divergent paths: repo \"{repoDir}\" object \"{objectPath}\"")


def warnOnce(message: str):
    """ Log a warning the first time this exact message comes up in the process. """
    if message in _shownWarnings:
        return
    _shownWarnings.add(message)
    _logger.warning(message)

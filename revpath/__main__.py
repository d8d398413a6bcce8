# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import sys
from argparse import ArgumentParser

from revpath.appconsts import *
from revpath.errors import IntegrityError, ResolveError
from revpath.file import canonicalPathIntoRepo, openFile, selectRepo, tryRepo
from revpath.hist import buildHistory, dumpHistory
from revpath.porcelain import *
from revpath.settings import prefs
from revpath.toolbox.benchmark import BENCHMARK_LOGGING_LEVEL, Benchmark, reportSteps

logger = logging.getLogger(APP_SYSTEM_NAME)

EXIT_RESOLVE_ERROR = 1
EXIT_INTEGRITY_ERROR = 2


def makeParser() -> ArgumentParser:
    parser = ArgumentParser(prog=APP_SYSTEM_NAME, description="Read files and history from git repositories")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="increase verbosity of diagnostic output")
    parser.add_argument("--prefs", default="", help="load preferences from this JSON file")
    parser.add_argument("--benchmark", action="store_true", help="log how long each step takes")
    parser.add_argument("-V", "--version", action="version", version=f"{APP_DISPLAY_NAME} {APP_VERSION}")

    commands = parser.add_subparsers(dest="command", required=True)

    cat = commands.add_parser("cat", help="print a file to standard output")
    cat.add_argument("designator", help="[rev:]file")

    history = commands.add_parser("history", help="show history of repository on standard output")
    history.add_argument("path", help="path into repository")
    history.add_argument("-N", "--limit", type=int, default=None, help="limit history to n revisions (0: unlimited)")

    resolve = commands.add_parser("resolve", help="print repository root and path relative to it")
    resolve.add_argument("path", help="path, possibly dead in the current checkout")

    return parser


def setUpLogging(verbosity: int, benchmark: bool):
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")
    logging.captureWarnings(True)

    if benchmark:
        logging.getLogger("revpath.toolbox.benchmark").setLevel(BENCHMARK_LOGGING_LEVEL)


def catCommand(designator: str) -> int:
    with Benchmark("Open"):
        opened = openFile(designator)

    def printLine(_lineno: int, text: str):
        sys.stdout.write(text + "\n")

    with Benchmark("Print"):
        opened.forEachLine(printLine)
    return 0


def historyCommand(path: str, limit: int | None) -> int:
    with Benchmark("Locate"):
        if not tryRepo(path):
            logger.error(f"{path}: no repository with any commits")
            return EXIT_RESOLVE_ERROR

    if limit is None:
        limit = prefs.maxCommits

    with RepoContext(path) as repo:
        with Benchmark("Build"):
            graph = buildHistory(repo, prefs.countUntrackedAsDirty)
        with Benchmark("Dump"):
            dumpHistory(graph, sys.stdout, limit)
    return 0


def resolveCommand(path: str) -> int:
    with Benchmark("Locate"):
        repo = selectRepo(path)
    if repo is None:
        logger.error(f"{path}: not found")
        return EXIT_RESOLVE_ERROR

    with RepoContext(repo):
        rootDir = repo.root_dir
        with Benchmark("Canonicalize"):
            relPath = canonicalPathIntoRepo(rootDir, path)
        print(rootDir)
        print(relPath)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = makeParser().parse_args(argv)

    prefs.load(args.prefs)
    setUpLogging(max(prefs.verbosity, args.verbose), args.benchmark)

    try:
        if args.command == "cat":
            return catCommand(args.designator)
        elif args.command == "history":
            return historyCommand(args.path, args.limit)
        elif args.command == "resolve":
            return resolveCommand(args.path)
        else:  # pragma: no cover
            raise NotImplementedError(f"unknown command {args.command}")
    except IntegrityError as exc:
        logger.critical(str(exc))
        return EXIT_INTEGRITY_ERROR
    except (ResolveError, OSError) as exc:
        logger.error(str(exc))
        return EXIT_RESOLVE_ERROR
    finally:
        reportSteps(args.command)


if __name__ == "__main__":
    sys.exit(main())

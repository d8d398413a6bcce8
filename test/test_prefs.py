# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import json
import logging

from revpath.settings import Prefs
from .util import *


def writePrefs(path, obj):
    writeFile(path, json.dumps(obj))


def testDefaults():
    prefs = Prefs()
    assert prefs.defaultRevision == "HEAD"
    assert prefs.maxCommits == 0
    assert not prefs.countUntrackedAsDirty


def testNoPathInTestMode():
    prefs = Prefs()
    assert not prefs.load()
    assert prefs == Prefs()


def testMissingFile(tempDir):
    prefs = Prefs()
    assert not prefs.load(f"{tempPath(tempDir)}/nope.json")
    assert prefs == Prefs()


def testLoadValues(tempDir):
    path = f"{tempPath(tempDir)}/prefs.json"
    writePrefs(path, {"defaultRevision": "main", "maxCommits": 20, "countUntrackedAsDirty": True})

    prefs = Prefs()
    assert prefs.load(path)
    assert prefs.defaultRevision == "main"
    assert prefs.maxCommits == 20
    assert prefs.countUntrackedAsDirty
    assert prefs.shortHashChars == 0


def testUnknownKeyAndWrongType(tempDir, caplog):
    path = f"{tempPath(tempDir)}/prefs.json"
    writePrefs(path, {"bogus": 1, "maxCommits": "lots", "shortHashChars": 10})

    prefs = Prefs()
    with caplog.at_level(logging.WARNING, logger="revpath.settings"):
        assert prefs.load(path)

    assert prefs.maxCommits == 0
    assert prefs.shortHashChars == 10
    assert not hasattr(prefs, "bogus")

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("bogus" in m for m in messages)
    assert any("maxCommits" in m for m in messages)


def testNotAnObject(tempDir, caplog):
    path = f"{tempPath(tempDir)}/prefs.json"
    writePrefs(path, [1, 2, 3])

    prefs = Prefs()
    with caplog.at_level(logging.WARNING, logger="revpath.settings"):
        assert not prefs.load(path)
    assert prefs == Prefs()
    assert caplog.records


def testDefaultPathHonorsXdg(monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", "/some/config")
    assert Prefs.defaultPath() == "/some/config/revpath/prefs.json"


def testMalformedFile(tempDir, caplog):
    path = f"{tempPath(tempDir)}/prefs.json"
    writeFile(path, "{not json")

    prefs = Prefs()
    with caplog.at_level(logging.WARNING, logger="revpath.settings"):
        assert not prefs.load(path)
    assert prefs == Prefs()
    assert any(path in r.getMessage() for r in caplog.records)


def testPrefsPathIsADirectory(tempDir):
    prefs = Prefs()
    assert not prefs.load(tempPath(tempDir))
    assert prefs == Prefs()

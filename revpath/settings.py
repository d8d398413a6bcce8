# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of RevPath, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import json
import logging
import os

from revpath.appconsts import *

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Prefs:
    _filename = "prefs.json"

    verbosity                   : int                   = APP_VERBOSITY
    defaultRevision             : str                   = DEFAULT_REVISION
    maxCommits                  : int                   = 0
    countUntrackedAsDirty       : bool                  = False
    shortHashChars              : int                   = 0

    @classmethod
    def defaultPath(cls) -> str:
        configHome = os.environ.get("XDG_CONFIG_HOME", "") or os.path.expanduser("~/.config")
        return os.path.join(configHome, APP_SYSTEM_NAME, cls._filename)

    def load(self, path: str = "") -> bool:
        """
        Overwrite fields with the values found in a JSON file.
        Returns False if there's no file to load, or if it can't be read.
        """
        if not path:
            if APP_TESTMODE:
                return False
            path = self.defaultPath()

        try:
            with open(path, encoding="utf-8") as f:
                jsonObject = json.load(f)
        except FileNotFoundError:
            return False
        except (OSError, ValueError) as exc:
            logger.warning(f"{path}: can't load prefs, ignoring ({exc})")
            return False

        if not isinstance(jsonObject, dict):
            logger.warning(f"{path}: expected a JSON object, ignoring")
            return False

        fields = {f.name: f for f in dataclasses.fields(self)}
        for key, value in jsonObject.items():
            try:
                field = fields[key]
            except KeyError:
                logger.warning(f"{path}: unknown setting '{key}'")
                continue

            defaultValue = field.default
            if type(value) is not type(defaultValue):
                logger.warning(f"{path}: '{key}' should be of type {type(defaultValue).__name__}, using default")
                value = defaultValue

            setattr(self, key, value)

        return True


# Initialize default prefs.
# The command line tool loads the user's prefs with prefs.load().
prefs = Prefs()

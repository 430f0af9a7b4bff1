# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           work_assistant/core/dirs.py
# DESCRIPTION:    Application directory scheme
# CREATED:        17.10.2026
#
# The contents of this file are subject to the MIT License
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Copyright (c) 2026 The Work Assistant Project
# All Rights Reserved.
#
# Contributor(s): ______________________________________

"""work-assistant-core - Application directory scheme

`DirectoryScheme` provides paths to the directories used by the application and
creates them on request. All directories live under a HOME directory, which is
determined as follows:

1. The `base` argument, when given (e.g. from `--data-dir`).
2. The value of the `<APP_NAME>_HOME` environment variable (`WORK_ASSISTANT_HOME`
   for the default application name).
3. The current working directory.

Example::

    scheme = get_directory_scheme()
    if scheme.initialize():
        config_file = scheme.config / 'work_assistant.conf'
"""

from __future__ import annotations

import os
from pathlib import Path

from .logging import get_logger

#: Default application name.
APP_NAME: str = 'work_assistant'

#: Relative paths of all directories created by `DirectoryScheme.initialize()`.
REQUIRED_DIRS: dict[str, Path] = {'data': Path('data'),
                                  'config': Path('config'),
                                  'logs': Path('logs'),
                                  'cache': Path('cache'),
                                  'models': Path('models'),
                                  'tmp': Path('temp'),
                                  'screenshots': Path('data', 'screenshots'),
                                  'ocr_results': Path('data', 'ocr_results'),
                                  'ai_analysis': Path('data', 'ai_analysis'),
                                  'backup': Path('data', 'backup'),
                                  }

class DirectoryScheme:
    """Class that provide paths to application directories.

    Arguments:
        name: Application name. Used to build the name of the HOME environment
              variable.
        base: Explicit HOME directory.

    Note:
        All paths are set when the instance is created. Assigning new `home`
        moves all directories under the new HOME, and individual paths could be
        still changed later via `dir_map`.
    """
    def __init__(self, name: str=APP_NAME, base: Path | str | None=None):
        self.name: str = name
        if base is None and (env := os.getenv(self.home_env)) is not None:
            base = env
        self.__home: Path = Path(base) if base is not None else Path.cwd()
        self.dir_map: dict[str, Path] = {}
        self._update_map()
        self._log = get_logger(self, 'dirs')
    def _update_map(self) -> None:
        self.dir_map.update({key: self.__home / rel for key, rel in REQUIRED_DIRS.items()})
    def has_home_env(self) -> bool:
        """Returns True if `<APP_NAME>_HOME` environment variable is defined.
        """
        return os.getenv(self.home_env) is not None
    def join(self, base: Path | str, *parts: str) -> Path:
        """Returns path composed from base path and path segments.
        """
        return Path(base).joinpath(*parts)
    def create_directory(self, path: Path | str) -> bool:
        """Creates directory (including parents) if it does not exist.

        Returns:
            True if directory exists after the call.
        """
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self._log.error(f"Failed to create directory {path}: {exc}")
            return False
        return True
    def is_writable(self, path: Path | str) -> bool:
        """Returns True if `path` is an existing directory writable by this process.
        """
        path = Path(path)
        return path.is_dir() and os.access(path, os.W_OK)
    def initialize(self) -> bool:
        """Creates all application directories and checks they are writable.

        Every failure is logged; the remaining directories are still processed.

        Returns:
            True if all directories exist and are writable.
        """
        success = self.create_directory(self.home)
        for path in self.dir_map.values():
            if not self.create_directory(path):
                success = False
            elif not self.is_writable(path):
                self._log.error(f"Directory not writable: {path}")
                success = False
        if success:
            self._log.info(f"Directory structure initialized in: {self.home}")
        return success
    @property
    def home_env(self) -> str:
        """Name of environment variable with HOME directory.
        """
        return f'{self.name.upper()}_HOME'
    @property
    def home(self) -> Path:
        """HOME directory.
        """
        return self.__home
    @home.setter
    def home(self, value: Path | str) -> None:
        self.__home = Path(value)
        self._update_map()
    @property
    def config(self) -> Path:
        """Directory for configuration files.
        """
        return self.dir_map['config']
    @property
    def data(self) -> Path:
        """Directory for persistent data modified by application as it runs.
        """
        return self.dir_map['data']
    @property
    def logs(self) -> Path:
        """Directory for log files.
        """
        return self.dir_map['logs']
    @property
    def cache(self) -> Path:
        """Directory for application cache data.
        """
        return self.dir_map['cache']
    @property
    def models(self) -> Path:
        """Directory for AI model files.
        """
        return self.dir_map['models']
    @property
    def tmp(self) -> Path:
        """Directory for temporary files.
        """
        return self.dir_map['tmp']
    @property
    def screenshots(self) -> Path:
        return self.dir_map['screenshots']
    @property
    def ocr_results(self) -> Path:
        return self.dir_map['ocr_results']
    @property
    def ai_analysis(self) -> Path:
        return self.dir_map['ai_analysis']
    @property
    def backup(self) -> Path:
        return self.dir_map['backup']

def get_directory_scheme(app_name: str=APP_NAME, base: Path | str | None=None) -> DirectoryScheme:
    """Returns directory scheme for application.

    Arguments:
        app_name: Application name.
        base: Explicit HOME directory. When None, `<APP_NAME>_HOME` environment
              variable or current working directory is used.
    """
    return DirectoryScheme(app_name, base)

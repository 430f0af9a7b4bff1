# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           work_assistant/core/types.py
# DESCRIPTION:    Core types
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

"""work-assistant-core - Core types

This module provides the exception hierarchy shared by the command-line parser
and the configuration store:

- `Error`, a base exception that accepts arbitrary keyword arguments and
  exposes them as attributes.
- `ArgumentError` for command-line syntax errors.
- `ConfigError` for configuration store usage and conversion errors.
"""

from __future__ import annotations

from typing import Any


class Error(Exception):
    """Exception intended as a base for application-related errors.

    Keyword arguments passed to the constructor are stored as attributes on the
    exception instance. Reading an attribute that was not set returns `None`
    instead of raising `AttributeError`, so handlers can test optional details
    without `getattr` boilerplate.

    Example::

        try:
            raise Error("Cannot open file", path="/etc/app.conf")
        except Error as e:
            if e.path is not None:
                ...
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args)
        for name, value in kwargs.items():
            setattr(self, name, value)
    def __getattr__(self, name) -> Any | None:
        # `__notes__` must raise so that `add_note` keeps working.
        if name == '__notes__':
            raise AttributeError
        return None

class ArgumentError(Error):
    """Command-line syntax error.

    Raised by the argument scanner for unknown options, missing or rejected values,
    values given to flags and missing required options. The message is the
    complete human-readable description; the `option` attribute holds the option
    form (e.g. `--web-port` or `-p`) the error refers to, when known.
    """

class ConfigError(Error):
    """Configuration store error (undefined file path, snapshot conversion)."""

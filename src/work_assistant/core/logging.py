# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           work_assistant/core/logging.py
# DESCRIPTION:    Context-based logging
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

"""work-assistant-core - Context-based logging

Thin layer over the standard `logging` module that serves as the diagnostic
channel of the parser, the configuration store and the bootstrap code.

Loggers are obtained with `get_logger(agent, topic)`. The returned
`ContextLoggerAdapter` adds the `agent` and `topic` names into every
`logging.LogRecord`, so handlers can tell which component produced a message.
All loggers live under the `work_assistant` logger, optionally followed by the
topic (e.g. `work_assistant.config`).

`configure_logging()` installs the console handler according to the
`--log-level`, `--verbose` and `--quiet` command-line options.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from enum import IntEnum
from typing import Any, TextIO

#: Name of the top-level logger used by all components.
ROOT_LOGGER_NAME: str = 'work_assistant'
#: Default console log format.
DEFAULT_FORMAT: str = '%(levelname)-8s [%(agent)s] %(message)s'

class LogLevel(IntEnum):
    """Mirrors standard `logging` levels for convenience and type hinting.
    """
    NOTSET = 0
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    WARN = WARNING

#: Log level names accepted from the command line and configuration files.
LEVEL_NAMES: dict[str, LogLevel] = {'debug': LogLevel.DEBUG,
                                    'info': LogLevel.INFO,
                                    'warn': LogLevel.WARNING,
                                    'warning': LogLevel.WARNING,
                                    'error': LogLevel.ERROR,
                                    }

def get_log_level(name: str) -> LogLevel:
    """Returns `LogLevel` for level name (case-insensitive).

    Raises:
        ValueError: When `name` is not a known level name.
    """
    if (level := LEVEL_NAMES.get(name.strip().lower())) is None:
        raise ValueError(f"Unknown log level '{name}'")
    return level

class ContextFilter(logging.Filter):
    """Logging filter ensuring context fields exist on `LogRecord` instances.

    Records coming from loggers that do not use `ContextLoggerAdapter` get
    `agent` and `topic` set to `None`, so formatters that reference them do not
    fail.
    """
    def filter(self, record) -> bool:
        for attr in ('agent', 'topic'):
            if not hasattr(record, attr):
                setattr(record, attr, None)
        return True

class ContextLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter injecting `agent` and `topic` into log records.

    Parameters:
        logger: The standard `logging.Logger` instance to wrap.
        topic: Context topic name (or None).
        agent: The original agent object or string passed to `get_logger`.
        agent_name: The resolved string name for the agent.
    """
    def __init__(self, logger: logging.Logger, topic: str | None, agent: Any, agent_name: str):
        self.agent = agent
        super().__init__(logger, {'topic': topic, 'agent': agent_name})
    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        """Merges adapter context with any `extra` passed to the logging call,
        keys from the call taking precedence.
        """
        kwargs['extra'] = dict(self.extra, **kwargs['extra']) if 'extra' in kwargs else self.extra
        return msg, kwargs

class LoggingManager:
    """Hands out context loggers and owns the console handler.
    """
    def __init__(self):
        self._topic_map: dict[str, str] = {}
        self._logger_factory: Callable = logging.getLogger
        self._handler: logging.Handler | None = None
    def get_agent_name(self, agent: Any) -> str:
        """Returns the name for agent.

        Strings are used directly. Objects use their `_agent_name_` attribute when
        defined, otherwise `module.ClassQualname`.
        """
        if isinstance(agent, str):
            return agent
        if not (agent_name := getattr(agent, '_agent_name_', None)):
            agent_name = f'{agent.__class__.__module__}.{agent.__class__.__qualname__}'
        return str(agent_name)
    def set_topic_mapping(self, topic: str, new_topic: str | None) -> None:
        """Sets (`new_topic` is a non-empty string) or removes the mapping of a topic
        name to another name.
        """
        if new_topic:
            self._topic_map[topic] = str(new_topic)
        else:
            self._topic_map.pop(topic, None)
    def get_logger(self, agent: Any, topic: str | None=None) -> ContextLoggerAdapter:
        """Returns `ContextLoggerAdapter` for agent and topic.

        The underlying `logging.Logger` is `work_assistant` or
        `work_assistant.<topic>` when topic is given.
        """
        topic = self._topic_map.get(topic, topic)
        name = ROOT_LOGGER_NAME if not topic else f'{ROOT_LOGGER_NAME}.{topic}'
        return ContextLoggerAdapter(self._logger_factory(name), topic, agent,
                                    self.get_agent_name(agent))
    def configure(self, level: str | int='info', *, verbose: bool=False, quiet: bool=False,
                  stream: TextIO | None=None, fmt: str=DEFAULT_FORMAT) -> logging.Handler:
        """Installs (or replaces) the console handler on the `work_assistant` logger.

        Arguments:
            level: Level name (`debug`, `info`, `warn`, `error`) or numeric level.
            verbose: Force DEBUG level.
            quiet: Force ERROR level. Wins over `verbose`.
            stream: Output stream (default `sys.stderr`).
            fmt: Log record format.

        Raises:
            ValueError: When `level` is an unknown level name.
        """
        if quiet:
            effective = LogLevel.ERROR
        elif verbose:
            effective = LogLevel.DEBUG
        elif isinstance(level, str):
            effective = get_log_level(level)
        else:
            effective = LogLevel(level)
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        if self._handler is not None:
            logger.removeHandler(self._handler)
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.addFilter(ContextFilter())
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
        logger.setLevel(effective)
        self._handler = handler
        return handler
    def reset(self) -> None:
        """Removes the console handler and all topic mappings.
        """
        if self._handler is not None:
            logging.getLogger(ROOT_LOGGER_NAME).removeHandler(self._handler)
            self._handler = None
        self._topic_map.clear()

#: Context logging manager.
logging_manager: LoggingManager = LoggingManager()
#: Shortcut to global `.LoggingManager.get_logger` function.
get_logger = logging_manager.get_logger
#: Shortcut to global `.LoggingManager.get_agent_name` function.
get_agent_name = logging_manager.get_agent_name
#: Shortcut to global `.LoggingManager.configure` function.
configure_logging = logging_manager.configure

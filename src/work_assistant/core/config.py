# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           work_assistant/core/config.py
# DESCRIPTION:    Configuration store
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

"""work-assistant-core - Configuration store

`ConfigStore` holds application settings as a two-level mapping
(section -> key -> string value) that is loaded from and saved to a simple
line-oriented text file::

    # Work Assistant Configuration File
    [web]
    port = 8080
    host = 127.0.0.1
    ; comment
    ocr.language = eng

File format:

*   Lines are trimmed of leading/trailing spaces and tabs. Blank lines and lines
    starting with `#` or `;` are ignored.
*   `[section]` creates the section (when missing) and sets it as the current
    one for the following lines. Sections without keys therefore survive the
    save/load round trip.
*   `key = value` stores value under the current section. A key in the form
    `section.key` names the section explicitly, and that section becomes the
    current one.
*   Values are escaped on save and unescaped on load, using `\\\\` for backslash,
    `\\n` for newline and `\\t` for tab. No other character is quoted, so leading and
    trailing blanks of values are not preserved.
*   The file is UTF-8. Bytes that are not valid UTF-8 are kept as lone
    surrogates (`surrogateescape`), so they are written back unchanged. Only
    `\\n` separates lines. A carriage return inside a value is kept, one at
    the end of line is dropped (CRLF files).

Values are stored as strings without type tags. Typed accessors (`get_int`,
`get_bool`, `get_double` ...) convert on read and fall back to the supplied
default when the key is missing or the value cannot be converted. They never
raise. Setters write the canonical string form (see `.strconv`).

The store could be also serialized into `google.protobuf.Struct` message (see
`ConfigStore.save_proto` and `ConfigStore.load_proto`).

Example::

    store = ConfigStore()
    store.initialize()                      # defaults + <config dir>/work_assistant.conf
    port = store.get_int(WEB_SECTION, WEB_PORT, 8080)
    store.set_bool(APP_SECTION, APP_AUTO_START, True)
    store.save_config()
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from google.protobuf import json_format
from google.protobuf.struct_pb2 import Struct as StructProto

from .dirs import DirectoryScheme, get_directory_scheme
from .logging import get_logger
from .strconv import convert_from_str_or, convert_to_str
from .types import ConfigError

#: Default configuration file name.
CONFIG_FILE_NAME: str = 'work_assistant.conf'
#: Header lines written at the top of saved configuration files.
FILE_HEADER: list[str] = ['# Work Assistant Configuration File',
                          '# Generated automatically - modify with care']
#: Characters trimmed from lines, keys and values.
BLANKS: str = ' \t'

# Section and key names

APP_SECTION: str = 'application'
APP_LOG_LEVEL: str = 'log_level'
APP_AUTO_START: str = 'auto_start'
APP_MINIMIZE_TO_TRAY: str = 'minimize_to_tray'
APP_CHECK_UPDATES: str = 'check_updates'

OCR_SECTION: str = 'ocr'
OCR_DEFAULT_MODE: str = 'default_mode'
OCR_LANGUAGE: str = 'language'
OCR_CONFIDENCE_THRESHOLD: str = 'confidence_threshold'
OCR_USE_GPU: str = 'use_gpu'
OCR_MAX_IMAGE_SIZE: str = 'max_image_size'

AI_SECTION: str = 'ai'
AI_MODEL_PATH: str = 'model_path'
AI_CONTEXT_LENGTH: str = 'context_length'
AI_GPU_LAYERS: str = 'gpu_layers'
AI_TEMPERATURE: str = 'temperature'

STORAGE_SECTION: str = 'storage'
STORAGE_AUTO_BACKUP: str = 'auto_backup'
STORAGE_BACKUP_INTERVAL_HOURS: str = 'backup_interval_hours'
STORAGE_MAX_STORAGE_SIZE_GB: str = 'max_storage_size_gb'
STORAGE_ENCRYPTION_ENABLED: str = 'encryption_enabled'

WEB_SECTION: str = 'web'
WEB_ENABLED: str = 'enabled'
WEB_HOST: str = 'host'
WEB_PORT: str = 'port'
WEB_ENABLE_CORS: str = 'enable_cors'
WEB_ENABLE_WEBSOCKET: str = 'enable_websocket'

MONITOR_SECTION: str = 'monitoring'
MONITOR_WINDOW_EVENTS: str = 'window_events'
MONITOR_SCREEN_CAPTURE: str = 'screen_capture'
MONITOR_CAPTURE_INTERVAL_MS: str = 'capture_interval_ms'
MONITOR_OCR_INTERVAL_FRAMES: str = 'ocr_interval_frames'

#: Sections that must be present in valid configuration.
REQUIRED_SECTIONS: tuple[str, ...] = (APP_SECTION, OCR_SECTION, AI_SECTION, STORAGE_SECTION,
                                      WEB_SECTION, MONITOR_SECTION)

#: Baseline configuration. Values are typed, they're stored in canonical string form.
DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    APP_SECTION: {APP_LOG_LEVEL: 'info',
                  APP_AUTO_START: False,
                  APP_MINIMIZE_TO_TRAY: True,
                  APP_CHECK_UPDATES: True,
                  },
    OCR_SECTION: {OCR_DEFAULT_MODE: 3, # AUTO
                  OCR_LANGUAGE: 'eng',
                  OCR_CONFIDENCE_THRESHOLD: 0.7,
                  OCR_USE_GPU: True,
                  OCR_MAX_IMAGE_SIZE: 2048,
                  },
    AI_SECTION: {AI_MODEL_PATH: 'models/qwen2.5-1.5b-instruct-q4_k_m.gguf',
                 AI_CONTEXT_LENGTH: 2048,
                 AI_GPU_LAYERS: 32,
                 AI_TEMPERATURE: 0.7,
                 },
    STORAGE_SECTION: {STORAGE_AUTO_BACKUP: True,
                      STORAGE_BACKUP_INTERVAL_HOURS: 24,
                      STORAGE_MAX_STORAGE_SIZE_GB: 10,
                      STORAGE_ENCRYPTION_ENABLED: True,
                      },
    WEB_SECTION: {WEB_ENABLED: True,
                  WEB_HOST: '127.0.0.1',
                  WEB_PORT: 8080,
                  WEB_ENABLE_CORS: True,
                  WEB_ENABLE_WEBSOCKET: True,
                  },
    MONITOR_SECTION: {MONITOR_WINDOW_EVENTS: True,
                      MONITOR_SCREEN_CAPTURE: True,
                      MONITOR_CAPTURE_INTERVAL_MS: 1000,
                      MONITOR_OCR_INTERVAL_FRAMES: 10,
                      },
    }

_ESCAPES: dict[str, str] = {'\\': '\\\\', '\n': '\\n', '\t': '\\t'}
_UNESCAPES: dict[str, str] = {'\\': '\\', 'n': '\n', 't': '\t'}
_UNESCAPE_PATTERN = re.compile(r'\\([\\nt])')

def escape_value(value: str) -> str:
    """Returns value with backslash, newline and tab replaced by `\\\\`, `\\n` and `\\t`.
    """
    for char, escaped in _ESCAPES.items():
        value = value.replace(char, escaped)
    return value

def unescape_value(value: str) -> str:
    """Reverts `escape_value`.

    The value is scanned once from left to right, so `unescape_value(escape_value(s)) == s`
    for any string. Backslashes not followed by `\\`, `n` or `t` are kept as is.
    """
    return _UNESCAPE_PATTERN.sub(lambda m: _UNESCAPES[m.group(1)], value)

def parse_config_line(line: str) -> tuple[str, str, str] | None:
    """Splits trimmed key-value line into section, key and value.

    Returns:
        Tuple (section, key, value), where section is empty string when the key
        does not name it. Returns None when line has no `=` or the key is empty.
    """
    key_part, sep, value = line.partition('=')
    if not sep:
        return None
    key_part = key_part.strip(BLANKS)
    section, dot, key = key_part.partition('.')
    if not dot:
        section, key = '', key_part
    if not key:
        return None
    return section, key, value.strip(BLANKS)

class ConfigStore:
    """Two-level (section -> key -> value) configuration store.

    Arguments:
        scheme: Directory scheme used to resolve default configuration directory.
                When None, `.dirs.get_directory_scheme()` is used on `initialize()`.

    Important:
        Values have no type tags. Reading the same key as int, bool or string may
        give inconsistent results; using keys consistently is caller's task.

        The store is not thread-safe. Callers that share it between threads must
        serialize access.
    """
    def __init__(self, scheme: DirectoryScheme | None=None):
        self._data: dict[str, dict[str, str]] = {}
        self._scheme: DirectoryScheme | None = scheme
        self._config_dir: Path | None = None
        self._config_file_path: Path | None = None
        self._initialized: bool = False
        self._log = get_logger(self, 'config')
    def __enter__(self) -> ConfigStore:
        return self
    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
    def _resolve_path(self, path: Path | str | None) -> Path:
        if path:
            return Path(path)
        if self._config_file_path is None:
            raise ConfigError("Configuration file path not defined")
        return self._config_file_path
    def initialize(self, config_dir: Path | str | None=None, file_name: str=CONFIG_FILE_NAME) -> bool:
        """Prepares the store for use with configuration file in `config_dir`.

        Resolves the configuration directory (default is `config` directory of
        the directory scheme), creates it when necessary, applies default
        configuration and loads `file_name` from it.

        Returns:
            False if configuration directory could not be created.
        """
        if self._scheme is None:
            self._scheme = get_directory_scheme()
        self._config_dir = Path(config_dir) if config_dir else self._scheme.config
        if not self._scheme.create_directory(self._config_dir):
            self._log.error(f"Failed to create config directory: {self._config_dir}")
            return False
        self._config_file_path = self._scheme.join(self._config_dir, file_name)
        self.set_default_configuration()
        self.load_config()
        self._initialized = True
        self._log.info(f"Configuration manager initialized with config file: {self._config_file_path}")
        return True
    def close(self) -> None:
        """Saves configuration when the store was initialized, and marks it as closed.
        """
        if self._initialized:
            self._initialized = False
            self.save_config()
    def load_config(self, path: Path | str | None=None) -> bool:
        """Loads configuration file into the store.

        Loaded values replace current ones, other keys are kept. Malformed lines
        are reported and skipped.

        Arguments:
            path: Configuration file. Default is the file set by `initialize()`.

        Returns:
            True when file does not exist (current values stand), otherwise result
            of `validate_config()` after load. False if file exists but could not
            be read.

        Raises:
            ConfigError: When `path` is not specified and store was not initialized.
        """
        path = self._resolve_path(path)
        try:
            with open(path, encoding='utf-8', errors='surrogateescape', newline='\n') as fp:
                content = fp.read()
        except FileNotFoundError:
            self._log.info(f"Config file not found, using defaults: {path}")
            return True
        except OSError as exc:
            self._log.error(f"Failed to read config file {path}: {exc}")
            return False
        current_section = ''
        for line_no, line in enumerate(content.split('\n'), 1):
            # CRLF line ends
            line = line.removesuffix('\r').strip(BLANKS)
            if not line or line[0] in '#;':
                continue
            if line[0] == '[' and line[-1] == ']' and len(line) > 1:
                current_section = line[1:-1]
                self._data.setdefault(current_section, {})
                continue
            if (parsed := parse_config_line(line)) is None:
                self._log.warning(f"Invalid config line {line_no}: {line}")
                continue
            section, key, value = parsed
            if section:
                current_section = section
            self._data.setdefault(current_section, {})[key] = unescape_value(value)
        self._log.info(f"Configuration loaded from: {path}")
        return self.validate_config()
    def save_config(self, path: Path | str | None=None) -> bool:
        """Writes all sections into configuration file.

        Sections and keys are written in sorted order.

        Arguments:
            path: Configuration file. Default is the file set by `initialize()`.

        Returns:
            False if file could not be written. The previous file is left intact
            in such case.

        Raises:
            ConfigError: When `path` is not specified and store was not initialized.
        """
        path = self._resolve_path(path)
        lines = [*FILE_HEADER, '']
        for section in sorted(self._data):
            lines.append(f'[{section}]')
            values = self._data[section]
            lines.extend(f'{key} = {escape_value(values[key])}' for key in sorted(values))
            lines.append('')
        try:
            data = '\n'.join(lines).encode('utf-8', 'surrogateescape')
        except UnicodeError as exc:
            self._log.error(f"Failed to encode configuration for {path}: {exc}")
            return False
        # Existing file is replaced only after the new content is completely written
        tmp_path = path.with_name(f'{path.name}.tmp')
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            self._log.error(f"Failed to open config file for writing: {path} ({exc})")
            return False
        self._log.info(f"Configuration saved to: {path}")
        return True
    def get_string(self, section: str, key: str, default: str='') -> str:
        """Returns stored value, or `default` if key is not present.
        """
        return self._data.get(section, {}).get(key, default)
    def get_int(self, section: str, key: str, default: int=0) -> int:
        """Returns value as int, or `default` if key is missing, empty or not a
        decimal integer.
        """
        return convert_from_str_or(int, self.get_string(section, key), default)
    def get_bool(self, section: str, key: str, default: bool=False) -> bool: # noqa: FBT001, FBT002
        """Returns value as bool, or `default` if key is missing or empty.

        `true`, `1`, `yes` and `on` (case-insensitive) are True, any other value
        is False.
        """
        return convert_from_str_or(bool, self.get_string(section, key), default)
    def get_double(self, section: str, key: str, default: float=0.0) -> float:
        """Returns value as float, or `default` if key is missing, empty or not a
        number.
        """
        return convert_from_str_or(float, self.get_string(section, key), default)
    def set_string(self, section: str, key: str, value: str) -> None:
        """Stores string value.
        """
        self._data.setdefault(section, {})[key] = value
    def set_int(self, section: str, key: str, value: int) -> None:
        """Stores int value in decimal form.
        """
        self.set_string(section, key, convert_to_str(int(value)))
    def set_bool(self, section: str, key: str, value: bool) -> None: # noqa: FBT001
        """Stores bool value as `true` or `false`.
        """
        self.set_string(section, key, convert_to_str(bool(value)))
    def set_double(self, section: str, key: str, value: float) -> None:
        """Stores float value in locale-independent decimal form.
        """
        self.set_string(section, key, convert_to_str(float(value)))
    def set_value(self, section: str, key: str, value: Any) -> None:
        """Stores value of any type with registered convertor (see `.strconv`).
        """
        self.set_string(section, key, convert_to_str(value))
    def validate_config(self) -> bool:
        """Checks that all required sections are present, that web port is in
        range 1..65535 and OCR confidence threshold in range 0.0..1.0.

        Each problem is reported to the log. The store is not modified.

        Returns:
            True if configuration is valid.
        """
        valid = True
        for section in REQUIRED_SECTIONS:
            if section not in self._data:
                self._log.error(f"Missing required config section: {section}")
                valid = False
        port = self.get_int(WEB_SECTION, WEB_PORT, 8080)
        if not 1 <= port <= 65535:
            self._log.error(f"Invalid web port: {port}")
            valid = False
        confidence = self.get_double(OCR_SECTION, OCR_CONFIDENCE_THRESHOLD, 0.7)
        if not 0.0 <= confidence <= 1.0:
            self._log.error(f"Invalid OCR confidence threshold: {confidence}")
            valid = False
        return valid
    def set_default_configuration(self) -> None:
        """Stores baseline values of all default sections. Other keys are kept.
        """
        for section, values in DEFAULT_CONFIG.items():
            for key, value in values.items():
                self.set_value(section, key, value)
    def reset_to_defaults(self) -> None:
        """Removes all values and stores baseline configuration.
        """
        self._data.clear()
        self.set_default_configuration()
    def sections(self) -> list[str]:
        """Returns names of all sections.
        """
        return list(self._data)
    def get_section_keys(self, section: str) -> list[str]:
        """Returns all keys in section (empty list for unknown section).
        """
        return list(self._data.get(section, {}))
    def has_key(self, section: str, key: str) -> bool:
        """Returns True if key is present in section.
        """
        return key in self._data.get(section, {})
    def remove_key(self, section: str, key: str) -> bool:
        """Removes key from section.

        Returns:
            False if there was no such key.
        """
        return self._data.get(section, {}).pop(key, None) is not None
    def as_dict(self) -> dict[str, dict[str, str]]:
        """Returns copy of stored data.
        """
        return {section: dict(values) for section, values in self._data.items()}
    def save_proto(self, proto: StructProto) -> None:
        """Serializes all sections into `google.protobuf.Struct` message.

        Every section is stored as nested `Struct` with string values.
        """
        proto.update(self.as_dict())
    def load_proto(self, proto: StructProto) -> None:
        """Replaces sections present in `google.protobuf.Struct` message.

        Raises:
            ConfigError: When message item is not a `Struct` with string values. The
                         store is not modified in such case.
        """
        data = json_format.MessageToDict(proto)
        for section, values in data.items():
            if not isinstance(values, dict):
                raise ConfigError(f"Section '{section}' is not a structure", section=section)
            for key, value in values.items():
                if not isinstance(value, str):
                    raise ConfigError(f"Value '{section}.{key}' is not a string",
                                      section=section, key=key)
        for section, values in data.items():
            self._data[section] = dict(values)
    @property
    def config_file_path(self) -> Path | None:
        """Configuration file set by `initialize()`.
        """
        return self._config_file_path
    @property
    def config_dir(self) -> Path | None:
        """Configuration directory set by `initialize()`.
        """
        return self._config_dir
    @property
    def initialized(self) -> bool:
        """True after successful `initialize()`, until `close()`.
        """
        return self._initialized

# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           work_assistant/core/strconv.py
# DESCRIPTION:    Data conversion from/to string
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

"""work-assistant-core - Data conversion from/to string

Configuration values and command-line option values are always stored as
strings. This module holds the registry of functions that turn typed values
into their canonical string form and parse them back, so that the typed
accessors of `.config.ConfigStore` and `.cmdline.ArgumentParser` share one set
of rules:

- `int` is written as plain decimal and read as an optionally signed decimal
  literal (surrounding blanks are ignored).
- `float` is written in the shortest round-trip form (`repr`) and read with
  `float()`; the text never depends on the current locale.
- `bool` is written as `true`/`false` and read case-insensitively, where any
  of `TRUE_STR` means True and everything else means False.

Example::

    from work_assistant.core.strconv import convert_to_str, convert_from_str

    convert_to_str(0.7)            # '0.7'
    convert_to_str(True)           # 'true'
    convert_from_str(int, ' 42 ')  # 42
    convert_from_str(bool, 'Yes')  # True
    convert_from_str_or(int, 'abc', 8080)  # 8080
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

#: Function that converts typed value to its string representation.
TConvertToStr: TypeAlias = Callable[[Any], str]
#: Function that converts string representation of typed value to typed value.
TConvertFromStr: TypeAlias = Callable[[type, str], Any]

#: Valid (lowercase) string literals for True value.
TRUE_STR: list[str] = ['true', '1', 'yes', 'on']
#: Canonical string literals written for bool values.
BOOL_STR: dict[bool, str] = {True: 'true', False: 'false'}

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')

@dataclass
class Convertor:
    """Data convertor registry entry.

    Arguments:
        cls: The data type (class) this convertor handles.
        to_str: The function converting an instance of `cls` to a string.
        from_str: The function converting a string back to an instance of `cls`.
    """
    #: The data type (class) this convertor handles.
    cls: type
    #: The function converting an instance of `cls` to a string.
    to_str: TConvertToStr
    #: The function converting a string back to an instance of `cls`.
    from_str: TConvertFromStr
    @property
    def name(self) -> str:
        """Simple type name (e.g., 'int')."""
        return self.cls.__name__

_convertors: dict[type, Convertor] = {}

def any2str(value: Any) -> str:
    """Converts value to string using `str(value)`.
    """
    return str(value)

def str2any(cls: type, value: str) -> Any:
    """Converts string to data type value using `cls(value)`.
    """
    return cls(value)

def register_convertor(cls: type, *, to_str: TConvertToStr=any2str,
                       from_str: TConvertFromStr=str2any) -> None:
    """Registers convertor function(s) for a specific data type, replacing any
    convertor registered before for the same type.

    Arguments:
        cls:      Class to register convertor for.
        to_str:   Function that converts an instance of `cls` to `str`.
        from_str: Function that converts `str` to value of `cls` data type.
    """
    _convertors[cls] = Convertor(cls, to_str, from_str)

def has_convertor(cls: type) -> bool:
    """Returns True if a convertor is registered for the class or its bases.
    """
    return _find_convertor(cls) is not None

def _find_convertor(cls: type) -> Convertor | None:
    for base in cls.__mro__:
        if (conv := _convertors.get(base)) is not None:
            return conv
    return None

def get_convertor(cls: type) -> Convertor:
    """Returns the Convertor registered for a data type or its nearest base.

    Raises:
        TypeError: If no convertor is found for `cls` or any of its base classes.
    """
    if (conv := _find_convertor(cls)) is None:
        raise TypeError(f"Type '{cls.__name__}' has no Convertor")
    return conv

def convert_to_str(value: Any) -> str:
    """Converts a value to its canonical string representation.

    Raises:
        TypeError: If no convertor is registered for the value's class.
    """
    return get_convertor(value.__class__).to_str(value)

def convert_from_str(cls: type, value: str) -> Any:
    """Converts a string representation back to a typed value.

    Raises:
        TypeError: If no convertor is registered for `cls`.
        ValueError: If `value` is not a valid string representation for `cls`.
    """
    return get_convertor(cls).from_str(cls, value)

def convert_from_str_or(cls: type, value: str | None, default: Any) -> Any:
    """Converts a string representation to a typed value, or returns `default`
    when `value` is `None`, empty, or cannot be converted. Never raises for bad
    data.
    """
    if not value:
        return default
    try:
        return convert_from_str(cls, value)
    except ValueError:
        return default

def _register() -> None:
    """Internal function for registration of builtin converters."""

    def str2int(type_: type, value: str) -> int:
        value = value.strip(' \t')
        if _INT_PATTERN.fullmatch(value) is None:
            raise ValueError(f"invalid literal for {type_.__name__}: '{value}'")
        return type_(value, 10)
    def float2str(value: float) -> str:
        return repr(value)
    def str2float(type_: type, value: str) -> float:
        if '_' in value:
            raise ValueError(f"could not convert string to {type_.__name__}: '{value}'")
        return type_(value.strip(' \t'))
    def bool2str(value: bool) -> str: # noqa: FBT001
        return BOOL_STR[bool(value)]
    def str2bool(type_: type, value: str) -> bool: # noqa: ARG001
        return value.strip(' \t').lower() in TRUE_STR

    register_convertor(str)
    register_convertor(int, from_str=str2int)
    register_convertor(float, to_str=float2str, from_str=str2float)
    register_convertor(bool, to_str=bool2str, from_str=str2bool)

_register()
del _register

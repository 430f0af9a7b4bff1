# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           work_assistant/core/cmdline.py
# DESCRIPTION:    Command-line argument parser
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

"""work-assistant-core - Command-line argument parser

This module provides a small option scanner driven by a caller-supplied schema
of `OptionDescriptor` instances. It supports:

*   Long options `--name`, with the value either inline (`--name=value`) or in
    the next argument (`--name value`).
*   Short options `-n`, bundled short flags (`-vq`), and short options with the
    value attached (`-ovalue`) or in the next argument (`-o value`).
*   Flags (options without value) stored with the sentinel value `"true"`.
*   Required options, per-option default values and value validators.
*   Positional arguments, collected in encounter order.
*   Usage, help and version texts.

Parsing is all-or-nothing: the first error stops the scan, `parse()` returns
False and the error message is available in `ArgumentParser.last_error`.

Values are stored under the canonical key of the option, which is its long
name, or its short name when the option has no long name. Both forms of one
option therefore always write the same key.

Example::

    from work_assistant.core.cmdline import ArgumentParser

    parser = ArgumentParser('tool', 'Example tool', '0.1')
    parser.add_option('v', 'verbose', 'Enable verbose output')
    parser.add_option('p', 'port', 'Server port', takes_value=True,
                      default_value='8080', validator=str.isdigit)
    if not parser.parse(['-v', '--port=9000', 'input.txt']):
        print(parser.last_error)
    parser.get_int_value('port')     # 9000
    parser.get_bool_value('verbose') # True
    parser.positional_args           # ['input.txt']

Important:
    When a short option that takes a value appears in a bundle, the rest of the
    bundle is always its value. `-pv8080` (with `p` taking a value) stores
    `"v8080"` for `p`, and `-pv` stores `"v"` rather than setting flag `v`.
    Put value-taking options last in a bundle (`-vp8080`).
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from .strconv import convert_from_str_or
from .types import ArgumentError

#: Value stored for options that do not take a value.
FLAG_VALUE: str = 'true'

@dataclass(frozen=True)
class OptionDescriptor:
    """Describes one recognized command-line option.

    Arguments:
        short_name: Single character short form (without `-`), or empty string.
        long_name: Long form (without `--`), or empty string.
        description: Help text.
        takes_value: True if option consumes a value.
        required: True if option must be present on command line.
        default_value: Value returned by value accessors when option was not given.
        validator: Optional predicate over the raw value string.
    """
    short_name: str = ''
    long_name: str = ''
    description: str = ''
    takes_value: bool = False
    required: bool = False
    default_value: str = ''
    validator: Callable[[str], bool] | None = field(default=None, compare=False)
    def __post_init__(self):
        assert self.short_name or self.long_name, "short or long name required" # noqa: S101
        assert len(self.short_name) <= 1, "short name must be a single character" # noqa: S101
    def matches(self, name: str) -> bool:
        """Returns True if `name` is the short or long name of this option.
        """
        return bool(name) and name in (self.short_name, self.long_name)
    def accepts(self, value: str) -> bool:
        """Returns True if value passes the validator (or there is no validator).
        """
        return self.validator is None or bool(self.validator(value))
    def get_forms(self) -> str:
        """Returns option forms as shown in help, e.g. `-p, --web-port VALUE`.
        """
        forms = []
        if self.short_name:
            forms.append(f'-{self.short_name}')
        if self.long_name:
            forms.append(f'--{self.long_name}')
        result = ', '.join(forms)
        if self.takes_value:
            result += ' VALUE'
        return result
    @property
    def key(self) -> str:
        """Canonical storage key: long name if present, else short name.
        """
        return self.long_name or self.short_name
    @property
    def flag(self) -> str:
        """Canonical flag form used in messages: `--long`, else `-s`.
        """
        if self.long_name:
            return f'--{self.long_name}'
        if self.short_name:
            return f'-{self.short_name}'
        return 'unknown'

@dataclass
class ParsedArguments:
    """Result of one `ArgumentParser.parse()` call.
    """
    #: Option values by canonical key. Flags have value `"true"`.
    values: dict[str, str] = field(default_factory=dict)
    #: Non-option arguments in encounter order.
    positional: list[str] = field(default_factory=list)
    #: Last error message, empty when parsing succeeded.
    error: str = ''

class ArgumentParser:
    """Command-line argument parser over a schema of `OptionDescriptor` instances.

    Arguments:
        program_name: Program name shown in usage/help/version texts.
        description: Program description shown in help.
        version: Program version string.
    """
    def __init__(self, program_name: str='work_assistant',
                 description: str='Work Study Assistant - Intelligent productivity monitoring',
                 version: str='1.0.0'):
        #: Program name shown in usage/help/version texts.
        self.program_name: str = program_name
        #: Program description shown in help.
        self.program_description: str = description
        #: Program version string.
        self.program_version: str = version
        #: Example command lines (without program name) listed in help.
        self.examples: list[str] = []
        self._options: list[OptionDescriptor] = []
        self._result: ParsedArguments = ParsedArguments()
    def add_option(self, option: OptionDescriptor | str, long_name: str='', description: str='', *,
                   takes_value: bool=False, required: bool=False, default_value: str='',
                   validator: Callable[[str], bool] | None=None) -> OptionDescriptor:
        """Adds option to schema.

        Arguments:
            option: Either complete `OptionDescriptor`, or short option name. In the
                    latter case, the descriptor is built from all arguments.
            long_name: Long option name.
            description: Help text.
            takes_value: True if option consumes a value.
            required: True if option must be present.
            default_value: Default value.
            validator: Optional predicate over the raw value string.

        Returns:
            Descriptor added to the schema.

        Note:
            Names should be unique. When they're not, the option added first wins
            all lookups.
        """
        if not isinstance(option, OptionDescriptor):
            option = OptionDescriptor(option, long_name, description, takes_value=takes_value,
                                      required=required, default_value=default_value,
                                      validator=validator)
        self._options.append(option)
        return option
    def find_option(self, name: str) -> OptionDescriptor | None:
        """Returns first option whose short or long name is `name`, or None.
        """
        for option in self._options:
            if option.matches(name):
                return option
        return None
    def _find_long(self, name: str) -> OptionDescriptor | None:
        for option in self._options:
            if name and option.long_name == name:
                return option
        return None
    def _find_short(self, name: str) -> OptionDescriptor | None:
        for option in self._options:
            if option.short_name == name:
                return option
        return None
    def _store_value(self, option: OptionDescriptor, form: str, value: str) -> None:
        if not option.accepts(value):
            raise ArgumentError(f"Invalid value for option {form}: {value}", option=form)
        self._result.values[option.key] = value
    def _scan(self, args: Sequence[str]) -> None:
        i = 0
        count = len(args)
        while i < count:
            arg = args[i]
            if not arg:
                pass
            elif arg.startswith('--'):
                name, sep, value = arg[2:].partition('=')
                form = f'--{name}'
                if (option := self._find_long(name)) is None:
                    raise ArgumentError(f"Unknown option: {form}", option=form)
                if option.takes_value:
                    if not value:
                        if i + 1 >= count:
                            raise ArgumentError(f"Option {form} requires a value", option=form)
                        i += 1
                        value = args[i]
                    self._store_value(option, form, value)
                else:
                    if sep and value:
                        raise ArgumentError(f"Option {form} does not take a value", option=form)
                    self._result.values[option.key] = FLAG_VALUE
            elif arg.startswith('-') and len(arg) > 1:
                bundle = arg[1:]
                j = 0
                while j < len(bundle):
                    form = f'-{bundle[j]}'
                    if (option := self._find_short(bundle[j])) is None:
                        raise ArgumentError(f"Unknown option: {form}", option=form)
                    if option.takes_value:
                        if j + 1 < len(bundle):
                            # Rest of the bundle is the value
                            value = bundle[j + 1:]
                            j = len(bundle)
                        else:
                            if i + 1 >= count:
                                raise ArgumentError(f"Option {form} requires a value", option=form)
                            i += 1
                            value = args[i]
                        self._store_value(option, form, value)
                    else:
                        self._result.values[option.key] = FLAG_VALUE
                    j += 1
            else:
                self._result.positional.append(arg)
            i += 1
        for option in self._options:
            if option.required and option.key not in self._result.values:
                raise ArgumentError(f"Required option missing: {option.flag}", option=option.flag)
    def parse_or_raise(self, args: Sequence[str], program: str | None=None) -> ParsedArguments:
        """Parses command-line arguments.

        Arguments:
            args: Arguments, without the program path.
            program: Program path (usually `sys.argv[0]`). When given, its last path
                     component becomes `program_name`.

        Returns:
            Parsed option values and positional arguments.

        Raises:
            ArgumentError: On first syntax error. The results collected so far are
                           discarded.
        """
        self._result = ParsedArguments()
        if program:
            self.program_name = program.replace('\\', '/').rsplit('/', 1)[-1]
        try:
            self._scan(args)
        except ArgumentError as exc:
            self._result.error = str(exc)
            raise
        return self._result
    def parse(self, args: Sequence[str], program: str | None=None) -> bool:
        """Parses command-line arguments.

        Arguments:
            args: Arguments, without the program path.
            program: Program path (usually `sys.argv[0]`).

        Returns:
            True on success. False on error, in which case `last_error` describes
            the problem and parsed values must be ignored.
        """
        try:
            self.parse_or_raise(args, program)
        except ArgumentError:
            return False
        return True
    def has_option(self, name: str) -> bool:
        """Returns True if value is stored under key `name` by last parse.
        """
        return name in self._result.values
    def get_value(self, name: str, default: str='') -> str:
        """Returns value stored under key `name`.

        When there is no such value, returns the non-empty default value of the
        option named `name` (short or long name), or `default`.
        """
        if name in self._result.values:
            return self._result.values[name]
        if (option := self.find_option(name)) is not None and option.default_value:
            return option.default_value
        return default
    def get_int_value(self, name: str, default: int=0) -> int:
        """Returns value of option `name` as integer. Returns `default` when the
        option has no value or the value is not a decimal integer.
        """
        return convert_from_str_or(int, self.get_value(name), default)
    def get_bool_value(self, name: str, default: bool=False) -> bool: # noqa: FBT001, FBT002
        """Returns value of option `name` as bool.

        Absent option returns `default`. Values `false` and `0` return False, any
        other value (including the flag value `true`) returns True.
        """
        if not self.has_option(name):
            return default
        return self.get_value(name) not in ('false', '0')
    def format_usage(self) -> str:
        """Returns usage line.
        """
        result = f'Usage: {self.program_name} [OPTIONS]'
        if any(option.required for option in self._options):
            result += ' REQUIRED_OPTIONS'
        return result
    def format_help(self) -> str:
        """Returns complete help text (usage, description, options and examples).
        """
        lines = [self.format_usage(), '', 'Description:', f'  {self.program_description}', '']
        if self._options:
            lines.append('Options:')
            width = max(len(option.get_forms()) for option in self._options) + 2
            for option in self._options:
                line = f'  {option.get_forms().ljust(width)}{option.description}'
                if option.required:
                    line += ' (required)'
                if option.default_value:
                    line += f' (default: {option.default_value})'
                lines.append(line)
            lines.append('')
        if self.examples:
            lines.append('Examples:')
            lines.extend(f'  {self.program_name} {example}' for example in self.examples)
            lines.append('')
        return '\n'.join(lines) + '\n'
    def format_version(self) -> str:
        """Returns version line.
        """
        return f'{self.program_name} version {self.program_version}'
    def print_usage(self, file: TextIO | None=None) -> None:
        """Writes usage line to `file` (default `sys.stdout`).
        """
        print(self.format_usage(), file=file or sys.stdout)
    def print_help(self, file: TextIO | None=None) -> None:
        """Writes help text to `file` (default `sys.stdout`).
        """
        (file or sys.stdout).write(self.format_help())
    def print_version(self, file: TextIO | None=None) -> None:
        """Writes version line to `file` (default `sys.stdout`).
        """
        print(self.format_version(), file=file or sys.stdout)
    def has_errors(self) -> bool:
        """Returns True if last parse failed.
        """
        return bool(self._result.error)
    @property
    def options(self) -> list[OptionDescriptor]:
        """Option schema (copy).
        """
        return list(self._options)
    @property
    def values(self) -> dict[str, str]:
        """Option values from last parse (copy).
        """
        return dict(self._result.values)
    @property
    def positional_args(self) -> list[str]:
        """Positional arguments from last parse (copy).
        """
        return list(self._result.positional)
    @property
    def last_error(self) -> str:
        """Error message from last parse, or empty string.
        """
        return self._result.error

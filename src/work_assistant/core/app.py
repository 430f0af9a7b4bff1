# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           work_assistant/core/app.py
# DESCRIPTION:    Application bootstrap
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

"""work-assistant-core - Application bootstrap

Builds the standard command-line schema, and drives the startup sequence:
parse arguments, configure logging, prepare directories, load configuration,
apply command-line overrides and run the service until it is stopped.

The `main` function is installed as `work-assistant` console script.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from .cmdline import ArgumentParser
from .config import (AI_MODEL_PATH, AI_SECTION, APP_LOG_LEVEL, APP_SECTION, OCR_CONFIDENCE_THRESHOLD,
                     OCR_DEFAULT_MODE, OCR_SECTION, WEB_HOST, WEB_PORT, WEB_SECTION, ConfigStore)
from .daemon import DaemonService
from .dirs import get_directory_scheme
from .logging import configure_logging, get_logger
from .strconv import convert_from_str_or

__version__ = '1.0.0'

PROGRAM_NAME: str = 'work_study_assistant'
PROGRAM_DESCRIPTION: str = 'Work Study Assistant - Intelligent productivity monitoring and analysis tool'

# Option names

HELP: str = 'help'
VERSION: str = 'version'
CONFIG: str = 'config'
DATA_DIR: str = 'data-dir'
LOG_LEVEL: str = 'log-level'
VERBOSE: str = 'verbose'
QUIET: str = 'quiet'
DAEMON: str = 'daemon'
NO_GUI: str = 'no-gui'
TEST_MODE: str = 'test-mode'
WEB_PORT_OPT: str = 'web-port'
OCR_MODE: str = 'ocr-mode'
AI_MODEL: str = 'ai-model'

#: Configuration key set by `--no-gui`.
APP_NO_GUI: str = 'no_gui'

#: Accepted `--log-level` values.
LOG_LEVELS: tuple[str, ...] = ('debug', 'info', 'warn', 'error')
#: Accepted `--ocr-mode` values, in order of their numeric codes.
OCR_MODES: tuple[str, ...] = ('fast', 'accurate', 'multimodal', 'auto')

_log = get_logger('bootstrap', 'app')

def is_valid_port(value: str) -> bool:
    """Returns True if value is decimal integer in range 1..65535.
    """
    return 1 <= convert_from_str_or(int, value, 0) <= 65535

def is_valid_log_level(value: str) -> bool:
    """Returns True if value is one of `LOG_LEVELS`.
    """
    return value in LOG_LEVELS

def is_valid_ocr_mode(value: str) -> bool:
    """Returns True if value is one of `OCR_MODES`.
    """
    return value in OCR_MODES

def setup_standard_options(parser: ArgumentParser) -> None:
    """Adds the standard application options and help examples to parser.
    """
    parser.add_option('h', HELP, 'Show this help message')
    parser.add_option('', VERSION, 'Show version information')
    parser.add_option('c', CONFIG, 'Configuration file path', takes_value=True)
    parser.add_option('', DATA_DIR, 'Data directory path', takes_value=True)
    parser.add_option('l', LOG_LEVEL, 'Log level (debug, info, warn, error)', takes_value=True,
                      default_value='info', validator=is_valid_log_level)
    parser.add_option('v', VERBOSE, 'Enable verbose output')
    parser.add_option('q', QUIET, 'Suppress output except errors')
    parser.add_option('d', DAEMON, 'Run as daemon service')
    parser.add_option('', NO_GUI, 'Run without GUI (web interface only)')
    parser.add_option('', TEST_MODE, 'Run in test mode')
    parser.add_option('p', WEB_PORT_OPT, 'Web server port', takes_value=True, default_value='8080',
                      validator=is_valid_port)
    parser.add_option('', OCR_MODE, 'OCR mode (fast, accurate, multimodal, auto)', takes_value=True,
                      default_value='auto', validator=is_valid_ocr_mode)
    parser.add_option('m', AI_MODEL, 'AI model path', takes_value=True)
    parser.examples.extend(['--help',
                            '--config /path/to/config.conf',
                            '--daemon --web-port 8080',
                            '--no-gui --ocr-mode fast'])

def create_parser() -> ArgumentParser:
    """Returns argument parser with the standard application schema.
    """
    parser = ArgumentParser(PROGRAM_NAME, PROGRAM_DESCRIPTION, __version__)
    setup_standard_options(parser)
    return parser

def apply_overrides(parser: ArgumentParser, store: ConfigStore) -> None:
    """Copies explicitly given command-line options into configuration.

    Only options present on the command line are applied, so option defaults
    never replace values loaded from the configuration file.
    """
    if parser.has_option(WEB_PORT_OPT):
        store.set_int(WEB_SECTION, WEB_PORT, parser.get_int_value(WEB_PORT_OPT))
    if parser.has_option(OCR_MODE):
        store.set_int(OCR_SECTION, OCR_DEFAULT_MODE, OCR_MODES.index(parser.get_value(OCR_MODE)))
    if parser.has_option(AI_MODEL):
        store.set_string(AI_SECTION, AI_MODEL_PATH, parser.get_value(AI_MODEL))
    if parser.has_option(LOG_LEVEL):
        store.set_string(APP_SECTION, APP_LOG_LEVEL, parser.get_value(LOG_LEVEL))
    if parser.has_option(NO_GUI):
        store.set_bool(APP_SECTION, APP_NO_GUI, True)

def run_test_mode(store: ConfigStore) -> int:
    """Validates configuration and logs its summary. Nothing is started.
    """
    valid = store.validate_config()
    _log.info(f"Test mode: configuration is {'valid' if valid else 'invalid'}")
    _log.info(f"Config file: {store.config_file_path}")
    _log.info(f"Web server: {store.get_string(WEB_SECTION, WEB_HOST)}:"
              f"{store.get_int(WEB_SECTION, WEB_PORT, 8080)}")
    mode = store.get_int(OCR_SECTION, OCR_DEFAULT_MODE, 3)
    _log.info(f"OCR mode: {OCR_MODES[mode] if 0 <= mode < len(OCR_MODES) else mode}, "
              f"confidence threshold: {store.get_double(OCR_SECTION, OCR_CONFIDENCE_THRESHOLD, 0.7)}")
    _log.info(f"AI model: {store.get_string(AI_SECTION, AI_MODEL_PATH)}")
    return 0

def run_service(service: DaemonService, *, daemon: bool) -> int:
    """Runs the service until SIGINT/SIGTERM or `DaemonService.request_stop()`.

    Arguments:
        service: Service to run.
        daemon: Start the service thread with main function that waits for stop
                request. Otherwise, the calling thread just waits for the request.

    Returns:
        Process exit code.
    """
    service.install_signal_handlers()
    try:
        if daemon:
            service.set_main_function(service.wait)
            if not service.start_daemon():
                return 1
            _log.info("Running in daemon mode")
        else:
            _log.info("Running in foreground mode, press Ctrl+C to stop")
        service.wait()
    finally:
        service.stop_daemon()
        service.restore_signal_handlers()
    _log.info("Application stopped")
    return 0

def main(argv: Sequence[str] | None=None) -> int:
    """Application entry point.

    Arguments:
        argv: Command-line arguments without the program path. Default is
              `sys.argv[1:]`.

    Returns:
        Process exit code: 0 on success, 1 on argument or initialization error.
    """
    program = None
    if argv is None:
        program, argv = sys.argv[0], sys.argv[1:]
    parser = create_parser()
    if not parser.parse(argv, program):
        print(f"Error: {parser.last_error}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    if parser.has_option(HELP):
        parser.print_help()
        return 0
    if parser.has_option(VERSION):
        parser.print_version()
        return 0
    configure_logging(parser.get_value(LOG_LEVEL, 'info'), verbose=parser.has_option(VERBOSE),
                      quiet=parser.has_option(QUIET))
    _log.info(f"Starting {parser.format_version()}")
    scheme = get_directory_scheme(base=parser.get_value(DATA_DIR) or None)
    if not scheme.initialize():
        _log.error("Failed to initialize directory structure")
        return 1
    store = ConfigStore(scheme)
    if config_path := parser.get_value(CONFIG):
        config_path = Path(config_path)
        initialized = store.initialize(config_path.parent, config_path.name)
    else:
        initialized = store.initialize()
    if not initialized:
        _log.error("Failed to initialize configuration")
        return 1
    apply_overrides(parser, store)
    if parser.has_option(TEST_MODE):
        return run_test_mode(store)
    with store:
        return run_service(DaemonService(), daemon=parser.has_option(DAEMON))

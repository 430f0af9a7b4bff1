# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           work_assistant/core/daemon.py
# DESCRIPTION:    Background service runner
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

"""work-assistant-core - Background service runner

`DaemonService` runs the application main function on a background thread and
coordinates its shutdown. The main function is expected to run until the
service is asked to stop, typically by waiting on `DaemonService.wait()`::

    service = DaemonService()
    service.set_main_function(service.wait)
    service.set_shutdown_function(lambda: store.close())
    service.install_signal_handlers()
    if service.start_daemon():
        service.wait()          # returns after SIGINT/SIGTERM or stop_daemon()
        service.stop_daemon()
"""

from __future__ import annotations

import signal
from collections.abc import Callable
from threading import Event, Lock, Thread, current_thread
from typing import Any

from .logging import get_logger

#: Signals handled by `DaemonService.install_signal_handlers()`.
STOP_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)
#: Time slice (in seconds) used by `DaemonService.wait()` without timeout.
POLL_INTERVAL: float = 0.25

class DaemonService:
    """Runs main function on background thread until stopped.

    Arguments:
        name: Service name, used as name of the worker thread.
    """
    def __init__(self, name: str='work_assistant'):
        #: Service name
        self.name: str = name
        self._main: Callable[[], Any] | None = None
        self._shutdown: Callable[[], Any] | None = None
        self._thread: Thread | None = None
        self._stop_event: Event = Event()
        self._lock: Lock = Lock()
        self._saved_handlers: dict[signal.Signals, Any] = {}
        self._log = get_logger(self, 'daemon')
    def _run(self) -> None:
        try:
            self._main()
        except Exception:
            self._log.exception("Daemon main function failed")
        finally:
            self._stop_event.set()
    def _handle_signal(self, signum: int, frame: Any) -> None: # noqa: ARG002
        self._log.info(f"Received signal {signal.Signals(signum).name}, stopping")
        self._stop_event.set()
    def set_main_function(self, func: Callable[[], Any]) -> None:
        """Sets function executed by the service thread.
        """
        self._main = func
    def set_shutdown_function(self, func: Callable[[], Any]) -> None:
        """Sets function called once by `stop_daemon()`.
        """
        self._shutdown = func
    def start_daemon(self) -> bool:
        """Starts the main function on background thread.

        Returns:
            False if main function is not set or the service is already running.
        """
        with self._lock:
            if self._main is None:
                self._log.error("Daemon main function not set")
                return False
            if self._thread is not None and self._thread.is_alive():
                self._log.warning("Daemon is already running")
                return False
            self._stop_event.clear()
            self._thread = Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()
        self._log.info("Daemon started")
        return True
    def stop_daemon(self, timeout: float | None=None) -> None:
        """Signals the main function to stop, calls the shutdown function and waits
        for the service thread to finish.

        Does nothing when the service was not started, or was already stopped.

        Arguments:
            timeout: Maximum time (in seconds) to wait for the service thread.
        """
        with self._lock:
            thread, self._thread = self._thread, None
        if thread is None:
            return
        self._stop_event.set()
        if self._shutdown is not None:
            try:
                self._shutdown()
            except Exception:
                self._log.exception("Daemon shutdown function failed")
        if thread is not current_thread():
            thread.join(timeout)
        self._log.info("Daemon stopped")
    def is_daemon_running(self) -> bool:
        """Returns True while the service thread is alive.
        """
        thread = self._thread
        return thread is not None and thread.is_alive()
    def wait(self, timeout: float | None=None) -> bool:
        """Blocks until stop is requested, or timeout expires.

        Returns:
            True if stop was requested.
        """
        if timeout is not None:
            return self._stop_event.wait(timeout)
        # Short slices let the main thread run Python signal handlers
        while not self._stop_event.wait(POLL_INTERVAL):
            pass
        return True
    def request_stop(self) -> None:
        """Asks the main function to stop without waiting for it.
        """
        self._stop_event.set()
    def install_signal_handlers(self) -> None:
        """Installs SIGINT and SIGTERM handlers that request the service to stop.

        Important:
            Must be called from the main thread.
        """
        for sig in STOP_SIGNALS:
            self._saved_handlers.setdefault(sig, signal.getsignal(sig))
            signal.signal(sig, self._handle_signal)
    def restore_signal_handlers(self) -> None:
        """Restores signal handlers replaced by `install_signal_handlers()`.
        """
        for sig, handler in self._saved_handlers.items():
            signal.signal(sig, handler)
        self._saved_handlers.clear()
    @property
    def stop_requested(self) -> bool:
        """True when stop was requested.
        """
        return self._stop_event.is_set()

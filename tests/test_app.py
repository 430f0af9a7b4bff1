# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           tests/test_app.py
# DESCRIPTION:    Tests for work_assistant.core.app
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


from __future__ import annotations

import logging

import pytest

from work_assistant.core import app
from work_assistant.core.config import ConfigStore
from work_assistant.core.daemon import DaemonService


class AutoStopService(DaemonService):
    """Service that asks itself to stop as soon as anybody waits for it."""
    def wait(self, timeout=None):
        self.request_stop()
        return super().wait(timeout)

@pytest.fixture(autouse=True)
def no_home_env(monkeypatch):
    monkeypatch.delenv("WORK_ASSISTANT_HOME", raising=False)

@pytest.fixture
def parser():
    return app.create_parser()

def read_config(path) -> ConfigStore:
    store = ConfigStore()
    store.load_config(path)
    return store

def test_standard_schema(parser):
    assert parser.program_name == "work_study_assistant"
    assert parser.program_version == "1.0.0"
    assert [opt.get_forms() for opt in parser.options] == [
        "-h, --help", "--version", "-c, --config VALUE", "--data-dir VALUE",
        "-l, --log-level VALUE", "-v, --verbose", "-q, --quiet", "-d, --daemon", "--no-gui",
        "--test-mode", "-p, --web-port VALUE", "--ocr-mode VALUE", "-m, --ai-model VALUE"]
    assert parser.format_usage() == "Usage: work_study_assistant [OPTIONS]"
    help_text = parser.format_help()
    assert "Work Study Assistant - Intelligent productivity monitoring and analysis tool" in help_text
    assert "  work_study_assistant --daemon --web-port 8080\n" in help_text

def test_standard_parse(parser):
    assert parser.parse(["-d", "--no-gui", "--web-port", "9090", "-l", "debug", "-m", "model.gguf"])
    assert parser.get_bool_value("daemon")
    assert parser.get_bool_value("no-gui")
    assert parser.get_int_value("web-port") == 9090
    assert parser.get_value("log-level") == "debug"
    assert parser.get_value("ai-model") == "model.gguf"
    assert parser.parse([])
    assert parser.get_int_value("web-port") == 8080
    assert parser.get_value("log-level") == "info"

def test_short_bundle_value(parser):
    """`-pv8080` gives the rest of the bundle to `-p`, which rejects it."""
    assert not parser.parse(["-pv8080"])
    assert parser.last_error == "Invalid value for option -p: v8080"
    assert parser.parse(["-vp8080"])
    assert parser.get_bool_value("verbose")
    assert parser.get_int_value("web-port") == 8080

@pytest.mark.parametrize(("args", "valid"), [
    (["-p", "1"], True),
    (["-p", "65535"], True),
    (["-p", "0"], False),
    (["-p", "70000"], False),
    (["-p", "80a"], False),
    (["--log-level", "warn"], True),
    (["--log-level", "verbose"], False),
    (["--log-level", "INFO"], False),
    (["--ocr-mode", "multimodal"], True),
    (["--ocr-mode", "slow"], False),
])
def test_validators(parser, args, valid):
    assert parser.parse(args) is valid

def test_validator_functions():
    assert app.is_valid_port("8080")
    assert not app.is_valid_port("")
    assert not app.is_valid_port("-1")
    assert app.is_valid_log_level("error")
    assert app.is_valid_ocr_mode("auto")

def test_main_bad_args(capsys):
    assert app.main(["--bogus"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "Error: Unknown option: --bogus\nUsage: work_study_assistant [OPTIONS]\n"

def test_main_help(capsys):
    assert app.main(["--help"]) == 0
    assert capsys.readouterr().out == app.create_parser().format_help()

def test_main_version(capsys):
    assert app.main(["--version"]) == 0
    assert capsys.readouterr().out == "work_study_assistant version 1.0.0\n"

def test_main_program_name(capsys, monkeypatch):
    monkeypatch.setattr("sys.argv", ["/opt/bin/assistant", "--version"])
    assert app.main() == 0
    assert capsys.readouterr().out == "assistant version 1.0.0\n"

def test_main_test_mode(tmp_path, caplog):
    with caplog.at_level(logging.INFO):
        assert app.main(["--data-dir", str(tmp_path), "--test-mode", "-p", "9000"]) == 0
    for sub in ("data", "config", "logs", "cache", "models", "temp", "data/screenshots"):
        assert (tmp_path / sub).is_dir()
    assert "Test mode: configuration is valid" in caplog.messages
    assert "Web server: 127.0.0.1:9000" in caplog.messages
    # Test mode does not write the configuration file
    assert not (tmp_path / "config" / "work_assistant.conf").exists()

def test_main_test_mode_invalid(tmp_path, caplog):
    conf = tmp_path / "custom.conf"
    conf.write_text("[ocr]\nconfidence_threshold = 1.5\n")
    with caplog.at_level(logging.INFO):
        assert app.main(["--data-dir", str(tmp_path), "--config", str(conf), "--test-mode"]) == 0
    assert "Invalid OCR confidence threshold: 1.5" in caplog.messages
    assert "Test mode: configuration is invalid" in caplog.messages
    assert f"Config file: {conf}" in caplog.messages

def test_main_init_failure(tmp_path):
    (tmp_path / "data").write_text("file")
    assert app.main(["--data-dir", str(tmp_path), "--test-mode"]) == 1

def test_apply_overrides(parser, tmp_path):
    store = ConfigStore()
    store.set_default_configuration()
    assert parser.parse([])
    app.apply_overrides(parser, store)
    assert store.get_int("web", "port") == 8080
    assert store.get_int("ocr", "default_mode") == 3
    assert not store.has_key("application", "no_gui")
    assert parser.parse(["-p", "9090", "--ocr-mode", "fast", "-m", "m.gguf", "-l", "warn", "--no-gui"])
    app.apply_overrides(parser, store)
    assert store.get_int("web", "port") == 9090
    assert store.get_int("ocr", "default_mode") == 0
    assert store.get_string("ai", "model_path") == "m.gguf"
    assert store.get_string("application", "log_level") == "warn"
    assert store.get_bool("application", "no_gui")

@pytest.mark.parametrize("daemon", [True, False])
def test_run_service(daemon, caplog):
    service = AutoStopService()
    with caplog.at_level(logging.INFO):
        assert app.run_service(service, daemon=daemon) == 0
    assert not service.is_daemon_running()
    assert ("Running in daemon mode" in caplog.messages) is daemon
    assert caplog.messages[-1] == "Application stopped"

@pytest.mark.parametrize("mode", [[], ["--daemon"]])
def test_main_run(tmp_path, monkeypatch, mode):
    """Service runs until stopped, then configuration with overrides is saved."""
    monkeypatch.setattr(app, "DaemonService", AutoStopService)
    conf = tmp_path / "etc" / "assistant.conf"
    assert app.main(["--data-dir", str(tmp_path), "-c", str(conf), "-q", "-p", "9191", *mode]) == 0
    store = read_config(conf)
    assert store.get_int("web", "port") == 9191
    assert store.get_string("application", "log_level") == "info"
    assert not (tmp_path / "config" / "work_assistant.conf").exists()

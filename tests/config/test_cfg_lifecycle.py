# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           tests/config/test_cfg_lifecycle.py
# DESCRIPTION:    Tests for ConfigStore initialization and validation
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

from work_assistant.core.config import *


def test_initialize_default(store, scheme, caplog):
    with caplog.at_level(logging.INFO):
        assert store.initialize()
    assert store.initialized
    assert store.config_dir == scheme.config
    assert store.config_file_path == scheme.config / CONFIG_FILE_NAME
    assert scheme.config.is_dir()
    assert store.get_int(WEB_SECTION, WEB_PORT) == 8080
    assert f"Config file not found, using defaults: {store.config_file_path}" in caplog.messages
    assert caplog.messages[-1] == f"Configuration manager initialized with config file: {store.config_file_path}"

def test_initialize_custom(store, tmp_path):
    config_dir = tmp_path / "custom" / "dir"
    config_dir.mkdir(parents=True)
    (config_dir / "my.conf").write_text("[web]\nport = 9090\n")
    assert store.initialize(config_dir, "my.conf")
    assert store.config_file_path == config_dir / "my.conf"
    assert store.get_int(WEB_SECTION, WEB_PORT, 8080) == 9090
    assert store.get_string(WEB_SECTION, WEB_HOST) == "127.0.0.1"

def test_initialize_without_scheme(tmp_path, monkeypatch):
    monkeypatch.setenv("WORK_ASSISTANT_HOME", str(tmp_path))
    store = ConfigStore()
    assert store.initialize()
    assert store.config_file_path == tmp_path / "config" / CONFIG_FILE_NAME

def test_initialize_failure(store, tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("file")
    with caplog.at_level(logging.ERROR):
        assert not store.initialize(blocker / "config")
    assert not store.initialized
    assert store.config_file_path is None
    assert caplog.messages[-1] == f"Failed to create config directory: {blocker / 'config'}"

def test_close_saves(store):
    assert store.initialize()
    store.set_int(WEB_SECTION, WEB_PORT, 7000)
    store.close()
    assert not store.initialized
    assert store.config_file_path.is_file()
    other = ConfigStore()
    other.load_config(store.config_file_path)
    assert other.get_int(WEB_SECTION, WEB_PORT) == 7000
    # Second close does not write again
    store.config_file_path.unlink()
    store.close()
    assert not store.config_file_path.exists()

def test_close_not_initialized(store, scheme):
    store.set_int(WEB_SECTION, WEB_PORT, 7000)
    store.close()
    assert not (scheme.config / CONFIG_FILE_NAME).exists()

def test_context_manager(store, scheme):
    with store as cm:
        assert cm is store
        assert store.initialize()
        store.set_string(AI_SECTION, AI_MODEL_PATH, "models/other.gguf")
    assert not store.initialized
    assert "ai.model_path" not in (scheme.config / CONFIG_FILE_NAME).read_text()
    assert "model_path = models/other.gguf" in (scheme.config / CONFIG_FILE_NAME).read_text()

def test_validate_defaults(store, caplog):
    store.set_default_configuration()
    with caplog.at_level(logging.ERROR):
        assert store.validate_config()
    assert caplog.messages == []

def test_validate_missing_sections(store, caplog):
    for section in REQUIRED_SECTIONS:
        if section != AI_SECTION:
            store.set_string(section, "key", "value")
    with caplog.at_level(logging.ERROR):
        assert not store.validate_config()
    assert caplog.messages == ["Missing required config section: ai"]

def test_validate_port(store, caplog):
    store.set_default_configuration()
    for port in (1, 65535):
        store.set_int(WEB_SECTION, WEB_PORT, port)
        assert store.validate_config()
    with caplog.at_level(logging.ERROR):
        for port in (0, 70000, -1):
            store.set_int(WEB_SECTION, WEB_PORT, port)
            assert not store.validate_config()
    assert caplog.messages == ["Invalid web port: 0", "Invalid web port: 70000", "Invalid web port: -1"]
    # Unparsable port falls back to default value
    store.set_string(WEB_SECTION, WEB_PORT, "http")
    assert store.validate_config()

def test_validate_confidence(store, caplog):
    store.set_default_configuration()
    for value in (0.0, 1.0):
        store.set_double(OCR_SECTION, OCR_CONFIDENCE_THRESHOLD, value)
        assert store.validate_config()
    with caplog.at_level(logging.ERROR):
        store.set_double(OCR_SECTION, OCR_CONFIDENCE_THRESHOLD, 1.5)
        assert not store.validate_config()
        store.set_double(OCR_SECTION, OCR_CONFIDENCE_THRESHOLD, -0.1)
        assert not store.validate_config()
    assert caplog.messages == ["Invalid OCR confidence threshold: 1.5",
                               "Invalid OCR confidence threshold: -0.1"]

def test_validate_reports_all(store, caplog):
    store.set_int(WEB_SECTION, WEB_PORT, 0)
    with caplog.at_level(logging.ERROR):
        assert not store.validate_config()
    assert len(caplog.messages) == 6
    assert caplog.messages[-1] == "Invalid web port: 0"

def test_validate_empty_section_is_present(store):
    store.set_default_configuration()
    for key in store.get_section_keys(AI_SECTION):
        store.remove_key(AI_SECTION, key)
    assert store.get_section_keys(AI_SECTION) == []
    assert store.validate_config()

# SPDX-FileCopyrightText: 2026-present The Work Assistant Project
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: work-assistant-core
# FILE:           tests/config/conftest.py
# DESCRIPTION:    Shared fixtures for configuration store tests
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

import pytest

from work_assistant.core.config import ConfigStore
from work_assistant.core.dirs import DirectoryScheme

SAMPLE_CONF = """# Work Assistant Configuration File
; alternative comment

[web]
port = 9090
host = 0.0.0.0

  [ocr]
\tlanguage = deu\t
confidence_threshold=0.5
"""


@pytest.fixture
def scheme(tmp_path) -> DirectoryScheme:
    """Returns directory scheme with HOME in temporary directory.
    """
    return DirectoryScheme(base=tmp_path)

@pytest.fixture
def store(scheme) -> ConfigStore:
    """Returns empty (not initialized) configuration store.
    """
    return ConfigStore(scheme)

@pytest.fixture
def conf_file(tmp_path):
    """Returns path to sample configuration file.
    """
    result = tmp_path / "sample.conf"
    result.write_text(SAMPLE_CONF)
    return result

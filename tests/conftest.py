"""Pytest bootstrap shared by all test modules.

Puts the repository root on ``sys.path`` so ``import rmtk`` resolves to the
local package, and points the config lookup at a per-test temporary file so
a developer's real ``config.json`` never leaks into results.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def isolated_config_path(tmp_path, monkeypatch):
    from rmtk import config

    config_path = tmp_path / "rmtk-config" / "config.json"
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    return config_path

"""
Shared fixtures: every test runs against default config, whatever the
developer's own config file or environment says.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from jsonskel import config as config_module

FIXTURES = Path(__file__).parent / "fixtures"

# 2024-03-05 14:07:09.123456 at UTC+02:00
FROZEN = datetime(2024, 3, 5, 14, 7, 9, 123456, tzinfo=timezone(timedelta(hours=2)))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for key in (
        "JSONSKEL_INDENT",
        "JSONSKEL_EXTERNAL_PLACEHOLDER",
        "JSONSKEL_RECURSION_PLACEHOLDER",
        "JSONSKEL_MAX_DEPTH",
        "JSONSKEL_MARKER",
        "JSONSKEL_CLIPBOARD_COMMAND",
    ):
        monkeypatch.delenv(key, raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def frozen_now():
    return FROZEN

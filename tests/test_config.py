# pagebind — attribute-directive templating for static pages
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Tests for pagebind.config."""

from datetime import timedelta, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from pagebind.config import RenderConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "PAGEBIND_BASE_URL",
        "PAGEBIND_TRAILING_SLASH",
        "PAGEBIND_TIMEZONE",
        "PAGEBIND_LAYOUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = RenderConfig.from_env()
    assert config == RenderConfig()
    assert config.base_url == "/"
    assert config.trailing_slash is True
    assert config.timezone is None


def test_environment_fallback(monkeypatch, tmp_path):
    monkeypatch.setenv("PAGEBIND_BASE_URL", "https://example.org/")
    monkeypatch.setenv("PAGEBIND_TRAILING_SLASH", "false")
    monkeypatch.setenv("PAGEBIND_TIMEZONE", "UTC")
    monkeypatch.setenv("PAGEBIND_LAYOUT_DIR", str(tmp_path))

    config = RenderConfig.from_env()
    assert config.base_url == "https://example.org/"
    assert config.trailing_slash is False
    assert config.timezone == ZoneInfo("UTC")
    assert config.user_layout_dir == Path(tmp_path)


def test_explicit_values_win(monkeypatch):
    monkeypatch.setenv("PAGEBIND_BASE_URL", "https://example.org/")
    monkeypatch.setenv("PAGEBIND_TRAILING_SLASH", "1")

    tz = timezone(timedelta(hours=2))
    config = RenderConfig.from_env(base_url="/docs", trailing_slash=False, timezone=tz)
    assert config.base_url == "/docs"
    assert config.trailing_slash is False
    assert config.timezone is tz


def test_empty_flag_uses_default(monkeypatch):
    monkeypatch.setenv("PAGEBIND_TRAILING_SLASH", "")
    assert RenderConfig.from_env().trailing_slash is True


def test_default_layout_dir():
    config = RenderConfig.from_env(default_layout_dir="~/layouts")
    assert config.default_layout_dir == Path("~/layouts").expanduser()

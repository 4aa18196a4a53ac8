"""Test configuration and shared fixtures."""

import pytest

from fieldcheck.config import get_settings
from fieldcheck.validators import UploadRegistry


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so monkeypatched FIELDCHECK_* variables apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def counting_rule():
    """A rule that passes non-negative ints and records every value it sees."""
    seen = []

    def check(value, *params):
        seen.append(value)
        return value >= 0

    check.seen = seen
    return check


@pytest.fixture
def png_bytes():
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def uploads(tmp_path, png_bytes):
    """Upload registry with a PNG avatar, a text resume, and a vanished file."""
    avatar = tmp_path / "upload1234"
    avatar.write_bytes(png_bytes)
    resume = tmp_path / "upload5678"
    resume.write_text("plain text resume\n", encoding="utf-8")

    return UploadRegistry(
        {
            "avatar": {"temporary_path": avatar, "original_filename": "me.png", "size_bytes": 1},
            "resume": {"temporary_path": resume, "original_filename": "resume.txt"},
            "gone": {"temporary_path": tmp_path / "missing", "original_filename": "gone.pdf"},
        }
    )

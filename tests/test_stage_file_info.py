import os
from datetime import datetime, timezone

import pytest

from usdviewkit.stage_file_info import (
    NO_FILE_SELECTED,
    describe_file,
    display_path,
    is_usd_extension,
)


def test_display_path_short_unchanged():
    assert display_path("/tmp/scene.usda") == "/tmp/scene.usda"


def test_display_path_exactly_fifty_unchanged():
    path = "a" * 50
    assert display_path(path) == path


def test_display_path_long_is_truncated():
    path = "/projects/" + "x" * 60 + "/scene.usd"
    shown = display_path(path)
    assert shown.startswith("...")
    assert len(shown) == 50
    assert shown[3:] == path[-47:]


def test_display_path_none():
    assert display_path(None) == NO_FILE_SELECTED


@pytest.mark.parametrize(
    "path, expected",
    [
        ("scene.usd", True),
        ("scene.USDA", True),
        ("dir/scene.usdc", True),
        ("pack.usdz", True),
        ("notes.txt", False),
        ("README", False),
    ],
)
def test_is_usd_extension(path, expected):
    assert is_usd_extension(path) is expected


def test_describe_file(tmp_path):
    content = b"#usda 1.0\n"
    file = tmp_path / "shot.usda"
    file.write_bytes(content)
    info = describe_file(str(file))
    assert info.size == len(content)
    assert info.extension == "usda"
    assert info.format_label == ".usda"
    assert info.is_valid_format is True
    assert info.modified.tzinfo is timezone.utc


def test_describe_file_modified_time(tmp_path):
    file = tmp_path / "timed.usd"
    file.write_text("x")
    os.utime(file, (1_000_000_000, 1_000_000_000))
    info = describe_file(str(file))
    assert info.modified == datetime.fromtimestamp(1_000_000_000, tz=timezone.utc)
    assert info.modified_text.endswith(" UTC")
    parsed = datetime.strptime(info.modified_text, "%Y-%m-%d %H:%M:%S UTC")
    assert parsed.replace(tzinfo=timezone.utc) == info.modified


def test_describe_file_unrecognised_format(tmp_path):
    file = tmp_path / "mesh.obj"
    file.write_text("v 0 0 0")
    info = describe_file(str(file))
    assert info.is_valid_format is False
    assert info.extension == "obj"


def test_describe_file_without_extension(tmp_path):
    file = tmp_path / "stage"
    file.write_text("data")
    info = describe_file(str(file))
    assert info.extension is None
    assert info.format_label is None
    assert info.is_valid_format is False


def test_describe_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        describe_file(str(tmp_path / "missing.usd"))


def test_describe_empty_path():
    with pytest.raises(ValueError):
        describe_file("")
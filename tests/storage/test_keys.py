"""Tests for object key naming."""

import pytest

from storage3d.storage.keys import generate_id, make_key, make_page_key, sanitize_file_name


def test_make_key_layout():
    assert make_key("3d-models", "abc123", "robot.glb") == "3d-models/abc123-robot.glb"


def test_make_key_keeps_file_name_as_given():
    assert make_key("3d-models", "abc1234567", "模型 v2.glb") == "3d-models/abc1234567-模型 v2.glb"


def test_make_key_is_pure():
    assert make_key("3d-models/", "abc", "m.glb") == make_key("3d-models", "abc", "m.glb")


def test_make_page_key():
    assert make_page_key("abc123") == "3d-pages/abc123.html"


@pytest.mark.parametrize(
    "file_name,expected",
    [
        ("model.glb", "model.glb"),
        ("dir/sub/model.glb", "model.glb"),
        ("C:\\models\\model.glb", "model.glb"),
        ("my model (1).glb", "my model (1).glb"),
        ("模型.glb", "模型.glb"),
        ("../", "model"),
    ],
)
def test_sanitize_file_name(file_name, expected):
    assert sanitize_file_name(file_name) == expected


def test_generate_id_size():
    assert len(generate_id(21)) == 21


def test_generate_id_rejects_non_positive_size():
    with pytest.raises(ValueError):
        generate_id(0)

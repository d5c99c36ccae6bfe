import pytest

from config import (
    CENTER_INDICES,
    COLOR_INIT_STATE,
    COLOR_TO_FACE,
    FACE_ORDER,
    FACE_TO_COLOR,
    FACES_INIT_STATE,
    POINTS_PER_CAMERA,
    CameraConfig,
    load_camera_config,
)


def test_color_face_bijection():
    assert sorted(COLOR_TO_FACE.values()) == sorted(FACE_ORDER)
    assert all(COLOR_TO_FACE[FACE_TO_COLOR[f]] == f for f in FACE_ORDER)
    assert ''.join(FACE_TO_COLOR[c] for c in FACES_INIT_STATE) == COLOR_INIT_STATE


def test_centers_and_point_count():
    assert all(FACES_INIT_STATE[idx] == face for face, idx in CENTER_INDICES.items())
    assert POINTS_PER_CAMERA == 24


def test_missing_config_file_gives_defaults(tmp_path):
    assert load_camera_config(tmp_path / "nope.txt") == CameraConfig()


def test_config_file_overrides(tmp_path):
    path = tmp_path / "config.txt"
    path.write_text(
        "# dual camera rig\n"
        "CAMERA_1_INDEX=0\n"
        "CAMERA_2_INDEX = 2\n"
        "\n"
        "CAMERA_FPS=60\n"
        "SOMETHING_ELSE=abc\n",
        encoding="utf-8",
    )
    cfg = load_camera_config(path)
    assert cfg.camera_1_index == 0
    assert cfg.camera_2_index == 2
    assert cfg.camera_fps == 60
    assert cfg.camera_width == 320


def test_config_bad_integer(tmp_path):
    path = tmp_path / "config.txt"
    path.write_text("CAMERA_WIDTH=wide\n", encoding="utf-8")
    with pytest.raises(ValueError, match="CAMERA_WIDTH"):
        load_camera_config(path)

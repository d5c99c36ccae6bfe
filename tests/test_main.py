import cv2
import pytest

import main
from assembler import disassemble
from config import COLOR_INIT_STATE
from cubie import apply_moves
from helpers import SOLVED, grid_points, paint_frame, write_positions
from orientations import orientation_for


@pytest.fixture
def calibration(tmp_path):
    pts = grid_points()
    return [
        "--positions1", str(write_positions(tmp_path / "pos_1.txt", pts)),
        "--positions2", str(write_positions(tmp_path / "pos_2.txt", pts)),
        "--colors", str(tmp_path / "range.txt"),
        "--config", str(tmp_path / "config.txt"),
    ]


def _write_images(tmp_path, labels1, labels2):
    pts = grid_points()
    img1, img2 = tmp_path / "cam1.png", tmp_path / "cam2.png"
    cv2.imwrite(str(img1), paint_frame(labels1, pts))
    cv2.imwrite(str(img2), paint_frame(labels2, pts))
    return str(img1), str(img2)


def test_validate_command(capsys):
    assert main.main(["validate", SOLVED]) == 0
    assert "U:9 R:9 F:9 D:9 L:9 B:9 N:0" in capsys.readouterr().out
    assert main.main(["validate", SOLVED[:53]]) == 1
    assert main.main(["validate", "--color-string", COLOR_INIT_STATE]) == 0


def test_images_command_solved_cube(tmp_path, calibration, solved_labels, capsys):
    images = _write_images(tmp_path, *solved_labels)
    assert main.main(calibration + ["images", *images]) == 0
    out = capsys.readouterr().out
    assert "Orientation (camera 1 | camera 2): FRU|BLD" in out
    assert "(already solved)" in out


def test_images_command_rotated_cube(tmp_path, calibration, capsys):
    # cube put down upside down: the up slot shows the down face
    state = apply_moves(SOLVED, "R U2 F' D L2 B")
    orientation = orientation_for('D', 'F')
    images = _write_images(tmp_path, *disassemble(state, orientation))
    assert main.main(calibration + ["images", *images]) == 0
    out = capsys.readouterr().out
    assert f"Orientation (camera 1 | camera 2): {orientation}" in out
    assert f"Face format:  {state}" in out


def test_images_command_unreadable_cube(tmp_path, calibration, solved_labels, capsys):
    labels1 = list(solved_labels[0])
    labels1[0] = 'Y'
    images = _write_images(tmp_path, labels1, solved_labels[1])
    assert main.main(calibration + ["images", *images]) == 1
    assert "no valid orientation among 24" in capsys.readouterr().out


def test_missing_image(tmp_path, calibration):
    assert main.main(calibration + ["images", str(tmp_path / "a.png"), str(tmp_path / "b.png")]) == 2


def test_missing_positions(tmp_path):
    args = ["--positions1", str(tmp_path / "nope.txt"), "images", "a.png", "b.png"]
    assert main.main(args) == 2


def test_undecodable_colors_file(tmp_path, calibration, solved_labels):
    (tmp_path / "range.txt").write_bytes(b"R 170 8 80 255 80 255\n\xff\xfe junk\n")
    images = _write_images(tmp_path, *solved_labels)
    assert main.main(calibration + ["images", *images]) == 0

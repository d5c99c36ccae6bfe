import pytest

from app_types import CalibratedPoint
from helpers import grid_points, write_positions
from positions import PositionFileError, load_positions, save_positions


def test_load_positions(tmp_path):
    pts = grid_points()
    loaded = load_positions(write_positions(tmp_path / "pos_1.txt", pts))
    assert loaded == pts
    assert isinstance(loaded, tuple)


def test_blank_lines_are_ignored(tmp_path):
    path = tmp_path / "pos_1.txt"
    path.write_text("\n".join(f"{i} {i}\n" for i in range(24)), encoding="utf-8")
    assert len(load_positions(path)) == 24


def test_missing_file(tmp_path):
    with pytest.raises(PositionFileError, match="not found"):
        load_positions(tmp_path / "pos_1.txt")


@pytest.mark.parametrize("count", [23, 25])
def test_wrong_point_count(tmp_path, count):
    path = write_positions(tmp_path / "pos.txt", grid_points(count))
    with pytest.raises(PositionFileError, match=f"found {count}"):
        load_positions(path)


def test_malformed_line_names_file_and_line(tmp_path):
    path = tmp_path / "pos.txt"
    path.write_text("1 2\n3 4 5\n", encoding="utf-8")
    with pytest.raises(PositionFileError, match=r"pos.txt:2"):
        load_positions(path)


def test_non_integer_coordinates(tmp_path):
    path = tmp_path / "pos.txt"
    path.write_text("1.5 2\n", encoding="utf-8")
    with pytest.raises(PositionFileError, match="integers"):
        load_positions(path)


def test_position_error_is_value_error():
    assert issubclass(PositionFileError, ValueError)


def test_save_positions(tmp_path):
    pts = [CalibratedPoint(1, 2), CalibratedPoint(30, 40)]
    path = tmp_path / "pos.txt"
    save_positions(path, pts)
    assert path.read_text(encoding="utf-8") == "1 2\n30 40\n"
    assert load_positions(path, expected=2) == tuple(pts)

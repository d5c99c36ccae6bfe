from typing import List, Tuple

import pytest

from app_types import CalibratedPoint
from color_lut import ColorClassifier
from helpers import grid_points


@pytest.fixture(scope="session")
def classifier() -> ColorClassifier:
    return ColorClassifier()


@pytest.fixture
def points() -> Tuple[CalibratedPoint, ...]:
    return grid_points()


@pytest.fixture
def solved_labels() -> Tuple[List[str], List[str]]:
    # camera 1: front, right, up ; camera 2: back, left, down
    return ['R'] * 8 + ['G'] * 8 + ['W'] * 8, ['O'] * 8 + ['B'] * 8 + ['Y'] * 8

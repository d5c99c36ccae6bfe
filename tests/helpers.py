"""Shared builders for the test suite (synthetic frames, fake cameras)."""

from pathlib import Path
from typing import Sequence, Tuple

import numpy as np

from app_types import CalibratedPoint
from config import FACES_INIT_STATE

SOLVED = FACES_INIT_STATE

# Pure BGR colors and the label the default thresholds give them.
BGR = {
    'W': (255, 255, 255),
    'R': (0, 0, 255),
    'O': (0, 128, 255),
    'Y': (0, 255, 255),
    'G': (0, 255, 0),
    'B': (255, 0, 0),
}


def grid_points(n: int = 24, step: int = 12, origin: Tuple[int, int] = (8, 8)) -> Tuple[CalibratedPoint, ...]:
    """n points on an 8-wide grid, one row per physical slot."""
    return tuple(CalibratedPoint(origin[0] + (i % 8) * step, origin[1] + (i // 8) * step)
                 for i in range(n))


def paint_frame(labels: Sequence[str], points: Sequence[CalibratedPoint],
                shape: Tuple[int, int] = (120, 160)) -> np.ndarray:
    """Black BGR frame with a 5x5 patch of each label's color around each point."""
    frame = np.zeros(shape + (3,), dtype=np.uint8)
    for label, p in zip(labels, points):
        frame[max(p.y - 2, 0):p.y + 3, max(p.x - 2, 0):p.x + 3] = BGR[label]
    return frame


class FakeCamera:
    def __init__(self, frame):
        self.frame = frame
        self.calls = 0

    def capture(self):
        self.calls += 1
        return None if self.frame is None else self.frame.copy()


def write_positions(path: Path, pts: Sequence[CalibratedPoint]) -> Path:
    path.write_text("".join(f"{p.x} {p.y}\n" for p in pts), encoding="utf-8")
    return path

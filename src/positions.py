"""
positions.py — position calibration files
=========================================

Each camera has a plain-text file with the pixel coordinates of the 24
stickers it samples: one `x y` pair per line, 8 stickers per face (centers are
never sampled) for the 3 faces the camera sees, in slot order::

    Corner-TL, Edge-T, Corner-TR, Edge-L, Edge-R, Corner-BL, Edge-B, Corner-BR

The files are written by the click-to-calibrate tool. Because that tool appends,
a file holding more than 24 points is as suspicious as a short one: both are
rejected instead of silently truncated.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

import logging
from pathlib import Path
from typing import Iterable, Tuple

from app_types import CalibratedPoint
from config import POINTS_PER_CAMERA

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

SLOT_POSITION_NAMES = (
    "Corner-TL", "Edge-T", "Corner-TR", "Edge-L", "Edge-R", "Corner-BL", "Edge-B", "Corner-BR",
)


class PositionFileError(ValueError):
    """A position calibration file is missing, short, long or malformed."""


def load_positions(path: Path, expected: int = POINTS_PER_CAMERA) -> Tuple[CalibratedPoint, ...]:
    path = Path(path)
    if not path.exists():
        raise PositionFileError(f"{path}: file not found, run position calibration first")

    points = []
    for lineno, line in enumerate(path.read_text(encoding='utf-8').splitlines(), start=1):
        if not line.strip():
            continue
        parts = line.split()
        if len(parts) != 2:
            raise PositionFileError(f"{path}:{lineno}: expected 'x y', got {line!r}")
        try:
            x, y = int(parts[0]), int(parts[1])
        except ValueError:
            raise PositionFileError(f"{path}:{lineno}: coordinates must be integers, got {line!r}") from None
        points.append(CalibratedPoint(x, y))

    if len(points) != expected:
        raise PositionFileError(f"{path}: expected {expected} points, found {len(points)}")

    logger.info("Loaded %d points from %s", len(points), path)
    return tuple(points)


def save_positions(path: Path, points: Iterable[CalibratedPoint]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{p.x} {p.y}\n" for p in points), encoding='utf-8')

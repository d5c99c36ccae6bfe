"""config.py — project configuration
------------------------------------

This file centralizes default runtime constants for the dual-camera cube
detector. Keep in mind these are *defaults* for development; camera settings
can be overridden at runtime from a small `config.txt` (see
`load_camera_config`) and color thresholds from a calibration file
(see `color_lut.load_color_rules`).

Notes / warnings
- Paths are constructed using `Path.cwd()` which is evaluated at import time.
  Calibration files are expected next to where the program is launched; pass
  explicit paths on the command line otherwise.
- The default HSV thresholds are tuned for PS3-Eye class sensors under indoor
  lighting. They are a starting point, not ground truth: run a color
  calibration when the capture conditions change.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# ---------------- Rubik cube configurations ----------------

# 54-character flattened strings describing the solved sticker layout in
# kociemba order (U, R, F, D, L, B).
FACES_INIT_STATE: str = "UUUUUUUUURRRRRRRRRFFFFFFFFFDDDDDDDDDLLLLLLLLLBBBBBBBBB"
COLOR_INIT_STATE: str = "WWWWWWWWWGGGGGGGGGRRRRRRRRRYYYYYYYYYBBBBBBBBBOOOOOOOOO"


# CENTER_INDICES maps face letter -> index of that face's center in the
# flattened 54-sticker array.
CENTER_INDICES: Dict[str, int] = {'U': 4, 'R': 13, 'F': 22, 'D': 31, 'L': 40, 'B': 49}

# Local (0..8) indices of the sampled stickers of a face. The center is never
# sampled: it is trusted to be the color of the face it belongs to.
SAMPLED_LOCAL_INDICES: Tuple[int, ...] = (0, 1, 2, 3, 5, 6, 7, 8)
STICKERS_PER_SLOT: int = len(SAMPLED_LOCAL_INDICES)
SLOTS_PER_CAMERA: int = 3
POINTS_PER_CAMERA: int = STICKERS_PER_SLOT * SLOTS_PER_CAMERA  # 24

# Canonical color and face orderings
FACE_ORDER: List[str] = ['U', 'R', 'F', 'D', 'L', 'B']
COLOR_ORDER: List[str] = ['W', 'R', 'O', 'Y', 'G', 'B']

# Label emitted for anything that could not be resolved (out-of-frame point,
# empty frame, pixel outside every HSV range). Used for colors and faces alike.
UNKNOWN: str = 'N'

# Color <-> face bijection. White up, red front, green right (standard scheme
# as the cube sits in front of camera 1).
COLOR_TO_FACE: Dict[str, str] = {'W': 'U', 'G': 'R', 'R': 'F', 'Y': 'D', 'B': 'L', 'O': 'B'}
FACE_TO_COLOR: Dict[str, str] = {v: k for k, v in COLOR_TO_FACE.items()}

COLOR_NAMES: Dict[str, str] = {
    'W': 'White', 'R': 'Red', 'O': 'Orange', 'Y': 'Yellow', 'G': 'Green', 'B': 'Blue', UNKNOWN: 'Unknown',
}

# Physical slots seen by each camera, in the order the position calibration
# files list them (8 points per slot).
CAMERA_1_SLOTS: Tuple[str, str, str] = ('F', 'R', 'U')   # front, right, up
CAMERA_2_SLOTS: Tuple[str, str, str] = ('B', 'L', 'D')   # back, left, down


# ---------------- Color thresholds ----------------
# Default HSV ranges as (color, h_min, h_max, s_min, s_max, v_min, v_max),
# OpenCV scale (H 0..179, S/V 0..255). Listed by priority: the first range
# that contains a pixel wins. Red wraps around hue 0 (h_min > h_max).
DEFAULT_HSV_RANGES: List[Tuple[str, int, int, int, int, int, int]] = [
    ('W', 0, 179, 0, 50, 150, 255),
    ('R', 172, 8, 80, 255, 80, 255),
    ('O', 9, 20, 100, 255, 100, 255),
    ('Y', 21, 35, 80, 255, 120, 255),
    ('G', 45, 75, 60, 255, 60, 255),
    ('B', 100, 125, 80, 255, 80, 255),
]

HUE_LEVELS: int = 180
SAT_LEVELS: int = 256
VAL_LEVELS: int = 256


# ---------------- Detection ----------------
# Whole capture+classify+resolve cycles attempted before giving up.
MAX_DETECTION_ATTEMPTS: int = 3
NO_ORIENTATION_MESSAGE: str = "no valid orientation among 24"


# ---------------- Capture ----------------
# PS3 Eye cameras run 320x240 at very high frame rates; the driver may ignore
# any of these values.
CAMERA_WARMUP_FRAMES: int = 5
CAMERA_WARMUP_DELAY: float = 0.01


@dataclass
class CameraConfig:
    camera_1_index: int = 4
    camera_2_index: int = 5
    camera_width: int = 320
    camera_height: int = 240
    camera_fps: int = 187
    exposure: int = 15
    gain: int = 10
    brightness: int = 15
    contrast: int = 9
    saturation: int = 60


def load_camera_config(path: Optional[Path] = None) -> CameraConfig:
    """
    Read a `KEY=VALUE` camera configuration file (e.g. `CAMERA_1_INDEX=4`).

    Empty lines and lines starting with '#' are skipped, unknown keys are
    ignored. A missing file yields the defaults. A value that is not an integer
    raises ValueError naming the key.
    """
    cfg = CameraConfig()
    path = Path(path) if path else CONFIG_PATH
    if not path.exists():
        logger.warning("Could not open config file %s. Using default values.", path)
        return cfg

    known = {f.name.upper(): f.name for f in fields(CameraConfig)}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, value = (part.strip() for part in line.split('=', 1))
        attr = known.get(key.upper())
        if attr is None:
            logger.debug("Ignoring unknown config key %r", key)
            continue
        try:
            setattr(cfg, attr, int(value))
        except ValueError as e:
            raise ValueError(f"Invalid integer for {key}: {value!r}") from e

    logger.info("Configuration loaded from %s", path)
    logger.info("  Camera 1 index: %d, camera 2 index: %d, resolution: %dx%d",
                cfg.camera_1_index, cfg.camera_2_index, cfg.camera_width, cfg.camera_height)
    return cfg


# ---------------- Filesystem paths ----------------
# ROOT is the current working directory at import time.
ROOT = Path.cwd()
CONFIG_PATH: Path = ROOT / "config.txt"
POSITIONS_PATH_1: Path = ROOT / "pos_1.txt"
POSITIONS_PATH_2: Path = ROOT / "pos_2.txt"
COLOR_RANGES_PATH: Path = ROOT / "range.txt"
SNAPSHOTS_DIR: Path = ROOT / "snapshots"

"""
color_lut.py — HSV lookup-table color classifier
================================================

Every sampled pixel is classified by a single table lookup: a dense
`(180, 256, 256)` uint8 array indexed by OpenCV HSV values holds the ASCII code
of the color letter (`W R O Y G B`, or `N` when no range matches). The table
costs ~12 MB and is built once per session, which keeps classification of both
camera frames trivially cheap.

## Building the table

1. The hardcoded defaults (`config.DEFAULT_HSV_RANGES`) are laid down first.
   They are listed by priority, so they are painted in reverse order and the
   first listed range wins where two overlap.
2. Calibrated ranges (if any) are painted on top, in file order. A later rule
   overrides an earlier one on the cells they share.

Red is special: its hue range may straddle 0/179. A red rule with
`h_min > h_max` means `h >= h_min or h <= h_max`. For any other color such a
rule selects no hue at all.

## Calibration file format

One rule per line, as written by the HSV trackbar calibration::

    W 0 179 0 50 150 255
    R 170 8 80 255 80 255

`<color> <h_min> <h_max> <s_min> <s_max> <v_min> <v_max>`. Lines that do not
match this shape are ignored. A missing file means "use the defaults".

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import numpy as np

from app_types import ColorRule
from config import (
    COLOR_ORDER,
    DEFAULT_HSV_RANGES,
    HUE_LEVELS,
    SAT_LEVELS,
    UNKNOWN,
    VAL_LEVELS,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_RULES: List[ColorRule] = [ColorRule(*r) for r in DEFAULT_HSV_RANGES]


def _clip(value: int, levels: int) -> int:
    return max(0, min(levels - 1, int(value)))


def hue_mask(rule: ColorRule) -> np.ndarray:
    """Boolean mask over the 180 hue buckets selected by `rule`."""
    h = np.arange(HUE_LEVELS)
    h_min = _clip(rule.h_min, HUE_LEVELS)
    h_max = _clip(rule.h_max, HUE_LEVELS)
    if rule.wraps:
        return (h >= h_min) | (h <= h_max)
    return (h >= h_min) & (h <= h_max)


def paint_rule(lut: np.ndarray, rule: ColorRule) -> None:
    """Overwrite every cell of `lut` covered by `rule` with the rule's color."""
    s0, s1 = _clip(rule.s_min, SAT_LEVELS), _clip(rule.s_max, SAT_LEVELS)
    v0, v1 = _clip(rule.v_min, VAL_LEVELS), _clip(rule.v_max, VAL_LEVELS)
    hues = hue_mask(rule)
    if s1 < s0 or v1 < v0 or not hues.any():
        logger.debug("Rule %s covers no cell", rule.to_line())
        return
    lut[hues, s0:s1 + 1, v0:v1 + 1] = ord(rule.color)


def build_lut(rules: Optional[Sequence[ColorRule]] = None) -> np.ndarray:
    lut = np.full((HUE_LEVELS, SAT_LEVELS, VAL_LEVELS), ord(UNKNOWN), dtype=np.uint8)
    for rule in reversed(DEFAULT_RULES):
        paint_rule(lut, rule)
    for rule in rules or ():
        paint_rule(lut, rule)
    lut.setflags(write=False)
    return lut


class ColorClassifier:
    """
    Map an HSV sample to a color letter through a prebuilt lookup table.

    The table is read-only after construction, so one classifier can be shared
    by both capture threads without locking. Rebuild (new instance) only
    between detection sessions.
    """

    def __init__(self, rules: Optional[Sequence[ColorRule]] = None):
        self.rules: List[ColorRule] = list(rules or [])
        self._lut = build_lut(self.rules)
        if self.rules:
            logger.info("Color LUT built from %d calibrated ranges", len(self.rules))
        else:
            logger.info("Color LUT built from default thresholds")

    @classmethod
    def from_file(cls, path: Optional[Path]) -> "ColorClassifier":
        return cls(load_color_rules(path) if path else None)

    @property
    def lut(self) -> np.ndarray:
        return self._lut

    def classify(self, h: int, s: int, v: int) -> str:
        h, s, v = int(h), int(s), int(v)
        if not (0 <= h < HUE_LEVELS and 0 <= s < SAT_LEVELS and 0 <= v < VAL_LEVELS):
            raise ValueError(f"HSV value out of range: ({h}, {s}, {v})")
        return chr(self._lut[h, s, v])

    def classify_many(self, hsv: np.ndarray) -> np.ndarray:
        """
        Vectorized lookup. `hsv` is any (..., 3) uint8 array; returns an array
        of single-character strings with the leading shape.
        """
        hsv = np.asarray(hsv)
        codes = self._lut[hsv[..., 0], hsv[..., 1], hsv[..., 2]]
        return codes.view('S1').astype(str)


# ---------- Calibration file codec ----------

def parse_rule_line(line: str) -> Optional[ColorRule]:
    parts = line.split()
    if len(parts) != 7:
        return None
    color = parts[0]
    if len(color) != 1 or color not in COLOR_ORDER:
        return None
    try:
        values = [int(p) for p in parts[1:]]
    except ValueError:
        return None
    return ColorRule(color, *values)


def load_color_rules(path: Optional[Path]) -> Optional[List[ColorRule]]:
    """
    Read calibrated HSV ranges. Returns None when the file does not exist, so
    the caller falls back to the defaults.
    """
    path = Path(path) if path else None
    if path is None or not path.exists():
        logger.warning("Could not open color ranges file: %s. Using default hardcoded LUT.", path)
        return None

    rules: List[ColorRule] = []
    for lineno, line in enumerate(path.read_text(encoding='utf-8', errors='replace').splitlines(), start=1):
        if not line.strip():
            continue
        rule = parse_rule_line(line)
        if rule is None:
            logger.debug("%s:%d ignored: %r", path, lineno, line)
            continue
        rules.append(rule)
    logger.info("Custom color ranges loaded from %s (%d rules)", path, len(rules))
    return rules


def save_color_rules(path: Path, rules: Iterable[ColorRule]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(rule.to_line() + "\n" for rule in rules), encoding='utf-8')
    logger.info("Color ranges saved to %s", path)

"""
sampler.py — per-point color sampling of a camera frame
=======================================================

Turns one BGR frame plus the calibrated sticker coordinates of that camera into
one color letter per coordinate. The frame is converted to HSV once, then each
point costs a single pixel read and a LUT lookup.

Degraded input never raises: an empty frame or a point outside the frame
produces `N` (unknown) for the affected stickers and a warning. The orientation
search downstream treats `N` as "cannot validate", so a bad point costs one
detection attempt, not the session.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

import logging
from typing import List, Optional, Sequence

import cv2
import numpy as np

from app_types import CalibratedPoint
from color_lut import ColorClassifier
from config import UNKNOWN
from positions import SLOT_POSITION_NAMES

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def is_empty_frame(frame: Optional[np.ndarray]) -> bool:
    return frame is None or frame.size == 0 or frame.ndim != 3


class FaceletSampler:
    def __init__(self, classifier: ColorClassifier, name: str = "camera"):
        self.classifier = classifier
        self.name = name

    def sample(self, frame: Optional[np.ndarray], points: Sequence[CalibratedPoint]) -> List[str]:
        if is_empty_frame(frame):
            logger.warning("%s: frame is empty, %d stickers marked unknown", self.name, len(points))
            return [UNKNOWN] * len(points)

        hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
        h_img, w_img = hsv.shape[:2]

        labels: List[str] = []
        for i, p in enumerate(points):
            if 0 <= p.x < w_img and 0 <= p.y < h_img:
                h, s, v = hsv[p.y, p.x]
                labels.append(self.classifier.classify(h, s, v))
            else:
                logger.warning("%s: point %d (%d,%d) is out of bounds for frame (%dx%d) [face %d %s]",
                               self.name, i, p.x, p.y, w_img, h_img,
                               i // len(SLOT_POSITION_NAMES) + 1, SLOT_POSITION_NAMES[i % len(SLOT_POSITION_NAMES)])
                labels.append(UNKNOWN)
        return labels

"""
capture.py — camera sources and dual-camera capture
===================================================

Two fixed cameras each see three faces of the cube (camera 1 the
front/right/up corner, camera 2 the back/left/down corner). A detection
attempt grabs one frame from each and samples the 24 calibrated stickers of
each frame.

Threading model
- `DualCameraCapture.capture_and_classify()` runs one job per camera on a
  two-worker `ThreadPoolExecutor` and joins both before returning.
- A job owns its frame and its label list. The only state shared by the two
  jobs is the classifier LUT and the point tuples, both read-only.
- Only `capture()` blocks (device I/O). There is no cancellation: a stalled
  camera stalls the attempt; retry budgets live in `cube_status`.
- `parallel=False` runs the same two jobs one after the other and gives the
  same result, which is handy for benchmarking and debugging.

Camera sources only need `capture() -> frame | None`:
- `OpenCVCamera`: thin wrapper around `cv2.VideoCapture` with warm-up and safe
  release semantics. Settings may be ignored by some drivers.
- `ImageCamera`: serves a still image from disk (offline runs on snapshots).

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from app_types import CalibratedPoint
from color_lut import ColorClassifier
from config import CAMERA_WARMUP_DELAY, CAMERA_WARMUP_FRAMES, CameraConfig
from sampler import FaceletSampler, is_empty_frame

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


# ---------- Camera sources ----------

class OpenCVCamera:
    def __init__(self, index: int, width: int = 320, height: int = 240, fps: int = 187,
                 warmup_frames: int = CAMERA_WARMUP_FRAMES,
                 settings: Optional[Dict[int, float]] = None):
        self.index = index
        self.width = width
        self.height = height
        self.fps = fps
        self.warmup_frames = warmup_frames
        # extra cv2.CAP_PROP_* values (exposure, gain, ...)
        self.settings = dict(settings or {})
        self.cap: Optional[cv2.VideoCapture] = None

    def open(self) -> bool:
        """Open the device (V4L2 backend when available) and warm it up.
        Returns True on success.
        """
        backend = getattr(cv2, "CAP_V4L2", cv2.CAP_ANY)
        cap = cv2.VideoCapture(self.index, backend)
        if not cap.isOpened():
            cap.release()
            cap = cv2.VideoCapture(self.index)
        if not cap.isOpened():
            logger.error("Camera %d could not be opened", self.index)
            return False
        self.cap = cap
        self._configure()
        for _ in range(self.warmup_frames):
            self.cap.read()
            time.sleep(CAMERA_WARMUP_DELAY)
        logger.info("Camera %d initialized successfully", self.index)
        return True

    def _configure(self) -> None:
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.fps)
        for prop, value in self.settings.items():
            self.cap.set(prop, value)
        logger.debug("Camera %d configured to %dx%d",
                     self.index, int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH) or 0),
                     int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT) or 0))

    def optimize_for_dual_camera(self, flush_frames: int = 3) -> None:
        """Minimal buffering so both cameras deliver current frames."""
        if self.cap is None:
            return
        self.cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)
        for _ in range(flush_frames):
            self.cap.read()
        logger.debug("Camera %d optimized for dual operation", self.index)

    def capture(self) -> Optional[np.ndarray]:
        if self.cap is None or not self.cap.isOpened():
            return None
        ret, frame = self.cap.read()
        return frame if ret else None

    def release(self) -> None:
        if self.cap is not None:
            self.cap.release()
        self.cap = None

    @classmethod
    def pair_from_config(cls, cfg: CameraConfig) -> Tuple["OpenCVCamera", "OpenCVCamera"]:
        settings = {
            cv2.CAP_PROP_EXPOSURE: cfg.exposure,
            cv2.CAP_PROP_GAIN: cfg.gain,
            cv2.CAP_PROP_BRIGHTNESS: cfg.brightness,
            cv2.CAP_PROP_CONTRAST: cfg.contrast,
            cv2.CAP_PROP_SATURATION: cfg.saturation,
        }
        return (
            cls(cfg.camera_1_index, cfg.camera_width, cfg.camera_height, cfg.camera_fps, settings=settings),
            cls(cfg.camera_2_index, cfg.camera_width, cfg.camera_height, cfg.camera_fps, settings=settings),
        )


class ImageCamera:
    """A 'camera' that always returns the same still image."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._frame = cv2.imread(str(self.path))
        if self._frame is None:
            logger.error("Could not load image %s", self.path)

    def capture(self) -> Optional[np.ndarray]:
        return None if self._frame is None else self._frame.copy()


# ---------- Dual capture ----------

class DualCameraCapture:
    def __init__(self,
                 camera1,
                 camera2,
                 points1: Sequence[CalibratedPoint],
                 points2: Sequence[CalibratedPoint],
                 classifier: ColorClassifier):
        self.cameras = (camera1, camera2)
        self.points = (tuple(points1), tuple(points2))
        self.samplers = (
            FaceletSampler(classifier, name="camera 1"),
            FaceletSampler(classifier, name="camera 2"),
        )
        self.last_frames: List[Optional[np.ndarray]] = [None, None]

    def _job(self, idx: int) -> List[str]:
        frame = self.cameras[idx].capture()
        if is_empty_frame(frame):
            logger.error("Camera %d frame is empty", idx + 1)
        self.last_frames[idx] = frame
        return self.samplers[idx].sample(frame, self.points[idx])

    def capture_and_classify(self, parallel: bool = True) -> Tuple[List[str], List[str]]:
        t0 = time.perf_counter()
        if parallel:
            with concurrent.futures.ThreadPoolExecutor(max_workers=2, thread_name_prefix="capture") as ex:
                f1 = ex.submit(self._job, 0)
                f2 = ex.submit(self._job, 1)
                labels1, labels2 = f1.result(), f2.result()
        else:
            labels1, labels2 = self._job(0), self._job(1)
        logger.debug("Dual camera capture (%s) took %.4f s",
                     "parallel" if parallel else "sequential", time.perf_counter() - t0)
        return labels1, labels2


def save_snapshots(frames: Sequence[Optional[np.ndarray]], directory: Path) -> List[Path]:
    """Write the given frames as camera<N>_snapshot_<timestamp>.jpg files."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    stamp = int(time.time())
    saved = []
    for i, frame in enumerate(frames, start=1):
        if is_empty_frame(frame):
            logger.warning("Camera %d has no frame to save", i)
            continue
        path = directory / f"camera{i}_snapshot_{stamp}.jpg"
        if cv2.imwrite(str(path), frame):
            saved.append(path)
        else:
            logger.error("Failed writing snapshot %s", path)
    return saved

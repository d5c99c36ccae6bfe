"""
main.py — command line entry point of the dual-camera cube detector
===================================================================

Subcommands:
 - `detect`: open both cameras, run a detection session, print the cube net,
   the sticker counts, the orientation found and the solution.
 - `images IMG1 IMG2`: same pipeline on two still images (one per camera).
 - `validate FACELETS`: print counts and the structural verdict for a string.
 - `benchmark`: time sequential vs. parallel capture+classify.

Calibration files default to the working directory (`pos_1.txt`, `pos_2.txt`,
`range.txt`, `config.txt`) and can be overridden with the common flags.

Exit codes: 0 success, 1 detection/solve failure, 2 bad input files,
3 cameras could not be opened.

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence, Tuple

from app_types import CalibratedPoint, DetectionResult
from assembler import build_net_text, to_face_string
from capture import DualCameraCapture, ImageCamera, OpenCVCamera, save_snapshots
from color_lut import ColorClassifier
from config import (
    COLOR_RANGES_PATH,
    CONFIG_PATH,
    POSITIONS_PATH_1,
    POSITIONS_PATH_2,
    SNAPSHOTS_DIR,
    CameraConfig,
    load_camera_config,
)
from cube_solver import CubeSolver
from cube_status import CubeStatus
from positions import PositionFileError, load_positions
from validator import validate, verify_structure

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_NO_CAMERA = 3

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("main")


def create_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cube-detect",
        description="Dual-camera Rubik's cube state detection",
        allow_abbrev=False,
    )
    p.add_argument("--debug", action="store_true", help="Enable verbose logging.")
    p.add_argument("--positions1", type=Path, default=POSITIONS_PATH_1, help="Camera 1 position file.")
    p.add_argument("--positions2", type=Path, default=POSITIONS_PATH_2, help="Camera 2 position file.")
    p.add_argument("--colors", type=Path, default=COLOR_RANGES_PATH, help="Calibrated HSV ranges file.")
    p.add_argument("--config", type=Path, default=CONFIG_PATH, help="Camera configuration file.")

    sub = p.add_subparsers(dest="command", required=True)

    d = sub.add_parser("detect", help="Detect the cube with both cameras.")
    d.add_argument("--sequential", action="store_true", help="Capture cameras one after the other.")
    d.add_argument("--snapshots", action="store_true", help="Save the frames of the last attempt.")

    i = sub.add_parser("images", help="Detect the cube from two still images.")
    i.add_argument("image1", type=Path, help="Camera 1 image (front/right/up).")
    i.add_argument("image2", type=Path, help="Camera 2 image (back/left/down).")

    v = sub.add_parser("validate", help="Check a 54-character cube string.")
    v.add_argument("facelets", help="Face letters (URFDLB) or color letters with --color-string.")
    v.add_argument("--color-string", action="store_true", help="Input uses color letters (WRGYOB).")

    b = sub.add_parser("benchmark", help="Time sequential vs. parallel capture+classify.")
    b.add_argument("--runs", type=int, default=10, help="Iterations per mode.")
    b.add_argument("--images", nargs=2, type=Path, metavar=("IMG1", "IMG2"),
                   help="Benchmark on still images instead of cameras.")

    return p


# ---------- helpers ----------

def _load_points(args) -> Tuple[Tuple[CalibratedPoint, ...], Tuple[CalibratedPoint, ...]]:
    return load_positions(args.positions1), load_positions(args.positions2)


def _open_cameras(cfg: CameraConfig) -> Optional[Tuple[OpenCVCamera, OpenCVCamera]]:
    cam1, cam2 = OpenCVCamera.pair_from_config(cfg)
    if not cam1.open() or not cam2.open():
        logger.error("Failed to initialize cameras %d and %d", cfg.camera_1_index, cfg.camera_2_index)
        cam1.release()
        cam2.release()
        return None
    cam1.optimize_for_dual_camera()
    cam2.optimize_for_dual_camera()
    return cam1, cam2


def _image_pair(path1: Path, path2: Path) -> Optional[Tuple[ImageCamera, ImageCamera]]:
    img1, img2 = ImageCamera(path1), ImageCamera(path2)
    if img1.capture() is None or img2.capture() is None:
        return None
    return img1, img2


def print_detection(result: DetectionResult) -> None:
    print("\n=== Cube State ===")
    if result.face_str:
        print(build_net_text(result.face_str))
        print(f"\nColor format: {result.color_str}")
        print(f"Face format:  {result.face_str}")
    if result.report is not None:
        print(f"Counts: {result.report.summary()}")
    print(f"Attempts: {result.attempts}")
    if result.orientation is not None:
        print(f"Orientation (camera 1 | camera 2): {result.orientation}")
    if result.has_errors:
        print(f"Detection failed: {result.message}")
    else:
        print(f"Solution: {result.solution_str or '(already solved)'}")


def _run_session(capture: DualCameraCapture, parallel: bool = True) -> DetectionResult:
    status = CubeStatus(capture, CubeSolver(), parallel=parallel)
    t0 = time.perf_counter()
    result = status.detect_status()
    logger.info("Detection time: %.3f s (final state: %s)", time.perf_counter() - t0, status.state)
    print_detection(result)
    return result


# ---------- subcommands ----------

def cmd_detect(args, classifier: ColorClassifier, points) -> int:
    cams = _open_cameras(args.camera_config)
    if cams is None:
        return EXIT_NO_CAMERA
    try:
        capture = DualCameraCapture(cams[0], cams[1], points[0], points[1], classifier)
        result = _run_session(capture, parallel=not args.sequential)
        if args.snapshots:
            for path in save_snapshots(capture.last_frames, SNAPSHOTS_DIR):
                print(f"Snapshot saved: {path}")
    finally:
        cams[0].release()
        cams[1].release()
    return EXIT_FAILURE if result.has_errors else EXIT_OK


def cmd_images(args, classifier: ColorClassifier, points) -> int:
    pair = _image_pair(args.image1, args.image2)
    if pair is None:
        return EXIT_BAD_INPUT
    capture = DualCameraCapture(pair[0], pair[1], points[0], points[1], classifier)
    result = _run_session(capture)
    return EXIT_FAILURE if result.has_errors else EXIT_OK


def cmd_validate(args) -> int:
    facelets = args.facelets.strip()
    if args.color_string:
        facelets = to_face_string(facelets)
    report = validate(facelets)
    print(f"Length: {len(facelets)} (should be 54)")
    print(f"Counts: {report.summary()}")
    ok, message = verify_structure(facelets)
    print(f"Structure: {message}")
    return EXIT_OK if ok else EXIT_FAILURE


def cmd_benchmark(args, classifier: ColorClassifier, points) -> int:
    cams = None
    if args.images:
        sources = _image_pair(*args.images)
        if sources is None:
            return EXIT_BAD_INPUT
    else:
        cams = sources = _open_cameras(args.camera_config)
        if sources is None:
            return EXIT_NO_CAMERA
    try:
        capture = DualCameraCapture(sources[0], sources[1], points[0], points[1], classifier)
        for parallel in (False, True):
            t0 = time.perf_counter()
            for _ in range(args.runs):
                capture.capture_and_classify(parallel=parallel)
            avg = (time.perf_counter() - t0) / max(args.runs, 1)
            print(f"{'parallel' if parallel else 'sequential':<10}: {avg * 1000:.2f} ms per capture")
    finally:
        if cams is not None:
            cams[0].release()
            cams[1].release()
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_arg_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("transitions").setLevel(logging.INFO)
        logger.debug("Debug mode enabled.")

    if args.command == "validate":
        return cmd_validate(args)

    try:
        points = _load_points(args)
        args.camera_config = load_camera_config(args.config)
    except (PositionFileError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_BAD_INPUT
    classifier = ColorClassifier.from_file(args.colors)

    if args.command == "detect":
        return cmd_detect(args, classifier, points)
    if args.command == "images":
        return cmd_images(args, classifier, points)
    return cmd_benchmark(args, classifier, points)


if __name__ == "__main__":
    sys.exit(main())

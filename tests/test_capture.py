import cv2
import numpy as np

from capture import DualCameraCapture, ImageCamera, OpenCVCamera, save_snapshots
from config import CameraConfig
from helpers import FakeCamera, paint_frame


def test_parallel_and_sequential_agree(classifier, points, solved_labels):
    cam1 = FakeCamera(paint_frame(solved_labels[0], points))
    cam2 = FakeCamera(paint_frame(solved_labels[1], points))
    capture = DualCameraCapture(cam1, cam2, points, points, classifier)

    parallel = capture.capture_and_classify(parallel=True)
    sequential = capture.capture_and_classify(parallel=False)

    assert parallel == sequential
    assert parallel == solved_labels
    assert cam1.calls == cam2.calls == 2


def test_missing_frame_gives_unknowns(classifier, points, solved_labels):
    cam1 = FakeCamera(paint_frame(solved_labels[0], points))
    capture = DualCameraCapture(cam1, FakeCamera(None), points, points, classifier)
    labels1, labels2 = capture.capture_and_classify()
    assert labels1 == solved_labels[0]
    assert labels2 == ['N'] * 24
    assert capture.last_frames[1] is None


def test_image_camera(tmp_path, points, solved_labels):
    frame = paint_frame(solved_labels[0], points)
    path = tmp_path / "cam1.png"
    assert cv2.imwrite(str(path), frame)
    cam = ImageCamera(path)
    assert np.array_equal(cam.capture(), frame)
    assert ImageCamera(tmp_path / "missing.png").capture() is None


def test_unopened_opencv_camera_returns_none():
    cam = OpenCVCamera(99)
    assert cam.capture() is None
    cam.optimize_for_dual_camera()
    cam.release()
    assert cam.cap is None


def test_pair_from_config():
    cfg = CameraConfig(camera_1_index=1, camera_2_index=3, camera_width=640, camera_height=480)
    cam1, cam2 = OpenCVCamera.pair_from_config(cfg)
    assert (cam1.index, cam2.index) == (1, 3)
    assert (cam1.width, cam1.height) == (640, 480)
    assert cam1.settings[cv2.CAP_PROP_GAIN] == cfg.gain


def test_save_snapshots(tmp_path, points, solved_labels):
    frame = paint_frame(solved_labels[0], points)
    saved = save_snapshots([frame, None], tmp_path / "snaps")
    assert len(saved) == 1
    assert saved[0].name.startswith("camera1_snapshot_")
    assert saved[0].exists()

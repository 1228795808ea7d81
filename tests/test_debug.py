import cv2
import numpy as np
import pytest

from lipmakeup import debug


@pytest.fixture(autouse=True)
def debug_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(debug, "DEBUG_DIR", str(tmp_path / "debug"))


def test_save_mask_roundtrips():
    mask = np.zeros((8, 8), dtype=np.uint8)
    mask[2:6, 2:6] = 200

    path = debug.save_mask("lip", mask)
    assert path.endswith("lip_mask.png")
    assert np.array_equal(cv2.imread(path, cv2.IMREAD_GRAYSCALE), mask)


def test_save_rgba_writes_bgra():
    img = np.zeros((4, 4, 4), dtype=np.uint8)
    img[...] = (255, 0, 0, 128)

    saved = cv2.imread(debug.save_rgba("final", img), cv2.IMREAD_UNCHANGED)
    assert saved[0, 0].tolist() == [0, 0, 255, 128]


def test_save_overlay_marks_mask_in_green():
    img = np.zeros((4, 4, 4), dtype=np.uint8)
    mask = np.zeros((4, 4), dtype=np.uint8)
    mask[1, 1] = 255

    saved = cv2.imread(debug.save_overlay(img, mask))
    assert saved[1, 1].tolist() == [0, 255, 0]
    assert saved[0, 0].tolist() == [0, 0, 0]


def test_save_roi_rgb():
    roi = np.zeros((3, 3, 3), dtype=np.uint8)
    roi[...] = (10, 20, 30)

    saved = cv2.imread(debug.save_roi("final", roi))
    assert saved[0, 0].tolist() == [30, 20, 10]

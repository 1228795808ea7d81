# lipmakeup/debug.py
import os

import cv2
import numpy as np

DEBUG_DIR = "debug"


def _ensure():
    os.makedirs(DEBUG_DIR, exist_ok=True)


def _to_bgr(img):
    # pipeline images are RGB / RGBA, OpenCV writes BGR / BGRA
    if img.ndim == 3 and img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA)
    if img.ndim == 3 and img.shape[2] == 3:
        return cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
    return img


# -------------------------
# Basic saves
# -------------------------
def save_mask(name, mask):
    _ensure()
    path = f"{DEBUG_DIR}/{name}_mask.png"
    cv2.imwrite(path, mask)
    return path


def save_overlay(img, mask):
    """Mask painted into the green channel over the image."""
    _ensure()
    overlay = img[..., :3].copy()
    overlay[..., 1] = np.maximum(overlay[..., 1], mask)
    path = f"{DEBUG_DIR}/overlay_mask.png"
    cv2.imwrite(path, _to_bgr(overlay))
    return path


def save_roi(name, roi):
    _ensure()
    path = f"{DEBUG_DIR}/{name}_roi.png"
    cv2.imwrite(path, _to_bgr(roi))
    return path


def save_rgba(name, img):
    _ensure()
    path = f"{DEBUG_DIR}/{name}.png"
    cv2.imwrite(path, _to_bgr(img))
    return path

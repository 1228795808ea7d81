import numpy as np
from PIL import Image, ExifTags

from lipmakeup.lip_landmarks import load_landmarks
from lipmakeup.makeup import run_makeup


# =====================================================
# EXIF SAFE IMAGE LOADER
# =====================================================
_EXIF_ROTATION = {3: 180, 6: 270, 8: 90}


def load_image_exif_safe(path):
    """return: RGBA uint8 array, upright according to EXIF Orientation"""
    img_pil = Image.open(path)

    exif = img_pil.getexif()
    orientation_key = None
    for k, v in ExifTags.TAGS.items():
        if v == "Orientation":
            orientation_key = k
            break

    if orientation_key is not None:
        angle = _EXIF_ROTATION.get(exif.get(orientation_key))
        if angle:
            img_pil = img_pil.rotate(angle, expand=True)

    img_pil = img_pil.convert("RGBA")
    return np.array(img_pil)


# =====================================================
# RENDER ONCE
# =====================================================
def render_lips(image_path, landmarks_path, params=None, pad=10):
    # ------------------
    # Load inputs
    # ------------------
    img = load_image_exif_safe(image_path)
    H, W = img.shape[:2]
    mouth = load_landmarks(landmarks_path)

    # ------------------
    # Lipstick
    # ------------------
    result = run_makeup(img, mouth, params=params)

    # ------------------
    # ROI around the mouth
    # ------------------
    left, top, right, bottom = result.bounds
    x0 = max(0, int(np.floor(left)) - pad)
    y0 = max(0, int(np.floor(top)) - pad)
    x1 = min(W - 1, int(np.ceil(right)) + pad)
    y1 = min(H - 1, int(np.ceil(bottom)) + pad)

    return {
        "original": img,
        "final": result.image,
        "mask": result.mask,

        "original_roi": img[y0:y1+1, x0:x1+1],
        "final_roi": result.image[y0:y1+1, x0:x1+1],
        "mask_roi": result.mask[y0:y1+1, x0:x1+1],

        "lip_color": result.lip_color,
        "target": result.target,
    }

import logging
import os

from lipmakeup import debug
from lipmakeup.presets import load_preset, resolve_params
from render_once import render_lips

# =====================================================
# CONFIG (PIPELINE ONLY)
# =====================================================
IMAGE_PATH = "test.jpg"
LANDMARKS_PATH = "test_landmarks.json"
PRESET_PATH = None  # e.g. "presets/cherry.json"

LIP_COLOR_HEX = "#D01020"
DOUBLE_SHIMMER = False
WORKERS = 4

VERBOSE = False

# =====================================================
# PARAMS
# =====================================================
if VERBOSE:
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

if PRESET_PATH and os.path.exists(PRESET_PATH):
    params = load_preset(PRESET_PATH)
else:
    params = resolve_params({
        "LIP_COLOR_HEX": LIP_COLOR_HEX,
        "DOUBLE_SHIMMER": DOUBLE_SHIMMER,
        "WORKERS": WORKERS,
    })

# =====================================================
# RENDER
# =====================================================
results = render_lips(IMAGE_PATH, LANDMARKS_PATH, params)

# =====================================================
# OUTPUT
# =====================================================
debug.save_mask("lip", results["mask"])
debug.save_overlay(results["original"], results["mask"])
debug.save_roi("original", results["original_roi"])
debug.save_roi("final", results["final_roi"])
path = debug.save_rgba("final_face_result", results["final"])

lip_color = results['lip_color']
print(f"original lip color: {lip_color.hex if lip_color else 'n/a (mouth off canvas)'}")
print(f"lipstick color:     {results['target'].hex}")
print(f"DONE - {path}")

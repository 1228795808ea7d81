import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from lipmakeup.color import (
    ColorRGB,
    analyze_region_color,
    apply_lip_color,
    check_pixel_buffer,
    parse_hex_color,
)
from lipmakeup.errors import InvalidRegion
from lipmakeup.lip_landmarks import mouth_bounds, split_mouth
from lipmakeup.presets import resolve_params
from lipmakeup.soft_mask import build_lip_mask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MakeupResult:
    image: np.ndarray
    mask: np.ndarray
    target: ColorRGB
    lip_color: Optional[ColorRGB]
    bounds: Tuple[float, float, float, float]


def run_makeup(
    src: np.ndarray,
    mouth_points,
    color_hex: Optional[str] = None,
    params: Optional[dict] = None
) -> MakeupResult:
    """
    Full lipstick pass on one image.

    src          : RGB / RGBA uint8 image, left untouched
    mouth_points : >= 12 ordered mouth points (68-point convention, outer lip first)
    color_hex    : '#RRGGBB', falls back to params["LIP_COLOR_HEX"]
    params       : preset dict (see lipmakeup.presets.DEFAULT_PARAMS)
    """
    params = resolve_params(params)
    if color_hex is None:
        color_hex = params["LIP_COLOR_HEX"]

    # fail on bad input before touching any pixel
    target = parse_hex_color(color_hex)
    check_pixel_buffer(src)
    upper, lower = split_mouth(mouth_points)

    H, W = src.shape[:2]

    # ------------------
    # Original lip color (advisory)
    # ------------------
    bounds = mouth_bounds(mouth_points)
    left, top, right, bottom = bounds
    x = int(np.floor(left + 0.5))
    y = int(np.floor(top + 0.5))
    w = int(np.floor(right - left + 0.5))
    h = int(np.floor(bottom - top + 0.5))
    if w <= 0 or h <= 0:
        raise InvalidRegion(f"Mouth bounding box has no area ({w}x{h})")

    # mouth partly off the canvas: analyze what is on it, if anything
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(W, x + w), min(H, y + h)
    if x0 < x1 and y0 < y1:
        lip_color = analyze_region_color(src, x0, y0, x1 - x0, y1 - y0)
        logger.debug("original lip color %s", lip_color.hex)
    else:
        lip_color = None
        logger.debug("mouth box (%d, %d, %d, %d) is off the canvas", x, y, w, h)

    # ------------------
    # Mask
    # ------------------
    mask = build_lip_mask(
        upper, lower, W, H,
        max_dist=params["MAX_DIST"],
        falloff=params["MASK_FALLOFF"],
        workers=params["WORKERS"]
    )

    # ------------------
    # Composite
    # ------------------
    out = apply_lip_color(
        src, mask, target,
        opacity=params["LIPSTICK_OPACITY"],
        blend_gamma=params["BLEND_GAMMA"],
        shimmer=params["SHIMMER"],
        double_shimmer=params["DOUBLE_SHIMMER"]
    )

    return MakeupResult(
        image=out,
        mask=mask,
        target=target,
        lip_color=lip_color,
        bounds=bounds,
    )


def apply_makeup(src, mouth_points, color_hex, params=None):
    """src + mouth points + '#RRGGBB' -> new image with lipstick applied."""
    return run_makeup(src, mouth_points, color_hex, params).image

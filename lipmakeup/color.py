import logging
import re
from typing import NamedTuple

import numpy as np

from lipmakeup.errors import DimensionMismatch, InvalidColorFormat, InvalidRegion

logger = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")

LIPSTICK_OPACITY = 0.9
BLEND_GAMMA = 1.2

# adjusted = target * (SHADOW_FLOOR + brightness * SHADOW_RANGE)
SHADOW_FLOOR = 0.7
SHADOW_RANGE = 0.3

SHIMMER_PERIOD = 8.0
SHIMMER_RANGE = 0.15
SHIMMER_BASE = 0.95


class ColorRGB(NamedTuple):
    r: int
    g: int
    b: int

    @property
    def hex(self):
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def parse_hex_color(hex_color):
    """'#RRGGBB' -> ColorRGB"""
    if not isinstance(hex_color, str) or not HEX_COLOR_RE.match(hex_color):
        raise InvalidColorFormat(f"Invalid HEX color {hex_color!r}, expected '#RRGGBB'")
    return ColorRGB(
        int(hex_color[1:3], 16),
        int(hex_color[3:5], 16),
        int(hex_color[5:7], 16),
    )


def check_color(color):
    try:
        raw = [float(c) for c in color]
    except (TypeError, ValueError) as exc:
        raise InvalidColorFormat(f"Invalid color {color!r}") from exc
    if len(raw) != 3:
        raise InvalidColorFormat(f"Expected 3 color components, got {color!r}")
    if not all(0 <= c <= 255 for c in raw):
        raise InvalidColorFormat(f"Color components must be 0~255, got {color!r}")
    if any(c != int(c) for c in raw):
        raise InvalidColorFormat(f"Color components must be integers, got {color!r}")
    r, g, b = (int(c) for c in raw)
    return ColorRGB(r, g, b)


def round_half_up(x):
    return np.floor(np.asarray(x, dtype=np.float64) + 0.5)


def check_pixel_buffer(buf):
    if not isinstance(buf, np.ndarray) or buf.dtype != np.uint8:
        raise ValueError("pixel buffer must be a uint8 numpy array")
    if buf.ndim != 3 or buf.shape[2] not in (3, 4):
        raise ValueError(f"pixel buffer must be (H, W, 3|4), got {buf.shape}")


# -------------------------
# Region color analysis
# -------------------------
def analyze_region_color(buf, x, y, width, height):
    """
    Average R, G, B of a rectangle (alpha ignored).
    The rectangle is clipped to the buffer and only in-bounds pixels are
    averaged; off-buffer pixels are not counted as black.
    Nothing left after clipping -> InvalidRegion.
    """
    check_pixel_buffer(buf)
    if width <= 0 or height <= 0:
        raise InvalidRegion(f"Region size must be positive, got {width}x{height}")

    H, W = buf.shape[:2]
    x0, y0 = max(0, int(x)), max(0, int(y))
    x1, y1 = min(W, int(x) + int(width)), min(H, int(y) + int(height))
    if x0 >= x1 or y0 >= y1:
        raise InvalidRegion(
            f"Region ({x}, {y}, {width}, {height}) lies outside the {W}x{H} buffer"
        )

    region = buf[y0:y1, x0:x1, :3].reshape(-1, 3).astype(np.int64)
    mean = region.sum(axis=0) / len(region)
    r, g, b = (int(v) for v in round_half_up(mean))
    return ColorRGB(r, g, b)


# -------------------------
# Blend
# -------------------------
def shimmer_intensity(xx, yy):
    """Diagonal gloss ripple, range [0.95, 1.10]."""
    s = np.sin((xx + yy) / SHIMMER_PERIOD) * 0.5 + 0.5
    return s * SHIMMER_RANGE + SHIMMER_BASE


def blend_lip_color(src_rgb, alpha, target, opacity=LIPSTICK_OPACITY, blend_gamma=BLEND_GAMMA):
    """
    src_rgb : (N, 3) source pixels
    alpha   : (N,) mask values 0~255
    target  : ColorRGB
    return  : (N, 3) float64, rounded, before shimmer
    """
    src = np.asarray(src_rgb, dtype=np.float64)
    a = np.asarray(alpha, dtype=np.float64) / 255.0

    brightness = src.sum(axis=1) / (3 * 255.0)
    tone = SHADOW_FLOOR + brightness * SHADOW_RANGE
    adjusted = np.minimum(255.0, np.array(target, dtype=np.float64)[None, :] * tone[:, None])

    final_alpha = ((a ** blend_gamma) * opacity)[:, None]
    return round_half_up(src * (1.0 - final_alpha) + adjusted * final_alpha)


def apply_shimmer(rgb, intensity, double_shimmer=False):
    """
    rgb       : (N, 3) blended values
    intensity : (N,) shimmer multipliers
    double_shimmer : scale G and B a second time (legacy output)
    """
    k = np.asarray(intensity, dtype=np.float64)[:, None]
    out = np.minimum(255.0, round_half_up(rgb * k))
    if double_shimmer:
        out[:, 1:] = np.minimum(255.0, round_half_up(out[:, 1:] * k))
    return out


def apply_lip_color(
    src: np.ndarray,
    mask: np.ndarray,
    target,
    opacity: float = LIPSTICK_OPACITY,
    blend_gamma: float = BLEND_GAMMA,
    shimmer: bool = True,
    double_shimmer: bool = False
):
    """
    src            : RGB / RGBA uint8 image (not modified)
    mask           : uint8 (H, W) lip alpha 0~255
    target         : ColorRGB or (r, g, b) 0~255
    opacity        : lipstick opacity at full mask
    blend_gamma    : mask -> blend factor curve
    shimmer        : apply the gloss ripple
    double_shimmer : apply the ripple twice on G and B
    """
    check_pixel_buffer(src)
    target = check_color(target)

    if mask.shape != src.shape[:2]:
        raise DimensionMismatch(
            f"mask {mask.shape} does not match image {src.shape[:2]}"
        )

    out = src.copy()

    ys, xs = np.nonzero(mask)
    if len(ys) == 0:
        return out

    logger.debug("blending %s over %d lip pixels", target.hex, len(ys))

    rgb = blend_lip_color(
        src[ys, xs, :3], mask[ys, xs], target,
        opacity=opacity, blend_gamma=blend_gamma
    )

    if shimmer:
        rgb = apply_shimmer(
            rgb,
            shimmer_intensity(xs.astype(np.float64), ys.astype(np.float64)),
            double_shimmer=double_shimmer
        )

    out[ys, xs, :3] = np.clip(rgb, 0, 255).astype(np.uint8)
    return out

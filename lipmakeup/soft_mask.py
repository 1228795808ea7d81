import logging
import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from lipmakeup.lip_landmarks import as_polygon

logger = logging.getLogger(__name__)

MAX_DIST = 15.0
FALLOFF = 1.5


def points_in_polygon(xx, yy, poly):
    """
    Even-odd crossing test with a horizontal ray towards +x.
    xx, yy : same-shape coordinate grids
    poly   : (N, 2) vertices, implicitly closed
    return : bool array
    """
    inside = np.zeros(np.shape(xx), dtype=bool)
    n = len(poly)
    if n < 3:
        return inside

    j = n - 1
    for i in range(n):
        xi, yi = poly[i]
        xj, yj = poly[j]
        # horizontal edges never straddle a row
        if yi != yj:
            crosses = (yi > yy) != (yj > yy)
            x_cross = (xj - xi) * (yy - yi) / (yj - yi) + xi
            inside ^= crosses & (xx < x_cross)
        j = i

    return inside


def nearest_vertex_distance(xx, yy, vertices):
    d2 = np.full(np.shape(xx), np.inf, dtype=np.float64)
    for vx, vy in vertices:
        d2 = np.minimum(d2, (xx - vx) ** 2 + (yy - vy) ** 2)
    return np.sqrt(d2)


def falloff_alpha(min_dist, max_dist=MAX_DIST, falloff=FALLOFF):
    """vertex distance -> uint8 alpha (255 at a vertex, 0 from max_dist on)"""
    a = np.clip(1.0 - min_dist / max_dist, 0.0, 1.0) ** falloff
    return np.floor(a * 255.0 + 0.5).astype(np.uint8)


def _mask_rows(upper, lower, vertices, x0, x1, y0, y1, max_dist, falloff):
    yy, xx = np.mgrid[y0:y1, x0:x1].astype(np.float64)

    inside = points_in_polygon(xx, yy, upper) | points_in_polygon(xx, yy, lower)

    block = np.zeros(xx.shape, dtype=np.uint8)
    if inside.any():
        dist = nearest_vertex_distance(xx[inside], yy[inside], vertices)
        block[inside] = falloff_alpha(dist, max_dist, falloff)
    return block


def scan_box(vertices, width, height, max_dist=MAX_DIST):
    """
    Vertex bbox grown by max_dist, clipped to the canvas.
    return: (x0, x1, y0, y1) half-open, possibly empty
    """
    if len(vertices) == 0:
        return 0, 0, 0, 0
    left, top = vertices.min(axis=0)
    right, bottom = vertices.max(axis=0)

    x0 = max(0, int(math.floor(left - max_dist)))
    y0 = max(0, int(math.floor(top - max_dist)))
    x1 = min(width, int(math.ceil(right + max_dist)) + 1)
    y1 = min(height, int(math.ceil(bottom + max_dist)) + 1)
    return x0, max(x0, x1), y0, max(y0, y1)


def build_lip_mask(
    upper_lip,
    lower_lip,
    width,
    height,
    max_dist=MAX_DIST,
    falloff=FALLOFF,
    workers=1
):
    """
    upper_lip, lower_lip : ordered boundary points of each lip
    width, height        : canvas size
    max_dist             : falloff radius in pixels
    falloff              : power applied to the linear falloff
    workers              : >1 splits the scan into row bands on a thread pool
    return               : uint8 (H, W) alpha mask
    """
    if width <= 0 or height <= 0:
        raise ValueError("mask size must be positive")
    if max_dist <= 0:
        raise ValueError("max_dist must be > 0")

    upper = as_polygon(upper_lip)
    lower = as_polygon(lower_lip)
    vertices = np.concatenate([upper, lower], axis=0)

    mask = np.zeros((height, width), dtype=np.uint8)

    x0, x1, y0, y1 = scan_box(vertices, width, height, max_dist)
    if x0 == x1 or y0 == y1:
        return mask

    logger.debug("lip mask scan box x=[%d,%d) y=[%d,%d)", x0, x1, y0, y1)

    workers = max(1, min(int(workers), y1 - y0))
    if workers == 1:
        mask[y0:y1, x0:x1] = _mask_rows(
            upper, lower, vertices, x0, x1, y0, y1, max_dist, falloff
        )
        return mask

    bands = [b for b in np.array_split(np.arange(y0, y1), workers) if len(b)]
    logger.debug("lip mask: %d row bands", len(bands))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(
                _mask_rows, upper, lower, vertices,
                x0, x1, int(b[0]), int(b[-1]) + 1, max_dist, falloff
            )
            for b in bands
        ]
        blocks = [future.result() for future in futures]

    for b, block in zip(bands, blocks):
        mask[int(b[0]):int(b[-1]) + 1, x0:x1] = block

    return mask

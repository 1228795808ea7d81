import numpy as np
import pytest

from lipmakeup.color import ColorRGB
from lipmakeup.errors import InsufficientLandmarks, InvalidColorFormat, InvalidRegion
from lipmakeup.makeup import MakeupResult, apply_makeup, run_makeup


def test_apply_makeup_colors_lips_only(gray_rgba, mouth_points):
    before = gray_rgba.copy()
    result = run_makeup(gray_rgba, mouth_points, "#FF0000")

    assert isinstance(result, MakeupResult)
    assert result.image.shape == gray_rgba.shape
    assert result.mask.shape == gray_rgba.shape[:2]
    assert np.array_equal(gray_rgba, before)

    outside = result.mask == 0
    assert np.array_equal(result.image[outside], gray_rgba[outside])

    # just below the top vertex (40, 23)
    assert result.mask[24, 40] > 200
    r, g, b, a = result.image[24, 40]
    assert r > 128 > g
    assert a == 255


def test_run_makeup_reports_lip_color_and_target(gray_rgba, mouth_points):
    result = run_makeup(gray_rgba, mouth_points, "#d01020")

    assert result.lip_color == ColorRGB(128, 128, 128)
    assert result.target == ColorRGB(208, 16, 32)
    assert result.bounds == (20.0, 22.0, 60.0, 41.0)


def test_apply_makeup_returns_image(gray_rgba, mouth_points):
    out = apply_makeup(gray_rgba, mouth_points, "#FF0000")
    assert np.array_equal(out, run_makeup(gray_rgba, mouth_points, "#FF0000").image)


def test_malformed_color_fails_before_landmarks(gray_rgba):
    with pytest.raises(InvalidColorFormat):
        apply_makeup(gray_rgba, [], "not-a-color")


def test_insufficient_landmarks(gray_rgba, mouth_points):
    with pytest.raises(InsufficientLandmarks):
        apply_makeup(gray_rgba, mouth_points[:11], "#FF0000")


def test_collapsed_mouth_has_no_region(gray_rgba):
    with pytest.raises(InvalidRegion):
        apply_makeup(gray_rgba, [(30, 30)] * 12, "#FF0000")


def test_color_from_params(gray_rgba, mouth_points):
    result = run_makeup(gray_rgba, mouth_points, params={"LIP_COLOR_HEX": "#00FF00"})
    assert result.target == ColorRGB(0, 255, 0)


def test_double_shimmer_param_changes_green_blue_only(gray_rgba, mouth_points):
    single = apply_makeup(gray_rgba, mouth_points, "#4080C0")
    double = apply_makeup(gray_rgba, mouth_points, "#4080C0", {"DOUBLE_SHIMMER": True})

    assert np.array_equal(single[..., 0], double[..., 0])
    assert not np.array_equal(single[..., 1:3], double[..., 1:3])


def test_workers_do_not_change_output(gray_rgba, mouth_points):
    single = apply_makeup(gray_rgba, mouth_points, "#D01020")
    pooled = apply_makeup(gray_rgba, mouth_points, "#D01020", {"WORKERS": 3})

    assert np.array_equal(single, pooled)


def test_rgb_source(mouth_points):
    src = np.full((60, 80, 3), 128, dtype=np.uint8)
    out = apply_makeup(src, mouth_points, "#FF0000")

    assert out.shape == (60, 80, 3)
    assert out[24, 40, 0] > 128


# right corner just inside the left edge, everything else off canvas
OFF_LEFT_MOUTH = [
    (-30, 30), (-22, 24), (-15, 22), (-10, 23), (-5, 22), (0.4, 24), (0.4, 30),
    (-3, 37), (-8, 40), (-10, 41), (-16, 40), (-23, 37),
]


def test_mouth_box_off_canvas_still_draws_lips(gray_rgba):
    result = run_makeup(gray_rgba, OFF_LEFT_MOUTH, "#FF0000")

    assert result.lip_color is None
    assert np.all(result.mask[24:30, 0] > 0)
    assert np.count_nonzero(result.mask) == 6

    r, g, b, a = result.image[24, 0]
    assert r > 128 > g

    outside = result.mask == 0
    assert np.array_equal(result.image[outside], gray_rgba[outside])


def test_mouth_partly_off_canvas_analyzes_visible_part(gray_rgba, mouth_points):
    shifted = [(x - 30, y) for x, y in mouth_points]
    gray_rgba[:, :5, :3] = 0

    result = run_makeup(gray_rgba, shifted, "#FF0000")

    # box x=-10..30 clipped to 0..30, five black columns out of thirty
    assert result.lip_color == ColorRGB(107, 107, 107)
    assert result.mask.any()

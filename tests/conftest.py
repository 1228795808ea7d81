import numpy as np
import pytest

# outer lip: 0 = left corner, 1..5 top, 6 = right corner, 7..11 bottom
OUTER_LIP = [
    (20, 30), (28, 24), (35, 22), (40, 23), (45, 22), (52, 24), (60, 30),
    (53, 37), (46, 40), (40, 41), (34, 40), (27, 37),
]
INNER_LIP = [
    (24, 30), (34, 27), (40, 28), (46, 27), (56, 30), (46, 33), (40, 34), (34, 33),
]


@pytest.fixture
def mouth_points():
    return list(OUTER_LIP + INNER_LIP)


@pytest.fixture
def gray_rgba():
    img = np.full((60, 80, 4), 128, dtype=np.uint8)
    img[..., 3] = 255
    return img

import numpy as np
import pytest
from PIL import Image


def solid(width, height, value):
    """Solid RGB image with every channel set to ``value``."""
    return Image.new("RGB", (width, height), (value, value, value))


def ink(image):
    """Total darkness of an image: sum of (255 - channel mean) over all pixels."""
    arr = np.asarray(image.convert("RGB"), dtype=np.float64)
    return float((255.0 - arr.mean(axis=2)).sum())


@pytest.fixture
def gradient():
    """60x40 horizontal gradient from black on the left to white on the right."""
    row = np.linspace(0, 255, 60).astype(np.uint8)
    arr = np.repeat(np.tile(row, (40, 1))[:, :, None], 3, axis=2)
    return Image.fromarray(arr, "RGB")

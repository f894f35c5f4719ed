from collections.abc import Iterator

import numpy as np
from PIL import Image


def grid_shape(width: int, height: int, cell_size: int) -> tuple[int, int]:
    """Return (rows, cols) of the cell grid, counting partial edge cells."""
    rows = -(-height // cell_size)
    cols = -(-width // cell_size)
    return rows, cols


def brightness(pixel: tuple[int, ...]) -> float:
    """Unweighted mean of the red, green and blue channels."""
    r, g, b = pixel[:3]
    return (r + g + b) / 3


def sample_cells(image: Image.Image, cell_size: int) -> Iterator[tuple[int, int, float]]:
    """Yield (x, y, brightness) for each cell origin, row by row.

    Only the pixel at the cell origin is read; the cell is never averaged.
    The last row and column may be partial cells and are sampled the same way.
    """
    rgb = image if image.mode == "RGB" else image.convert("RGB")
    pixels = rgb.load()
    w, h = rgb.size
    for y in range(0, h, cell_size):
        for x in range(0, w, cell_size):
            yield x, y, brightness(pixels[x, y])


def sample_cell_areas(image: Image.Image, cell_size: int) -> Iterator[tuple[int, int, float]]:
    """Like sample_cells, but each brightness is the mean over the whole (clipped) cell."""
    arr = np.asarray(image.convert("RGB"), dtype=np.float64)
    h, w = arr.shape[:2]
    luma = arr.mean(axis=2)
    for y in range(0, h, cell_size):
        for x in range(0, w, cell_size):
            yield x, y, float(luma[y : y + cell_size, x : x + cell_size].mean())


def brightness_grid(image: Image.Image, cell_size: int, sampling: str = "point") -> np.ndarray:
    """Collect sampled brightness into an array of shape grid_shape(...)."""
    rows, cols = grid_shape(image.width, image.height, cell_size)
    sampler = sample_cell_areas if sampling == "area" else sample_cells
    grid = np.empty((rows, cols))
    for x, y, value in sampler(image, cell_size):
        grid[y // cell_size, x // cell_size] = value
    return grid

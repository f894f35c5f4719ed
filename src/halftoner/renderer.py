import logging
from collections.abc import Callable

from PIL import Image, ImageDraw

from halftoner.engine import RenderCancelled, RenderConfig
from halftoner.patterns import DRAWERS, mark_factor, response_curve
from halftoner.sampling import grid_shape, sample_cell_areas, sample_cells

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)


def render(image: Image.Image, config: RenderConfig, cancel: Callable[[], bool] | None = None) -> Image.Image:
    """Render a halftone of ``image`` on a fresh white canvas of the same size.

    Cells are drawn in sampling order (row by row), so where marks overlap a
    neighbouring cell the later cell wins. ``cancel`` is polled before each
    cell; when it returns True the render stops with RenderCancelled.
    """
    width, height = image.size
    if width == 0 or height == 0:
        logger.debug("Empty %dx%d image, nothing to render", width, height)
        return Image.new("RGB", (width, height), WHITE)

    cell_size = config.cell_size
    curve = response_curve(config.pattern, config.response)
    draw_mark = DRAWERS[config.pattern]
    sampler = sample_cell_areas if config.sampling == "area" else sample_cells

    rows, cols = grid_shape(width, height, cell_size)
    logger.debug(
        "Rendering %dx%d image as %dx%d %s cells of %dpx (%s response, %s sampling)",
        width,
        height,
        cols,
        rows,
        config.pattern.value,
        cell_size,
        config.response,
        config.sampling,
    )

    output = Image.new("RGB", (width, height), WHITE)
    canvas = ImageDraw.Draw(output, "RGBA")
    half = cell_size / 2
    drawn = 0
    for x, y, value in sampler(image, cell_size):
        if cancel is not None and cancel():
            raise RenderCancelled(f"Render cancelled at cell ({x}, {y})")
        if draw_mark(canvas, x + half, y + half, cell_size, mark_factor(value, curve), config.rotate):
            drawn += 1

    logger.debug("Drew %d of %d marks", drawn, rows * cols)
    return output


class HalftoneEngine:
    """Rendering engine that replaces each image cell with one black mark."""

    def __init__(self, config: RenderConfig):
        self.config = config

    def render(self, image: Image.Image, cancel: Callable[[], bool] | None = None) -> Image.Image:
        return render(image, self.config, cancel=cancel)

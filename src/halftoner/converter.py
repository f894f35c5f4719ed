import io
import logging
from pathlib import Path

from PIL import Image, ImageGrab

from halftoner.engine import RenderConfig
from halftoner.renderer import render

logger = logging.getLogger(__name__)


class NoClipboardImage(RuntimeError):
    """Raised when a paste is requested but the clipboard holds no image."""


def load_image(source: Image.Image | str | Path | bytes) -> Image.Image:
    """Decode ``source`` into an RGB image. Pillow's decode errors propagate unchanged."""
    if isinstance(source, bytes):
        source = Image.open(io.BytesIO(source))
    elif not isinstance(source, Image.Image):
        source = Image.open(source)
    return source.convert("RGB")


def grab_clipboard() -> Image.Image:
    """Return the image currently on the clipboard."""
    content = ImageGrab.grabclipboard()
    # grabclipboard returns a list of filenames when files were copied
    if isinstance(content, list):
        for name in content:
            try:
                return load_image(name)
            except (OSError, ValueError):
                logger.debug("Skipping clipboard entry that is not an image: %s", name)
        raise NoClipboardImage("Clipboard holds files but none of them is an image")
    if content is None:
        raise NoClipboardImage("Clipboard does not contain an image")
    return content.convert("RGB")


def image_to_halftone(source: Image.Image | str | Path | bytes, config: RenderConfig) -> Image.Image:
    image = load_image(source)
    return render(image, config)


def to_png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def default_output_path(path: str | Path) -> Path:
    """``photo.jpg`` -> ``photo_halftone.png`` in the same directory."""
    path = Path(path)
    return path.with_name(f"{path.stem}_halftone.png")

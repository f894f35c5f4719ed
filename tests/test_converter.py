import io
from pathlib import Path
from unittest import mock

import pytest
from PIL import Image, UnidentifiedImageError

from halftoner.converter import (
    NoClipboardImage,
    default_output_path,
    grab_clipboard,
    image_to_halftone,
    load_image,
    to_png_bytes,
)
from halftoner.engine import RenderConfig
from tests.conftest import solid


def test_load_image_from_path(tmp_path):
    path = tmp_path / "in.png"
    Image.new("L", (12, 8), 30).save(path)
    img = load_image(path)
    assert img.mode == "RGB"
    assert img.size == (12, 8)


def test_load_image_from_bytes():
    img = load_image(to_png_bytes(solid(5, 4, 10)))
    assert img.size == (5, 4)
    assert img.getpixel((0, 0)) == (10, 10, 10)


def test_load_image_drops_alpha():
    img = load_image(Image.new("RGBA", (3, 3), (1, 2, 3, 0)))
    assert img.mode == "RGB"


def test_decode_errors_propagate():
    with pytest.raises(UnidentifiedImageError):
        load_image(b"definitely not an image")


def test_missing_file_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "missing.png")


def test_image_to_halftone_accepts_file_path(tmp_path):
    path = tmp_path / "black.png"
    solid(20, 20, 0).save(path)
    result = image_to_halftone(str(path), RenderConfig(cell_size=10, pattern="square", rotate=False))
    assert result.size == (20, 20)
    assert result.getpixel((10, 10)) == (0, 0, 0)


def test_png_bytes_roundtrip_preserves_pixels():
    img = solid(7, 3, 200)
    data = to_png_bytes(img)
    assert data.startswith(b"\x89PNG")
    assert Image.open(io.BytesIO(data)).tobytes() == img.tobytes()


def test_default_output_path():
    assert default_output_path("photos/cat.jpeg") == Path("photos/cat_halftone.png")


def test_grab_clipboard_image():
    with mock.patch("halftoner.converter.ImageGrab.grabclipboard", return_value=Image.new("L", (4, 4), 9)):
        img = grab_clipboard()
    assert img.mode == "RGB"
    assert img.size == (4, 4)


def test_grab_clipboard_empty():
    with mock.patch("halftoner.converter.ImageGrab.grabclipboard", return_value=None):
        with pytest.raises(NoClipboardImage, match="does not contain an image"):
            grab_clipboard()


def test_grab_clipboard_file_list(tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("hello")
    picture = tmp_path / "pic.png"
    solid(6, 6, 0).save(picture)
    with mock.patch("halftoner.converter.ImageGrab.grabclipboard", return_value=[str(notes), str(picture)]):
        img = grab_clipboard()
    assert img.size == (6, 6)


def test_grab_clipboard_file_list_without_images(tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("hello")
    with mock.patch("halftoner.converter.ImageGrab.grabclipboard", return_value=[str(notes)]):
        with pytest.raises(NoClipboardImage, match="none of them is an image"):
            grab_clipboard()

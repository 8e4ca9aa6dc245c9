from PIL import Image

from simulator.image import png_bytes, save_png, to_pil
from simulator.raster import trace_to_image


def test_png_bytes(bb2):
    data = png_bytes(trace_to_image(bb2, width=20, height=10))
    assert data.startswith(b"\x89PNG\r\n\x1a\n")


def test_save_png_with_fit(tmp_path, bb2):
    buffer = trace_to_image(bb2, width=20, height=10)
    path = save_png(buffer, tmp_path / "bb2.png", size=(80, 40))
    with Image.open(path) as image:
        assert image.size == (80, 40)
        assert image.mode == "RGBA"


def test_to_pil_keeps_size(bb2):
    buffer = trace_to_image(bb2, width=20, height=10)
    image = to_pil(buffer)
    assert image.size == (20, 10)
    assert image.getpixel((10, 1)) == (255, 255, 255, 255)

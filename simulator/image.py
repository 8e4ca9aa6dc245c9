import io

from PIL import Image


def to_pil(buffer, size=None):
    """Wrap an RGBA buffer in a Pillow image, optionally stretched to `size` (width, height)."""
    image = Image.fromarray(buffer)
    if size is not None and tuple(size) != image.size:
        image = image.resize(tuple(size), resample=Image.Resampling.NEAREST)
    return image


def png_bytes(buffer, size=None):
    out = io.BytesIO()
    to_pil(buffer, size).save(out, format="PNG")
    return out.getvalue()


def save_png(buffer, path, size=None):
    to_pil(buffer, size).save(path, format="PNG")
    return path

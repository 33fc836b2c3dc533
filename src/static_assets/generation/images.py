"""Raster image utilities: load, resize and encode variants."""

import logging
from io import BytesIO
from pathlib import Path

from PIL import Image

# SVG rasterisation needs the native cairo library at import time
try:
    import cairosvg

    CAIRO_AVAILABLE = True
except (ImportError, OSError):
    CAIRO_AVAILABLE = False
    cairosvg = None

logger = logging.getLogger(__name__)

# Output format -> Pillow encoder name
PIL_FORMATS = {"png": "PNG", "jpg": "JPEG", "jpeg": "JPEG", "webp": "WEBP", "avif": "AVIF"}

RASTER_SOURCE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif"}


def rasterize_svg(data: bytes, width: int | None = None) -> Image.Image:
    """Render SVG bytes to an RGBA image, optionally at a given width.

    Raises:
        RuntimeError: If CairoSVG or the cairo library is not available
    """
    if not CAIRO_AVAILABLE:
        raise RuntimeError("CairoSVG (and the cairo library) is required to rasterize SVG sources")
    png_bytes = cairosvg.svg2png(bytestring=data, output_width=width)
    with Image.open(BytesIO(png_bytes)) as img:
        return img.convert("RGBA")


def open_image(path: Path) -> Image.Image:
    """Load a raster source fully into memory."""
    with Image.open(path) as img:
        img.load()
        return img.copy()


def source_dimensions(path: Path) -> tuple[int, int]:
    """Width and height of a raster source without decoding pixel data."""
    with Image.open(path) as img:
        return img.size


def resize_image(image: Image.Image, width: int, height: int | None = None) -> Image.Image:
    """Fit an image inside width x height without enlarging it.

    When height is omitted only the width constrains the result.
    """
    src_width, src_height = image.size
    scale = min(1.0, width / src_width)
    if height is not None:
        scale = min(scale, height / src_height)
    if scale >= 1.0:
        return image.copy()

    new_size = (max(1, round(src_width * scale)), max(1, round(src_height * scale)))
    return image.resize(new_size, Image.Resampling.LANCZOS)


def _flatten(image: Image.Image) -> Image.Image:
    """Composite transparency onto white for formats without alpha."""
    if image.mode in ("RGBA", "LA", "P"):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


def encode_image(image: Image.Image, fmt: str, quality: int) -> bytes:
    """Encode an image to bytes in the requested output format.

    Raises:
        ValueError: If fmt is not a raster output format
        OSError, KeyError: If Pillow cannot encode the format (e.g. no AVIF support)
    """
    if fmt not in PIL_FORMATS:
        raise ValueError(f"Cannot encode raster image as '{fmt}'")

    output = BytesIO()
    if fmt in ("jpg", "jpeg"):
        _flatten(image).save(output, format="JPEG", quality=quality, optimize=True, progressive=True)
    elif fmt == "png":
        # PNG is lossless; quality does not apply
        if image.mode not in ("RGB", "RGBA", "L", "LA", "P"):
            image = image.convert("RGBA")
        image.save(output, format="PNG", optimize=True, compress_level=9)
    else:
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA")
        image.save(output, format=PIL_FORMATS[fmt], quality=quality)
    return output.getvalue()

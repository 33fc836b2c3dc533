"""Variant generation: SVG minification and raster resize/encode."""

from .images import CAIRO_AVAILABLE, encode_image, rasterize_svg, resize_image
from .runner import ConversionTask, GenerationResult, Generator, run_in_batches, variant_filename
from .svg import minify_svg

__all__ = [
    "CAIRO_AVAILABLE",
    "ConversionTask",
    "GenerationResult",
    "Generator",
    "encode_image",
    "minify_svg",
    "rasterize_svg",
    "resize_image",
    "run_in_batches",
    "variant_filename",
]

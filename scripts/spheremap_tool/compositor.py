"""
compositor.py — Render a whole spheremap and write it to disk.

Output pixels are independent, so rows are evaluated a band at a time as
whole numpy arrays.  Bands are processed top to bottom, left to right within
each row, and the band height has no effect on the result.
"""

import numpy as np

from .cubemap import Cubemap
from .pixels import PACKED_DTYPE, PixelBuffer
from .sampling import SINGLE_SAMPLE, sample_pixels

OUTPUT_FORMAT = "BMP"
OUTPUT_EXTENSION = "bmp"

# Rows evaluated per numpy pass; bounds temporary memory for large outputs
ROWS_PER_BAND = 64


def default_output_path(prefix):
    return f"{prefix}_spheremap.{OUTPUT_EXTENSION}"


def render_spheremap(cubemap, size, pattern=SINGLE_SAMPLE, rows_per_band=ROWS_PER_BAND):
    """Render a size x size spheremap of the cube map into a PixelBuffer."""
    if size < 1:
        raise ValueError(f"Output size must be a positive integer, got: {size}")
    if rows_per_band < 1:
        raise ValueError(f"Band height must be a positive integer, got: {rows_per_band}")

    pixels = np.zeros((size, size), dtype=PACKED_DTYPE)
    for y0 in range(0, size, rows_per_band):
        y1 = min(y0 + rows_per_band, size)
        ys, xs = np.mgrid[y0:y1, 0:size]
        pixels[y0:y1] = sample_pixels(cubemap, xs, ys, size, pattern)

    return PixelBuffer(size, size, pixels)


def save_spheremap(buffer, output_path):
    """Encode the rendered buffer as an RGBA BMP."""
    buffer.to_image().save(output_path, format=OUTPUT_FORMAT)


def convert(prefix, extension, output_path=None, size=1024, pattern=SINGLE_SAMPLE):
    """Load ``<prefix>_<face>.<extension>``, render the spheremap, write it.

    Returns the path written.
    """
    if output_path is None:
        output_path = default_output_path(prefix)

    print(f"Loading: {prefix}_*.{extension}")
    cubemap = Cubemap.load(prefix, extension)
    for face, face_img in cubemap:
        print(f"  {face.label:>2} {face.suffix[1:]:<6} {face_img.width}x{face_img.height}")

    print(
        f"Rendering {size}x{size} spheremap "
        f"({len(pattern)} sample(s) per pixel)...",
        end="",
        flush=True,
    )
    buffer = render_spheremap(cubemap, size, pattern)
    print(" done")

    save_spheremap(buffer, output_path)
    print(f"Wrote {output_path}")
    return output_path

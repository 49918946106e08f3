"""
sampling.py — Multi-sample anti-aliasing for spheremap output pixels.

A jitter pattern is a sequence of (dx, dy) offsets in units of one output
pixel, relative to the pixel center.  Each offset is pushed through the
inverse projection, the cube face lookup and a nearest-neighbor face fetch;
the pixel color is the per-channel integer mean of those samples.
"""

import numpy as np

from .cubemap import direction_to_face
from .pixels import pack_rgb, unpack_rgb
from .projection import spheremap_direction

SINGLE_SAMPLE = ((0.0, 0.0),)

# Rotated grid: the four outer samples sit on a square turned ~27 degrees so
# no two share a row or column.
ROTATED_GRID_5X = (
    (0.0, 0.0),
    (-0.1875, -0.375),
    (0.375, -0.1875),
    (0.1875, 0.375),
    (-0.375, 0.1875),
)

JITTER_PATTERNS = {
    1: SINGLE_SAMPLE,
    5: ROTATED_GRID_5X,
}


def jitter_pattern(num_samples):
    """Return the jitter pattern with the given sample count (1 or 5)."""
    try:
        return JITTER_PATTERNS[num_samples]
    except KeyError:
        supported = ", ".join(str(n) for n in sorted(JITTER_PATTERNS))
        raise ValueError(
            f"Invalid AA sample pattern {num_samples!r} (supported: {supported})"
        ) from None


def sample_pixels(cubemap, x, y, size, pattern=SINGLE_SAMPLE):
    """Anti-aliased color of output pixels (x, y) in a size x size spheremap.

    x and y are integer pixel indices, scalars or arrays of matching shape.
    Returns packed opaque RGBA8 pixels with that shape.
    """
    size_f = np.float32(size)
    pixel_size = np.float32(1.0) / size_f
    center_s, center_t = np.broadcast_arrays(
        (np.asarray(x, dtype=np.float32) + np.float32(0.5)) / size_f,
        (np.asarray(y, dtype=np.float32) + np.float32(0.5)) / size_f,
    )

    sum_r = np.zeros(center_s.shape, dtype=np.uint32)
    sum_g = np.zeros(center_s.shape, dtype=np.uint32)
    sum_b = np.zeros(center_s.shape, dtype=np.uint32)

    for dx, dy in pattern:
        s = center_s + np.float32(dx) * pixel_size
        t = center_t + np.float32(dy) * pixel_size

        face, face_s, face_t = direction_to_face(*spheremap_direction(s, t))
        r, g, b = unpack_rgb(cubemap.sample_face(face, face_s, face_t))
        sum_r += r
        sum_g += g
        sum_b += b

    count = len(pattern)
    return pack_rgb(sum_r // count, sum_g // count, sum_b // count)

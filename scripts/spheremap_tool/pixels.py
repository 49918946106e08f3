"""
pixels.py — Packed RGBA8 pixel buffers.

A pixel is one 32-bit value holding four 8-bit channels, R in the lowest byte
and A in the highest.  Stored little-endian, the bytes of a buffer read
R, G, B, A, R, G, B, A, ... which is exactly the layout Pillow uses for RGBA.
"""

import numpy as np
from PIL import Image

# Packed pixels are always little-endian so the byte view is RGBA on any host
PACKED_DTYPE = np.dtype("<u4")

OPAQUE_ALPHA = 0xFF


def pack_rgb(r, g, b):
    """Pack 8-bit R, G, B channels into opaque RGBA8 pixels.

    Accepts scalars or arrays; the alpha channel is always forced to 0xFF.
    """
    r = np.asarray(r, dtype=np.uint32) & 0xFF
    g = np.asarray(g, dtype=np.uint32) & 0xFF
    b = np.asarray(b, dtype=np.uint32) & 0xFF
    return (r | (g << 8) | (b << 16) | (OPAQUE_ALPHA << 24)).astype(PACKED_DTYPE)


def unpack_rgb(packed):
    """Split packed pixels into (r, g, b) uint32 arrays.  Alpha is dropped."""
    packed = np.asarray(packed, dtype=np.uint32)
    r = packed & 0xFF
    g = (packed >> 8) & 0xFF
    b = (packed >> 16) & 0xFF
    return r, g, b


class PixelBuffer:
    """A width x height grid of packed RGBA8 pixels, stored row-major."""

    def __init__(self, width, height, pixels=None):
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Pixel buffer dimensions must be positive, got {width}x{height}"
            )

        if pixels is None:
            pixels = np.zeros(width * height, dtype=PACKED_DTYPE)
        else:
            pixels = np.asarray(pixels, dtype=PACKED_DTYPE).reshape(-1)
            if pixels.size != width * height:
                raise ValueError(
                    f"Pixel buffer of {width}x{height} needs {width * height} "
                    f"pixels, got {pixels.size}"
                )

        self.width = width
        self.height = height
        self.pixels = pixels

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height})"

    @classmethod
    def solid(cls, width, height, rgb):
        """Buffer filled with a single opaque color."""
        pixels = np.full(width * height, pack_rgb(*rgb), dtype=PACKED_DTYPE)
        return cls(width, height, pixels)

    @classmethod
    def from_rgba(cls, array):
        """Build a buffer from an (H, W, 4) uint8 array."""
        array = np.asarray(array, dtype=np.uint8)
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) RGBA array, got {array.shape}")
        height, width = array.shape[:2]
        pixels = np.ascontiguousarray(array).view(PACKED_DTYPE).reshape(-1)
        return cls(width, height, pixels.copy())

    @classmethod
    def from_image(cls, img):
        """Build a buffer from a Pillow image, forcing four channels."""
        return cls.from_rgba(np.asarray(img.convert("RGBA")))

    def to_rgba(self):
        """Return the pixels as an (H, W, 4) uint8 array."""
        data = np.ascontiguousarray(self.pixels, dtype=PACKED_DTYPE)
        return data.view(np.uint8).reshape(self.height, self.width, 4)

    def to_image(self):
        """Return the pixels as a Pillow RGBA image."""
        return Image.fromarray(self.to_rgba())

    def texel(self, x, y):
        """Packed pixel at column x, row y."""
        return self.pixels[y * self.width + x]

    def copy(self):
        return PixelBuffer(self.width, self.height, self.pixels.copy())

    def freeze(self):
        """Mark the pixel storage read-only and return self."""
        self.pixels.flags.writeable = False
        return self

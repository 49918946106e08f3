import numpy as np
import pytest
from PIL import Image

from spheremap_tool.cubemap import CubeFace, Cubemap, face_path
from spheremap_tool.pixels import PixelBuffer, unpack_rgb

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
YELLOW = (255, 255, 0)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

# One distinct solid color per face
FACE_COLORS = {
    CubeFace.POS_X: RED,
    CubeFace.NEG_X: GREEN,
    CubeFace.POS_Y: BLUE,
    CubeFace.NEG_Y: YELLOW,
    CubeFace.POS_Z: WHITE,
    CubeFace.NEG_Z: BLACK,
}


def solid_cubemap(colors, sizes=None):
    """Cube map of solid-color faces; sizes maps face -> (width, height)."""
    sizes = sizes or {}
    return Cubemap(
        {face: PixelBuffer.solid(*sizes.get(face, (2, 2)), colors[face]) for face in CubeFace}
    )


def rgb_at(buffer, x, y):
    r, g, b = unpack_rgb(buffer.texel(x, y))
    return int(r), int(g), int(b)


@pytest.fixture
def colored_cubemap():
    """Six uniform 2x2 faces in the standard test colors."""
    return solid_cubemap(FACE_COLORS)


@pytest.fixture
def face_files(tmp_path):
    """Write the standard test colors as PNG faces; returns the file prefix."""
    prefix = str(tmp_path / "sky")
    for face, color in FACE_COLORS.items():
        pixels = np.zeros((2, 2, 3), dtype=np.uint8)
        pixels[...] = color
        Image.fromarray(pixels).save(face_path(prefix, "png", face))
    return prefix

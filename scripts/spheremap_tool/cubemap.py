"""
cubemap.py — Cube map storage, direction-to-face lookup and face sampling.

Face order follows the usual GPU cube map convention, and the same order is
used for on-disk naming:

  +X  <prefix>_right.<ext>
  -X  <prefix>_left.<ext>
  +Y  <prefix>_top.<ext>
  -Y  <prefix>_bottom.<ext>
  +Z  <prefix>_front.<ext>
  -Z  <prefix>_back.<ext>

Face texture coordinates (s, t) run from 0 to 1 with s across columns and
t down rows.  For each face the major axis and the two minor components are:

  Face   s     t     major
  +X    -z    -y     |x|
  -X     z    -y     |x|
  +Y     x     z     |y|
  -Y     x    -z     |y|
  +Z     x    -y     |z|
  -Z    -x    -y     |z|
"""

import enum

import numpy as np
from PIL import Image

from .errors import ImageLoadError
from .pixels import PACKED_DTYPE, PixelBuffer


class CubeFace(enum.IntEnum):
    POS_X = 0
    NEG_X = 1
    POS_Y = 2
    NEG_Y = 3
    POS_Z = 4
    NEG_Z = 5

    @property
    def suffix(self):
        return FACE_SUFFIXES[self]

    @property
    def label(self):
        return FACE_LABELS[self]


FACE_SUFFIXES = {
    CubeFace.POS_X: "_right",
    CubeFace.NEG_X: "_left",
    CubeFace.POS_Y: "_top",
    CubeFace.NEG_Y: "_bottom",
    CubeFace.POS_Z: "_front",
    CubeFace.NEG_Z: "_back",
}

FACE_LABELS = {
    CubeFace.POS_X: "+X",
    CubeFace.NEG_X: "-X",
    CubeFace.POS_Y: "+Y",
    CubeFace.NEG_Y: "-Y",
    CubeFace.POS_Z: "+Z",
    CubeFace.NEG_Z: "-Z",
}


def face_path(prefix, extension, face):
    """File name of one face image, e.g. ``sky_right.png``."""
    return f"{prefix}{face.suffix}.{extension}"


def direction_to_face(x, y, z):
    """Find the cube face a direction points at, plus its texture coordinates.

    The direction does not need to be normalized.  x, y and z may be scalars
    or arrays of the same shape; the result is a tuple ``(face, s, t)`` of
    arrays with that shape, where ``face`` holds CubeFace ordinals and s, t
    are in [0, 1].

    The major axis is the one with the largest absolute component.  Ties go
    to the earlier axis: x beats y and z, y beats z.
    """
    x = np.asarray(x, dtype=np.float32)
    y = np.asarray(y, dtype=np.float32)
    z = np.asarray(z, dtype=np.float32)

    if not (np.isfinite(x).all() and np.isfinite(y).all() and np.isfinite(z).all()):
        raise ValueError("Direction components must be finite")

    ax = np.abs(x)
    ay = np.abs(y)
    az = np.abs(z)

    if ((ax == 0) & (ay == 0) & (az == 0)).any():
        raise ValueError("Direction must not be the zero vector")

    # Axis precedence x, y, z.  Anything that fails every comparison (only
    # possible for NaN) falls back to x.
    axis = np.select(
        [
            (ax >= ay) & (ax >= az),
            (ay >= ax) & (ay >= az),
            (az >= ax) & (az >= ay),
        ],
        [0, 1, 2],
        default=0,
    )

    major = np.choose(axis, [x, y, z])
    face = axis * 2 + (major < 0)

    raw_s = np.choose(face, [-z, z, x, x, x, -x])
    raw_t = np.choose(face, [-y, -y, z, -z, -y, -y])
    m = np.choose(axis, [ax, ay, az])

    s = np.float32(0.5) * (raw_s / m + np.float32(1.0))
    t = np.float32(0.5) * (raw_t / m + np.float32(1.0))
    return face, s, t


def load_face(path, face):
    """Decode one face image into a PixelBuffer, raising ImageLoadError."""
    try:
        with Image.open(path) as img:
            return PixelBuffer.from_image(img)
    except FileNotFoundError:
        raise ImageLoadError(face, path, "file not found") from None
    except (OSError, ValueError) as exc:
        raise ImageLoadError(face, path, str(exc) or type(exc).__name__) from exc


class Cubemap:
    """Six face images, one per CubeFace.  Faces may differ in size.

    The cube map is read-only once built: it keeps frozen copies of the face
    buffers it is given, and the caller's buffers stay writable.
    """

    def __init__(self, faces):
        missing = [face.label for face in CubeFace if face not in faces]
        if missing:
            raise ValueError(f"Cube map is missing faces: {', '.join(missing)}")
        self._faces = tuple(faces[face].copy().freeze() for face in CubeFace)

    @classmethod
    def load(cls, prefix, extension):
        """Load ``<prefix>_<face>.<extension>`` for all six faces.

        Every face is decoded up front; the first missing or unreadable file
        raises ImageLoadError naming the face.
        """
        return cls(
            {face: load_face(face_path(prefix, extension, face), face) for face in CubeFace}
        )

    def __getitem__(self, face):
        return self._faces[face]

    def __iter__(self):
        return iter(zip(CubeFace, self._faces))

    def read_texel(self, face, x, y):
        """Packed pixel at column x, row y of one face."""
        face = CubeFace(face)
        face_img = self._faces[face]
        if not (0 <= x < face_img.width and 0 <= y < face_img.height):
            raise IndexError(
                f"Texel ({x}, {y}) outside the {face_img.width}x{face_img.height} "
                f"{face.label} face"
            )
        return face_img.texel(x, y)

    def sample_face(self, face, s, t):
        """Nearest-neighbor lookup of face texture coordinates (s, t).

        face, s and t broadcast together; the result is an array of packed
        pixels.  Texel indices are clamped so s or t of exactly 1.0 reads the
        last row/column.
        """
        face = np.asarray(face)
        s, t = np.broadcast_arrays(
            np.asarray(s, dtype=np.float32), np.asarray(t, dtype=np.float32)
        )
        face, s, t = np.broadcast_arrays(face, s, t)

        out = np.zeros(face.shape, dtype=PACKED_DTYPE)
        for cube_face, face_img in self:
            mask = face == cube_face
            if not mask.any():
                continue

            tx = np.floor(s[mask] * face_img.width).astype(np.intp)
            ty = np.floor(t[mask] * face_img.height).astype(np.intp)
            tx = np.clip(tx, 0, face_img.width - 1)
            ty = np.clip(ty, 0, face_img.height - 1)
            out[mask] = face_img.pixels[ty * face_img.width + tx]
        return out

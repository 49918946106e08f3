"""
projection.py — Inverse spheremap projection.

Maps a point (s, t) of the spheremap image back to the direction it encodes.
With q = s - s^2 + t - t^2 and p = 16q - 4:

    r = sqrt(p)
    direction = ( r(2s - 1), -r(2t - 1), 8q - 3 )

q peaks at 0.5 in the image center, which gives (0, 0, 1) (the +Z pole).
p reaches zero on the circle inscribed in the image, where the direction is
(0, 0, -1).  Points outside that circle (p < 0) have no preimage and are
pinned to the -Z pole.
"""

import numpy as np


def spheremap_direction(s, t):
    """Direction (x, y, z) for spheremap coordinates (s, t) in [0, 1).

    s and t may be scalars or arrays; each returned component is a float32
    array of the broadcast shape.  The direction is not normalized.
    """
    s = np.asarray(s, dtype=np.float32)
    t = np.asarray(t, dtype=np.float32)

    q = s - s * s + t - t * t
    p = np.float32(16.0) * q - np.float32(4.0)

    outside = p < 0
    r = np.sqrt(np.where(outside, np.float32(0.0), p))

    x = np.where(outside, np.float32(0.0), r * (np.float32(2.0) * s - np.float32(1.0)))
    y = np.where(outside, np.float32(0.0), -r * (np.float32(2.0) * t - np.float32(1.0)))
    z = np.where(outside, np.float32(-1.0), np.float32(8.0) * q - np.float32(3.0))
    return x, y, z

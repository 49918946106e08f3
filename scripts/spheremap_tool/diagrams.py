"""diagrams — Generate matplotlib diagrams explaining the spheremap layout.

Produces PNG diagrams at 200 DPI:

  face_regions.png     which cube face each point of the spheremap samples
  jitter_pattern.png   the 1x and 5x sample positions inside one output pixel

Usage:
    python -m spheremap_tool.diagrams --output-dir docs/
    python -m spheremap_tool.diagrams --output-dir docs/ --size 1024

Requires: pip install numpy matplotlib
"""

import argparse
import os
import sys

import matplotlib

matplotlib.use("Agg")

import matplotlib.patheffects as pe  # noqa: E402
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.colors import ListedColormap  # noqa: E402
from matplotlib.patches import Circle, Rectangle  # noqa: E402

from .cubemap import CubeFace, direction_to_face  # noqa: E402
from .projection import spheremap_direction  # noqa: E402
from .sampling import ROTATED_GRID_5X, SINGLE_SAMPLE  # noqa: E402

DPI = 200

# ---------------------------------------------------------------------------
# Dark theme style
# ---------------------------------------------------------------------------

STYLE = {
    "bg": "#1a1a2e",  # Dark blue-gray background
    "grid": "#2a2a4a",  # Subtle grid lines
    "axis": "#8888aa",  # Axis lines and labels
    "text": "#e0e0f0",  # Primary text
    "text_dim": "#8888aa",  # Secondary/dim text
    "accent1": "#4fc3f7",  # Cyan
    "accent2": "#ff7043",  # Orange
    "accent3": "#66bb6a",  # Green
    "accent4": "#ab47bc",  # Purple
    "warn": "#ffd54f",  # Yellow
    "surface": "#252545",  # Slightly lighter surface for fills
}

# One color per face, indexed by CubeFace ordinal
FACE_COLORS = [
    STYLE["accent2"],  # +X
    STYLE["accent3"],  # -X
    STYLE["accent1"],  # +Y
    STYLE["warn"],  # -Y
    STYLE["text"],  # +Z
    STYLE["surface"],  # -Z
]
FACE_CMAP = ListedColormap(FACE_COLORS)


def setup_axes(ax, xlim=None, ylim=None, grid=True, aspect="equal"):
    """Apply consistent dark styling to axes."""
    ax.set_facecolor(STYLE["bg"])
    if xlim:
        ax.set_xlim(xlim)
    if ylim:
        ax.set_ylim(ylim)
    if aspect:
        ax.set_aspect(aspect)
    ax.tick_params(colors=STYLE["axis"], labelsize=9)
    for spine in ax.spines.values():
        spine.set_color(STYLE["grid"])
        spine.set_linewidth(0.5)
    if grid:
        ax.grid(True, color=STYLE["grid"], linewidth=0.5, alpha=0.5)
    ax.set_axisbelow(True)


def label(ax, x, y, text, color, fontsize=10):
    """Bold centered text with a background-colored stroke for readability."""
    ax.text(
        x,
        y,
        text,
        color=color,
        fontsize=fontsize,
        fontweight="bold",
        ha="center",
        va="center",
        path_effects=[pe.withStroke(linewidth=3, foreground=STYLE["bg"])],
    )


def save(fig, output_dir, filename):
    """Save a figure into output_dir (created if needed); return the path."""
    os.makedirs(output_dir, exist_ok=True)
    out = os.path.join(output_dir, filename)
    fig.savefig(
        out,
        dpi=DPI,
        bbox_inches="tight",
        facecolor=STYLE["bg"],
        pad_inches=0.2,
    )
    plt.close(fig)
    print(f"  {out}")
    return out


def face_region_map(size):
    """(size x size) array of CubeFace ordinals sampled at pixel centers."""
    coords = (np.arange(size, dtype=np.float32) + np.float32(0.5)) / np.float32(size)
    s, t = np.meshgrid(coords, coords)
    face, _, _ = direction_to_face(*spheremap_direction(s, t))
    return face


# ---------------------------------------------------------------------------
# face_regions.png
# ---------------------------------------------------------------------------


def diagram_face_regions(output_dir, size=512):
    """Which cube face every point of the spheremap samples."""
    regions = face_region_map(size)

    fig = plt.figure(figsize=(7, 7), facecolor=STYLE["bg"])
    ax = fig.add_subplot(111)
    setup_axes(ax, xlim=(0, 1), ylim=(1, 0), grid=False)

    ax.imshow(
        regions,
        cmap=FACE_CMAP,
        vmin=-0.5,
        vmax=len(FACE_COLORS) - 0.5,
        interpolation="nearest",
        extent=(0, 1, 1, 0),
    )

    # p = 0 circle: everything outside it is pinned to the -Z pole
    ax.add_patch(
        Circle(
            (0.5, 0.5),
            0.5,
            fill=False,
            edgecolor=STYLE["warn"],
            linewidth=1.5,
            linestyle="--",
        )
    )

    # Label each face at the centroid of its region
    for face in CubeFace:
        rows, cols = np.nonzero(regions == face)
        if rows.size == 0:
            continue
        if face == CubeFace.NEG_Z:
            # The -Z region is the four corners; label one of them
            lx, ly = 0.07, 0.05
        else:
            lx = (cols.mean() + 0.5) / size
            ly = (rows.mean() + 0.5) / size
        color = STYLE["bg"] if face == CubeFace.POS_Z else STYLE["text"]
        label(ax, lx, ly, face.label, color, fontsize=12)

    ax.set_xlabel("s", color=STYLE["axis"])
    ax.set_ylabel("t", color=STYLE["axis"])
    ax.set_title(
        "Spheremap → cube face (outside the circle: degenerate, -Z)",
        color=STYLE["text"],
        fontsize=12,
        fontweight="bold",
    )
    fig.tight_layout()
    return save(fig, output_dir, "face_regions.png")


# ---------------------------------------------------------------------------
# jitter_pattern.png
# ---------------------------------------------------------------------------


def diagram_jitter_pattern(output_dir):
    """1x and 5x rotated-grid sample positions inside one output pixel."""
    fig = plt.figure(figsize=(10, 5), facecolor=STYLE["bg"])

    panels = [
        (SINGLE_SAMPLE, "1 sample: pixel center"),
        (ROTATED_GRID_5X, "5 samples: rotated grid"),
    ]
    for i, (pattern, title) in enumerate(panels):
        ax = fig.add_subplot(1, 2, i + 1)
        setup_axes(ax, xlim=(-0.6, 0.6), ylim=(0.6, -0.6))

        ax.add_patch(
            Rectangle(
                (-0.5, -0.5),
                1.0,
                1.0,
                fill=True,
                facecolor=STYLE["surface"],
                edgecolor=STYLE["axis"],
                linewidth=1.5,
            )
        )
        for n, (dx, dy) in enumerate(pattern):
            color = STYLE["warn"] if n == 0 else STYLE["accent1"]
            ax.plot(dx, dy, "o", color=color, markersize=10, zorder=5)
            label(ax, dx + 0.08, dy - 0.08, str(n), color, fontsize=9)

        ax.set_title(title, color=STYLE["text"], fontsize=11, fontweight="bold")

    fig.suptitle(
        "Anti-aliasing jitter patterns (offsets in output pixels)",
        color=STYLE["text"],
        fontsize=14,
        fontweight="bold",
        y=1.0,
    )
    fig.tight_layout(rect=(0, 0, 1, 0.95))
    return save(fig, output_dir, "jitter_pattern.png")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate matplotlib diagrams of the spheremap layout."
    )
    parser.add_argument("--output-dir", required=True, help="Directory for the PNGs")
    parser.add_argument(
        "--size",
        type=int,
        default=512,
        help="Resolution of the face region map (default: 512)",
    )
    args = parser.parse_args(argv)

    if args.size <= 0:
        print(f"Size must be a positive integer, got: {args.size}", file=sys.stderr)
        return 1

    print(f"{args.output_dir}/")
    diagram_face_regions(args.output_dir, args.size)
    diagram_jitter_pattern(args.output_dir)
    print("\nGenerated 2 diagram(s).")
    return 0


if __name__ == "__main__":
    sys.exit(main())

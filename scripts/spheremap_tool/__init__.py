"""spheremap_tool — Convert a six-face cube map into a single spheremap image.

The spheremap is the paraboloid-style environment map used for reflection
lookups: every direction around the viewer lands somewhere in one square
image, with the +Z pole at the center and the -Z pole around the rim.

Usage:
    python scripts/spheremap_tool [opts] [-] input_prefix input_extension
    python -m spheremap_tool.diagrams --output-dir out/

Requires: pip install numpy Pillow matplotlib
"""

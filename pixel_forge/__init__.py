"""Pixel-art sprite assembly engine.

``pixel_forge`` builds small straight-alpha RGBA sprites in memory, composites
them into multi-part characters and packs the results into sprite sheets.
Every operation is a synchronous, in-memory transformation; file formats are
only touched at the edges (see :mod:`pixel_forge.utils.image`).

Layout:

* :mod:`pixel_forge.components` - value types (pixel buffer, colors, layers,
    anchors, parts).
* :mod:`pixel_forge.utils` - rasterizer primitives, outlines, palettes and the
    image codec boundary.
* :mod:`pixel_forge.renderer` - blend modes, alpha compositing, character
    assembly and sprite sheet packing.
* :mod:`pixel_forge.character` - color schemes, body templates, procedural
    parts, the part registry and the serializable character record.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

"""Rendering subpackage.

Turns buffers, layer stacks and equipped characters into flattened sprites:

* :mod:`pixel_forge.renderer.blend` - per-channel blend modes and the scalar
  straight-alpha "over" operator.
* :mod:`pixel_forge.renderer.composite` - vectorized layer flattening and the
  hard-edged binary-alpha policy used for characters.
* :mod:`pixel_forge.renderer.assembly` - z-ordered, anchor-placed character
  assembly with color scheme tinting.
* :mod:`pixel_forge.renderer.sheet` - sprite sheet packing and metadata.
"""

"""Character subpackage.

Everything needed to describe a character before it is rendered: color
variants and schemes, body templates and their anchors, procedural base
bodies and parts, the part registry, the immutable :class:`Character` record
with its JSON persistence, and multi-direction views.

See :mod:`pixel_forge.renderer.assembly` for how the pieces are flattened
into a sprite.
"""
